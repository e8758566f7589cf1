"""
Task subsystem.

Components:
- task_models.py: data structures (Task, AlertState, InvalidInput)
- task_store.py: thread-safe in-memory storage + time-windowed queries
- task_scheduler.py: periodic scanner that fires reminder/deadline notifications
- task_api.py: form parsing/validation helpers used by the presentation layer
"""
