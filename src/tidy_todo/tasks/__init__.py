"""
Task subsystem.

Components:
- task_models.py: data structures (Task, CompletedTask, Classification, TaskSnapshot)
- task_errors.py: validation / not-found / storage error taxonomy
- due_dates.py: midnight-truncated date arithmetic and display helpers
- task_codec.py: JSON encoding with lenient per-entry decoding
- task_store.py: TaskStore, owner of the pending and completed collections
- task_scheduler.py: periodic retention cleanup
- task_runner.py: background event loop hosting the store for blocking frontends
"""
