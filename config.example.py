# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Nothing here is secret; copy the variables you want to change into .env.

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TIDY_APP_NAME": "App display name (default: tidy-todo).",
    "TIDY_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Paths (gitignored)
    "TIDY_DATA_DIR": "Local data directory for logs (default: .local/tidy_todo).",
    "TIDY_STORAGE_DIR": "Directory of the JSON key-value files (default: <data_dir>/storage).",
    # Storage keys
    "TIDY_PENDING_KEY": "Storage key of the pending task list (default: todo.pending).",
    "TIDY_COMPLETED_KEY": "Storage key of the completed task list (default: todo.completed).",
    # Task rules
    "TIDY_MAX_TASK_LENGTH": "Maximum task text length after trimming (default: 50).",
    "TIDY_HIGH_PRIORITY_DAYS": "Tasks due within this many days are high priority (default: 7).",
    "TIDY_RETENTION_DAYS": "Days a completed task is kept before cleanup (default: 30).",
    "TIDY_CLEANUP_INTERVAL_SECONDS": "Period of the retention cleanup (default: 86400).",
    # Display
    "TIDY_DATE_FORMAT": "strftime pattern for displayed dates (default: %d/%m/%Y).",
}
