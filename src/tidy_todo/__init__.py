"""tidy-todo: a due-date aware to-do list with local persistence."""

__version__ = "0.1.0"
