# core/exceptions.py

"""
Exceptions raised by the models and core helpers.

`HomeworkTracker` and `Controller` catch these and translate them into failed
`Response` objects; the CLI never sees them directly.
"""


class ValidationError(ValueError):
    """A required value is missing or blank (e.g., an empty assignment name)."""


class StorageError(OSError):
    """The backing key-value store could not be read or written."""
