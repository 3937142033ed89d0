"""
errors.py

Error types raised by the schema builder core.

All of them are local precondition failures. They subclass ValueError
so the API layer can turn them into HTTP 400 responses the same way it
handles any other bad input.
"""

from typing import Optional


class SchemaBuilderError(ValueError):
    """Base class for every schema builder error."""


class InvalidFieldTree(SchemaBuilderError):
    """
    A field tree breaks a structural rule.

    `path` is the dotted location of the offending field
    (for example "line_items.items.quantity").
    """

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        if path:
            message = f"{path}: {message}"
        super().__init__(message)


class InvalidOperation(SchemaBuilderError):
    """An edit operation was called on a field of the wrong type."""


class UnknownTemplate(SchemaBuilderError):
    """The template key is not part of the catalog."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Unknown template: {key!r}")
