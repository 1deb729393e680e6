"""
Domain exceptions for the booklist controllers.

Notes
-----
Expected failure modes map to a domain exception with a user-facing message.
Handlers show `str(exc)` directly, so messages are written for the end user.
"""

from __future__ import annotations


class CatalogError(RuntimeError):
    """Base exception for all booklist domain failures."""


class PreconditionError(CatalogError):
    """Raised when a user action is refused before any remote call."""


class SelectionError(PreconditionError):
    """Raised when an action needs exactly one selected Author."""


class OperationInFlightError(PreconditionError):
    """Raised when an entity set already has an unacknowledged operation."""


class PayloadValidationError(CatalogError):
    """Raised when raw form input cannot be turned into a valid payload."""


class DialogError(CatalogError):
    """Base error for dialog lifecycle violations."""


class DialogBusyError(DialogError):
    """Raised when a dialog slot already holds an open dialog."""


class MissingEditContextError(DialogError):
    """Raised when an Edit dialog is requested without an edit session."""


class DialogNotOpenError(DialogError):
    """Raised when a confirm handler runs with no open dialog."""
