"""Wren exception hierarchy.

Shared by the controller, renderer, and config so every module raises
and catches the same types.
"""


class WrenError(Exception):
    """Base for all wren-specific errors."""


class ConfigurationError(WrenError):
    """Raised when feedback configuration or a registration is invalid."""


class FieldError(WrenError):
    """An error tied to a single form field."""

    def __init__(self, field_id: str, detail: str = "") -> None:
        self.field_id = field_id
        self.detail = detail
        super().__init__(detail or field_id)


class UnknownFieldError(FieldError):
    """An operation referenced a field id that was never registered.

    Raised before any state is touched, so the controller is unchanged.
    """

    def __init__(self, field_id: str) -> None:
        super().__init__(field_id, f"Unknown field: {field_id!r}")


class DuplicateFieldError(FieldError):
    """A field id was registered twice on the same controller."""

    def __init__(self, field_id: str) -> None:
        super().__init__(field_id, f"Field already registered: {field_id!r}")


class InvalidMessageError(FieldError):
    """``show_error()`` was called with an empty message."""

    def __init__(self, field_id: str) -> None:
        super().__init__(field_id, f"Error message for {field_id!r} must be non-empty")
