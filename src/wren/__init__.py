"""Wren — accessible form feedback for server-rendered HTML.

Keeps every field's ``aria-invalid`` state, its error message and the
form-level error summary in agreement, and tells the page when any of
them change.

Basic usage::

    from wren import FeedbackController, FeedbackRenderer

    controller = FeedbackController()
    controller.register("email", label="Email address")
    controller.show_error("email", "Enter a valid email")

    renderer = FeedbackRenderer(controller)
    renderer.render_summary()

With validation rules::

    from wren.validation import required, email

    controller.check(form, {"email": [required, email]})
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "DuplicateFieldError",
    "ErrorMessageSlot",
    "ErrorSummary",
    "FeedbackBus",
    "FeedbackConfig",
    "FeedbackController",
    "FeedbackRenderer",
    "Field",
    "FocusRequested",
    "InvalidMessageError",
    "SlotChanged",
    "SummaryChanged",
    "SummaryEntry",
    "UnknownFieldError",
    "Validity",
    "WrenError",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wren`` free of the template engine until rendering
    is actually used.
    """
    if name == "FeedbackController":
        from wren.controller import FeedbackController

        return FeedbackController

    if name == "FeedbackRenderer":
        from wren.render import FeedbackRenderer

        return FeedbackRenderer

    if name == "FeedbackConfig":
        from wren.config import FeedbackConfig

        return FeedbackConfig

    if name in ("FeedbackBus", "FocusRequested", "SlotChanged", "SummaryChanged"):
        from wren import events as _events

        return getattr(_events, name)

    if name in ("ErrorMessageSlot", "ErrorSummary", "Field", "SummaryEntry", "Validity"):
        from wren import fields as _fields

        return getattr(_fields, name)

    if name in (
        "ConfigurationError",
        "DuplicateFieldError",
        "InvalidMessageError",
        "UnknownFieldError",
        "WrenError",
    ):
        from wren import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
