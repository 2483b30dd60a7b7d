"""Form validation — label-aware rules feeding the feedback controller.

Usage::

    from wren.validation import required, email

    controller.register("email", label="Email address")
    result = controller.check(form, {"email": [required, email]})
    # controller now shows "Enter email address" in #email-error

``validate()`` also works without a controller; labels then default to
the field id made readable (``confirm_password`` -> ``Confirm password``).
"""

from collections.abc import Mapping

from wren.validation.result import FieldOutcome, ValidationResult
from wren.validation.rules import (
    Validator,
    email,
    matches,
    max_length,
    min_length,
    one_of,
    required,
)

__all__ = [
    "FieldOutcome",
    "ValidationResult",
    "Validator",
    "default_label",
    "email",
    "matches",
    "max_length",
    "min_length",
    "one_of",
    "required",
    "validate",
]


def default_label(field_id: str) -> str:
    """Readable label for a field id: ``confirm_password`` -> ``Confirm password``."""
    words = field_id.replace("-", " ").replace("_", " ").split()
    return " ".join(words).capitalize() if words else field_id


def validate(
    data: Mapping[str, str],
    rules: Mapping[str, list[Validator]],
    *,
    labels: Mapping[str, str | None] | None = None,
) -> ValidationResult:
    """Validate *data* field by field, in the order of *rules*.

    A field stops at its first failing rule: the error slot shows one
    message at a time, and later rules rarely say anything useful about
    a value that already failed (``min_length`` on an empty string).

    Args:
        data: Field ids mapped to submitted values. Missing fields
            count as empty.
        rules: Field ids mapped to the rules to run, in order.
        labels: Field ids mapped to human labels used in messages.
    """
    labels = labels or {}
    outcomes: list[FieldOutcome] = []
    for field_id, validators in rules.items():
        value = data.get(field_id) or ""
        label = labels.get(field_id) or default_label(field_id)
        message: str | None = None
        for validator in validators:
            message = validator(value, label) or None
            if message is not None:
                break
        outcomes.append(FieldOutcome(field_id=field_id, value=value, message=message))
    return ValidationResult(outcomes=tuple(outcomes))
