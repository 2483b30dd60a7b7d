"""Built-in validation rules.

A rule receives the submitted value and the field's label, and returns
the message to show in the field's error slot, or ``None``::

    def rule(value: str, label: str) -> str | None: ...

The label is the one given to ``FeedbackController.register()``, so a
message names the field it belongs to. That matters once it also appears
in the error summary, away from the input. Messages say what to do,
not what went wrong.

Parameterized rules are factories that return a rule.
"""

import re
from collections.abc import Callable

type Validator = Callable[[str, str], str | None]


def _inline(label: str) -> str:
    """Lower-case a label for use mid-sentence, leaving acronyms alone."""
    if len(label) > 1 and label[1].isupper():
        return label
    return label[:1].lower() + label[1:]


def required(value: str, label: str) -> str | None:
    """Field must be present and non-empty."""
    if not value or not value.strip():
        return f"Enter {_inline(label)}"
    return None


def min_length(n: int) -> Validator:
    """Value must be at least *n* characters."""

    def check(value: str, label: str) -> str | None:
        if len(value) < n:
            return f"{label} must be {n} characters or more"
        return None

    return check


def max_length(n: int) -> Validator:
    """Value must be at most *n* characters."""

    def check(value: str, label: str) -> str | None:
        if len(value) > n:
            return f"{label} must be {n} characters or fewer"
        return None

    return check


# Structure only, not deliverability
_EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}$")


def email(value: str, label: str) -> str | None:
    """Value must look like an email address."""
    if not _EMAIL_RE.match(value):
        return f"Enter {_inline(label)} in the correct format, like name@example.com"
    return None


def matches(pattern: str, hint: str | None = None) -> Validator:
    """Value must match *pattern*. *hint* says what the format is."""
    compiled = re.compile(pattern)

    def check(value: str, label: str) -> str | None:
        if compiled.match(value):
            return None
        if hint:
            return f"{label} must {hint}"
        return f"{label} is not in the correct format"

    return check


def one_of(*choices: str) -> Validator:
    """Value must be one of *choices* (radios, selects)."""
    allowed = frozenset(choices)

    def check(value: str, label: str) -> str | None:
        if value not in allowed:
            return f"Select {_inline(label)}"
        return None

    return check
