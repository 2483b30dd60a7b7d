"""Field state — immutable snapshots of fields, slots, and the summary.

The controller owns the mutable mapping; everything it hands out is a
frozen dataclass, safe to keep across later mutations.
"""

from dataclasses import dataclass
from enum import Enum


class Validity(Enum):
    """Two-state validity flag of a field."""

    VALID = "valid"
    INVALID = "invalid"


@dataclass(frozen=True, slots=True)
class ErrorMessageSlot:
    """The container that shows a field's validation message.

    ``visible`` is True exactly when ``message`` is non-empty.
    """

    message_id: str
    message: str = ""
    visible: bool = False


@dataclass(frozen=True, slots=True)
class Field:
    """A registered form input and its current feedback state."""

    field_id: str
    slot: ErrorMessageSlot
    label: str | None = None

    @property
    def validity(self) -> Validity:
        return Validity.INVALID if self.slot.visible else Validity.VALID

    @property
    def is_invalid(self) -> bool:
        return self.slot.visible

    @property
    def message(self) -> str:
        return self.slot.message

    @property
    def message_id(self) -> str:
        return self.slot.message_id


@dataclass(frozen=True, slots=True)
class SummaryEntry:
    """One line of the error summary: a field and its message."""

    field_id: str
    message: str


@dataclass(frozen=True, slots=True)
class ErrorSummary:
    """Form-level list of current validation failures, in registration order.

    Falsy when empty, so ``if summary:`` reads as "any errors?".
    """

    entries: tuple[SummaryEntry, ...] = ()

    @property
    def visible(self) -> bool:
        return bool(self.entries)

    def pairs(self) -> list[tuple[str, str]]:
        """Entries as plain ``(field_id, message)`` tuples."""
        return [(e.field_id, e.message) for e in self.entries]

    def __len__(self) -> int:
        return len(self.entries)

    def __bool__(self) -> bool:
        return self.visible
