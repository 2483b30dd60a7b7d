"""Validation results, one outcome per field in form order."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FieldOutcome:
    """What validating one field produced.

    ``message`` is the first failing rule's message, or None if the
    field passed.
    """

    field_id: str
    value: str
    message: str | None = None

    @property
    def passed(self) -> bool:
        return self.message is None


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """The outcome of validating a form, falsy when any field failed::

        result = validate(form, rules)
        if not result:
            controller.apply(result)

    ``outcomes`` follows the order the fields were validated in, which
    is registration order when produced by ``FeedbackController.check()``.
    """

    outcomes: tuple[FieldOutcome, ...] = ()

    @property
    def is_valid(self) -> bool:
        """True if every field passed."""
        return all(o.passed for o in self.outcomes)

    @property
    def data(self) -> dict[str, str]:
        """Values of the fields that passed."""
        return {o.field_id: o.value for o in self.outcomes if o.passed}

    @property
    def errors(self) -> dict[str, str]:
        """Failing fields mapped to their messages."""
        return {o.field_id: o.message for o in self.outcomes if o.message is not None}

    @property
    def checked(self) -> tuple[str, ...]:
        """Every field id covered, passing or failing, in order."""
        return tuple(o.field_id for o in self.outcomes)

    def outcome(self, field_id: str) -> FieldOutcome | None:
        for o in self.outcomes:
            if o.field_id == field_id:
                return o
        return None

    def first_error(self, field_id: str) -> str | None:
        """The message to show for *field_id*, or None if it passed or wasn't checked."""
        o = self.outcome(field_id)
        return o.message if o is not None else None

    def __bool__(self) -> bool:
        return self.is_valid
