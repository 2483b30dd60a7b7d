"""Form feedback controller — per-field error state and the error summary.

The controller is the single owner of a form's feedback state. Fields
are registered once, in page order; after that every change goes
through ``show_error()``, ``clear_error()`` or ``apply()``, each of
which keeps three things in lockstep:

- the field's validity (``aria-invalid``)
- its message slot (content + visibility)
- the form-level ``ErrorSummary``

Changes are published on ``controller.bus`` so a rendering layer can
re-render or push the affected fragments.

Example::

    controller = FeedbackController()
    controller.register("email", label="Email address")

    controller.show_error("email", "Enter a valid email")
    controller.summary.pairs()   # [("email", "Enter a valid email")]

    controller.clear_error("email")
    controller.summary.visible   # False

Execution is synchronous and single-threaded: callers run from one
event-handling context. Successive calls are last-write-wins.
"""

import logging
from collections.abc import Iterator, Mapping

from wren.config import FeedbackConfig
from wren.errors import (
    ConfigurationError,
    DuplicateFieldError,
    InvalidMessageError,
    UnknownFieldError,
)
from wren.events import (
    FeedbackBus,
    FeedbackEvent,
    FocusRequested,
    SlotChanged,
    SummaryChanged,
)
from wren.fields import ErrorMessageSlot, ErrorSummary, Field, SummaryEntry
from wren.validation import Validator, validate
from wren.validation.result import ValidationResult

logger = logging.getLogger("wren.controller")


class FeedbackController:
    """Keeps field validity, message slots and the error summary consistent."""

    __slots__ = ("_config", "_fields", "_summary", "bus")

    def __init__(
        self,
        config: FeedbackConfig | None = None,
        *,
        bus: FeedbackBus | None = None,
    ) -> None:
        self._config = config or FeedbackConfig()
        self._fields: dict[str, Field] = {}
        self._summary = ErrorSummary()
        self.bus = bus or FeedbackBus(queue_size=self._config.subscriber_queue_size)

    # -- Registration --

    def register(
        self,
        field_id: str,
        message_id: str | None = None,
        *,
        label: str | None = None,
    ) -> Field:
        """Register a field with a hidden, empty message slot.

        ``message_id`` is the id of the element that shows the message;
        it defaults to ``"<field_id>-error"``.
        """
        if not field_id:
            raise ConfigurationError("Field id must be non-empty")
        if field_id in self._fields:
            raise DuplicateFieldError(field_id)
        slot = ErrorMessageSlot(message_id=message_id or self._config.message_id_for(field_id))
        field = Field(field_id=field_id, slot=slot, label=label)
        self._fields[field_id] = field
        logger.debug("Registered field %s (message container %s)", field_id, slot.message_id)
        return field

    # -- Operations --
    #
    # Every operation writes all of its state before publishing any event.

    def show_error(self, field_id: str, message: str) -> None:
        """Show *message* for *field_id*, mark it invalid and request focus.

        Raises:
            UnknownFieldError: *field_id* was never registered.
            InvalidMessageError: *message* is empty or whitespace.

        Nothing is mutated when either error is raised.
        """
        self._require(field_id)
        if not isinstance(message, str) or not message.strip():
            raise InvalidMessageError(field_id)

        self._publish(
            self._write_slot(field_id, message),
            self._rebuild_summary(),
            self._focus(field_id),
        )

    def clear_error(self, field_id: str) -> None:
        """Hide the message for *field_id* and mark it valid.

        Idempotent: clearing an already-valid field emits nothing.
        """
        self._require(field_id)
        self._publish(self._write_slot(field_id, ""), self._rebuild_summary())

    def recompute_error_summary(self) -> ErrorSummary:
        """Rebuild the summary from current field state, in registration order.

        Notifies listeners only when the entries differ from the last summary.
        """
        self._publish(self._rebuild_summary())
        return self._summary

    def apply(self, result: ValidationResult) -> ErrorSummary:
        """Apply a validation result to every field it covers, as one batch.

        Failing fields show their message; passing fields are cleared;
        registered fields the result does not mention keep their state.
        Focus moves once, to the first invalid field in registration
        order, and the summary is rebuilt once.

        Raises:
            UnknownFieldError: the result covers a field that was never
                registered. Nothing is mutated.
        """
        for field_id in result.checked:
            self._require(field_id)

        events: list[FeedbackEvent | None] = []
        first_invalid: str | None = None
        for field_id in self._fields:
            outcome = result.outcome(field_id)
            if outcome is None:
                continue
            message = outcome.message if outcome.message and outcome.message.strip() else ""
            events.append(self._write_slot(field_id, message))
            if message and first_invalid is None:
                first_invalid = field_id

        events.append(self._rebuild_summary())
        if first_invalid is not None:
            events.append(self._focus(first_invalid))
        self._publish(*events)
        return self._summary

    def check(
        self,
        data: Mapping[str, str],
        rules: Mapping[str, list[Validator]],
    ) -> ValidationResult:
        """Validate *data* with each field's registered label, then ``apply()`` it.

        Fields are validated in registration order, whatever the order
        of *rules*, so the result lines up with the summary.

        Raises:
            UnknownFieldError: *rules* names a field that was never
                registered. Nothing is mutated.
        """
        for field_id in rules:
            self._require(field_id)
        ordered = {fid: rules[fid] for fid in self._fields if fid in rules}
        labels = {fid: self._fields[fid].label for fid in ordered}
        result = validate(data, ordered, labels=labels)
        self.apply(result)
        return result

    def reset(self) -> None:
        """Clear every field. The summary ends up hidden."""
        events = [self._write_slot(field_id, "") for field_id in self._fields]
        self._publish(*events, self._rebuild_summary())

    # -- Read access --

    @property
    def config(self) -> FeedbackConfig:
        return self._config

    @property
    def summary(self) -> ErrorSummary:
        """The most recently computed error summary."""
        return self._summary

    @property
    def fields(self) -> tuple[Field, ...]:
        """All registered fields, in registration order."""
        return tuple(self._fields.values())

    @property
    def is_valid(self) -> bool:
        """True when no field is invalid."""
        return not any(f.is_invalid for f in self._fields.values())

    def field(self, field_id: str) -> Field:
        return self._require(field_id)

    def slot(self, field_id: str) -> ErrorMessageSlot:
        return self._require(field_id).slot

    def __contains__(self, field_id: object) -> bool:
        return field_id in self._fields

    def __iter__(self) -> Iterator[Field]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self._fields)

    # -- Internals --

    def _require(self, field_id: str) -> Field:
        try:
            return self._fields[field_id]
        except KeyError:
            raise UnknownFieldError(field_id) from None

    def _write_slot(self, field_id: str, message: str) -> SlotChanged | None:
        # Validity is derived from slot visibility, so one write keeps both in step.
        field = self._fields[field_id]
        slot = ErrorMessageSlot(
            message_id=field.message_id,
            message=message,
            visible=bool(message),
        )
        if slot == field.slot:
            return None
        self._fields[field_id] = Field(field_id=field_id, slot=slot, label=field.label)
        logger.debug("Field %s is now %s", field_id, "invalid" if slot.visible else "valid")
        return SlotChanged(
            field_id=field_id,
            message_id=slot.message_id,
            message=slot.message,
            visible=slot.visible,
        )

    def _rebuild_summary(self) -> SummaryChanged | None:
        summary = ErrorSummary(
            entries=tuple(
                SummaryEntry(field_id=f.field_id, message=f.message)
                for f in self._fields.values()
                if f.is_invalid and f.message
            )
        )
        if summary == self._summary:
            return None
        self._summary = summary
        logger.debug("Error summary now has %d entries", len(summary))
        return SummaryChanged(summary=summary)

    def _focus(self, field_id: str) -> FocusRequested | None:
        match self._config.focus_target:
            case "field":
                return FocusRequested(target_id=field_id)
            case "summary":
                return FocusRequested(target_id=self._config.summary_id)
            case _:
                return None

    def _publish(self, *events: FeedbackEvent | None) -> None:
        for event in events:
            if event is not None:
                self.bus.emit(event)
