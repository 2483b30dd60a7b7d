"""Feedback configuration.

FeedbackConfig is a frozen dataclass — immutable after creation, checked
once on construction, no string-key dict lookups.
"""

from dataclasses import dataclass

from wren.errors import ConfigurationError

FOCUS_TARGETS = frozenset({"field", "summary", "none"})


@dataclass(frozen=True, slots=True)
class FeedbackConfig:
    """Feedback configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = FeedbackConfig(focus_target="summary", summary_title="Fix these")
    """

    # Ids
    message_id_suffix: str = "-error"  # "<field_id>-error" unless registered explicitly
    summary_id: str = "error-summary"

    # Summary
    summary_title: str = "There is a problem"
    summary_heading_level: int = 2

    # Focus: where focus goes after errors are shown
    focus_target: str = "field"  # "field" | "summary" | "none"

    # Markup
    error_class: str = "field-error"
    summary_class: str = "error-summary"

    # Async subscribers
    subscriber_queue_size: int = 256

    def __post_init__(self) -> None:
        if self.focus_target not in FOCUS_TARGETS:
            options = ", ".join(sorted(FOCUS_TARGETS))
            msg = f"focus_target must be one of: {options} (got {self.focus_target!r})"
            raise ConfigurationError(msg)
        if not self.message_id_suffix:
            raise ConfigurationError("message_id_suffix must be non-empty")
        if not self.summary_id:
            raise ConfigurationError("summary_id must be non-empty")
        if not 1 <= self.summary_heading_level <= 6:
            msg = f"summary_heading_level must be 1-6 (got {self.summary_heading_level})"
            raise ConfigurationError(msg)
        if self.subscriber_queue_size < 1:
            raise ConfigurationError("subscriber_queue_size must be at least 1")

    def message_id_for(self, field_id: str) -> str:
        """Default message-container id for *field_id*."""
        return f"{field_id}{self.message_id_suffix}"
