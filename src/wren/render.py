"""HTML rendering of feedback state via kida.

``FeedbackRenderer`` turns controller state into the markup assistive
technology needs:

- inputs carry ``aria-describedby`` pointing at their message container,
  and ``aria-invalid="true"`` only while their message is shown
- message containers are ``role="alert"`` live regions, present in the
  page from the start and toggled with ``hidden``
- the error summary is a focusable ``role="alert"`` region whose entries
  link to the failing inputs

Templates are compiled once per renderer. Pass an existing kida
``Environment`` to share filters and globals with the application's own
templates::

    renderer = FeedbackRenderer(controller, env=app_env)
    # in a template:  <input name="email"{{ field_attrs("email") }}>

The renderer registers the ``wren_attr`` and ``aria_attrs`` filters and
the ``field_attrs``, ``error_slot`` and ``error_summary`` globals; a host
environment's own ``attr`` filter is left as it is.
"""

import html
from collections.abc import Mapping
from typing import Any

from kida import Environment
from kida.template import Markup

from wren.controller import FeedbackController
from wren.events import FeedbackEvent, SlotChanged, SummaryChanged
from wren.fields import ErrorMessageSlot, ErrorSummary


def attr(value: Any, name: str) -> str | Markup:
    """Output an HTML attribute when value is truthy, else empty string.

    Example:
        <p{{ css_class | wren_attr("class") }}>
        → <p class="field-error">   (when css_class is "field-error")
        → <p>                       (when css_class is None or "")
    """
    if not value:
        return ""
    return Markup(f' {name}="{html.escape(str(value))}"')


def aria_attrs(attrs: Mapping[str, Any]) -> Markup:
    """Render a mapping of attributes, skipping ``None`` and ``False``.

    ``True`` renders as the string ``"true"``, matching ARIA's token
    values rather than HTML boolean attributes.

    Example:
        {{ {"aria-invalid": invalid, "aria-describedby": "email-error"} | aria_attrs }}
        → aria-invalid="true" aria-describedby="email-error"
    """
    parts: list[str] = []
    for name, value in attrs.items():
        if value is None or value is False:
            continue
        text = "true" if value is True else str(value)
        parts.append(f' {html.escape(name, quote=True)}="{html.escape(text, quote=True)}"')
    return Markup("".join(parts))


FEEDBACK_FILTERS: dict[str, Any] = {
    "aria_attrs": aria_attrs,
    "wren_attr": attr,
}


_SLOT_SOURCE = (
    '<p id="{{ slot.message_id }}"{{ error_class | wren_attr("class") }} role="alert"'
    '{% if oob %} hx-swap-oob="true"{% end %}'
    "{% if not slot.visible %} hidden{% end %}>"
    "{{ slot.message }}</p>"
)

_SUMMARY_SOURCE = (
    '<div id="{{ summary_id }}"{{ summary_class | wren_attr("class") }} role="alert" tabindex="-1"'
    ' aria-labelledby="{{ summary_id }}-title"'
    '{% if oob %} hx-swap-oob="true"{% end %}'
    "{% if not summary.visible %} hidden{% end %}>"
    '<h{{ level }} id="{{ summary_id }}-title">{{ title }}</h{{ level }}>'
    "<ul>"
    '{% for entry in summary.entries %}<li><a href="#{{ entry.field_id }}">{{ entry.message }}</a></li>{% end %}'
    "</ul>"
    "</div>"
)


class FeedbackRenderer:
    """Renders message slots, the error summary and input attributes."""

    __slots__ = ("_controller", "_env", "_slot_tpl", "_summary_tpl")

    def __init__(
        self,
        controller: FeedbackController,
        *,
        env: Environment | None = None,
    ) -> None:
        self._controller = controller
        self._env = env or Environment(autoescape=True)
        self._env.update_filters(FEEDBACK_FILTERS)
        self._env.add_global("field_attrs", self.input_attrs)
        self._env.add_global("error_slot", self.render_slot)
        self._env.add_global("error_summary", self.render_summary)
        self._slot_tpl = self._env.from_string(_SLOT_SOURCE)
        self._summary_tpl = self._env.from_string(_SUMMARY_SOURCE)

    @property
    def env(self) -> Environment:
        return self._env

    def input_attrs(self, field_id: str) -> Markup:
        """Attributes for the ``<input>`` of *field_id*.

        ``aria-describedby`` is always present so hint text stays linked;
        ``aria-invalid`` appears only while the field is invalid.
        """
        field = self._controller.field(field_id)
        return aria_attrs({
            "id": field.field_id,
            "aria-describedby": field.message_id,
            "aria-invalid": field.is_invalid,
        })

    def render_slot(self, field_id: str, *, oob: bool = False) -> Markup:
        """The message container for *field_id*."""
        return self._render_slot(self._controller.slot(field_id), oob=oob)

    def render_summary(self, *, oob: bool = False) -> Markup:
        """The form-level error summary, ``hidden`` when there are no errors."""
        return self._render_summary(self._controller.summary, oob=oob)

    def render_event(self, event: FeedbackEvent, *, oob: bool = True) -> Markup | None:
        """The fragment a change event affects, as it was when emitted.

        Returns None for events with no markup (focus requests).
        Defaults to out-of-band markup for htmx swaps.
        """
        if isinstance(event, SlotChanged):
            slot = ErrorMessageSlot(
                message_id=event.message_id,
                message=event.message,
                visible=event.visible,
            )
            return self._render_slot(slot, oob=oob)
        if isinstance(event, SummaryChanged):
            return self._render_summary(event.summary, oob=oob)
        return None

    def _render_slot(self, slot: ErrorMessageSlot, *, oob: bool) -> Markup:
        return Markup(
            self._slot_tpl.render({
                "slot": slot,
                "error_class": self._controller.config.error_class,
                "oob": oob,
            })
        )

    def _render_summary(self, summary: ErrorSummary, *, oob: bool) -> Markup:
        config = self._controller.config
        return Markup(
            self._summary_tpl.render({
                "summary": summary,
                "summary_id": config.summary_id,
                "summary_class": config.summary_class,
                "title": config.summary_title,
                "level": config.summary_heading_level,
                "oob": oob,
            })
        )
