"""Feedback events — change notifications for the rendering layer.

Every state change the controller makes is published as a frozen event
through a ``FeedbackBus``. Two kinds of consumers are supported:

- **Listeners** are plain callables, invoked synchronously in the order
  they were added. Use them to re-render in-process.
- **Subscribers** are async iterators backed by their own
  ``asyncio.Queue``. Use them from SSE routes to push out-of-band swaps::

      async def stream():
          async for event in bus.subscribe():
              html = renderer.render_event(event)
              if html:
                  yield html
"""

import asyncio
import contextlib
import logging
import threading
from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass

from wren.fields import ErrorSummary

logger = logging.getLogger("wren.events")


@dataclass(frozen=True, slots=True)
class SlotChanged:
    """A field's message slot changed content or visibility."""

    field_id: str
    message_id: str
    message: str
    visible: bool


@dataclass(frozen=True, slots=True)
class SummaryChanged:
    """The form-level error summary was rebuilt with different entries."""

    summary: ErrorSummary


@dataclass(frozen=True, slots=True)
class FocusRequested:
    """The user agent should move focus to the element with ``target_id``."""

    target_id: str


type FeedbackEvent = SlotChanged | SummaryChanged | FocusRequested
type Listener = Callable[[FeedbackEvent], None]


class FeedbackBus:
    """Broadcast channel for feedback events.

    Listener exceptions propagate to whoever triggered the event.
    Subscriber queues are bounded; a full queue drops the event for that
    subscriber only.
    """

    __slots__ = ("_listeners", "_lock", "_queue_size", "_subscribers")

    def __init__(self, queue_size: int = 256) -> None:
        self._listeners: list[Listener] = []
        self._subscribers: set[asyncio.Queue[FeedbackEvent | None]] = set()
        self._queue_size = queue_size
        self._lock = threading.Lock()

    def listen(self, listener: Listener) -> Callable[[], None]:
        """Add a synchronous listener. Returns a callable that removes it."""
        with self._lock:
            self._listeners.append(listener)

        def unlisten() -> None:
            with self._lock, contextlib.suppress(ValueError):
                self._listeners.remove(listener)

        return unlisten

    def emit(self, event: FeedbackEvent) -> None:
        """Deliver *event* to every listener, then every subscriber queue."""
        with self._lock:
            listeners = list(self._listeners)
            queues = set(self._subscribers)
        for listener in listeners:
            listener(event)
        for queue in queues:
            try:
                queue.put_nowait(event)
            except asyncio.QueueFull:
                logger.warning("Dropping %s for slow subscriber", type(event).__name__)

    async def subscribe(self) -> AsyncIterator[FeedbackEvent]:
        """Subscribe to feedback events.

        Yields events as they are emitted. The subscription is removed
        when the iterator exits or ``close()`` is called.
        """
        queue: asyncio.Queue[FeedbackEvent | None] = asyncio.Queue(maxsize=self._queue_size)
        with self._lock:
            self._subscribers.add(queue)
        try:
            while True:
                event = await queue.get()
                if event is None:
                    break
                yield event
        finally:
            with self._lock:
                self._subscribers.discard(queue)

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def close(self) -> None:
        """Signal all subscribers to stop.

        Listeners stay attached; only async iterators are ended. A full
        queue loses its oldest pending event to make room for the stop
        signal.
        """
        with self._lock:
            queues = set(self._subscribers)
            self._subscribers.clear()
        for queue in queues:
            try:
                queue.put_nowait(None)
            except asyncio.QueueFull:
                queue.get_nowait()
                queue.put_nowait(None)
                logger.warning("Dropped a pending event to close a full subscriber queue")
