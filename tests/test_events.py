"""Tests for wren.events — listeners and async subscribers."""

import asyncio
import logging
from collections.abc import AsyncIterator

import pytest

from wren.controller import FeedbackController
from wren.events import FeedbackBus, FeedbackEvent, FocusRequested, SlotChanged, SummaryChanged
from wren.fields import ErrorSummary
from wren.validation import required, validate


async def _next(stream: AsyncIterator[FeedbackEvent]) -> FeedbackEvent:
    return await anext(stream)


def _slot_event(message: str = "Enter a valid email") -> SlotChanged:
    return SlotChanged(field_id="email", message_id="email-error", message=message, visible=True)


class TestListeners:
    def test_called_in_order(self) -> None:
        bus = FeedbackBus()
        calls: list[str] = []
        bus.listen(lambda e: calls.append("first"))
        bus.listen(lambda e: calls.append("second"))
        bus.emit(FocusRequested(target_id="email"))
        assert calls == ["first", "second"]

    def test_unlisten(self) -> None:
        bus = FeedbackBus()
        events: list[FeedbackEvent] = []
        unlisten = bus.listen(events.append)
        unlisten()
        unlisten()
        bus.emit(FocusRequested(target_id="email"))
        assert events == []

    def test_listener_error_propagates_after_state_change(self) -> None:
        controller = FeedbackController()
        controller.register("email")

        def boom(event: FeedbackEvent) -> None:
            raise RuntimeError("render failed")

        controller.bus.listen(boom)
        with pytest.raises(RuntimeError, match="render failed"):
            controller.show_error("email", "Enter a valid email")
        assert controller.slot("email").visible is True
        assert controller.summary.pairs() == [("email", "Enter a valid email")]

    def test_listener_error_during_apply_leaves_batch_complete(self) -> None:
        controller = FeedbackController()
        controller.register("name")
        controller.register("email")

        def boom(event: FeedbackEvent) -> None:
            raise RuntimeError("render failed")

        controller.bus.listen(boom)
        with pytest.raises(RuntimeError, match="render failed"):
            controller.apply(validate({}, {"name": [required], "email": [required]}))

        assert controller.slot("name").visible is True
        assert controller.slot("email").visible is True
        assert controller.summary.pairs() == [("name", "Enter name"), ("email", "Enter email")]

    def test_listener_sees_finished_state(self) -> None:
        controller = FeedbackController()
        controller.register("name")
        controller.register("email")
        seen: list[list[tuple[str, str]]] = []
        controller.bus.listen(lambda event: seen.append(controller.summary.pairs()))

        controller.apply(validate({}, {"name": [required], "email": [required]}))

        assert seen
        assert all(len(pairs) == 2 for pairs in seen)

    def test_events_are_frozen(self) -> None:
        event = SummaryChanged(summary=ErrorSummary())
        with pytest.raises(AttributeError):
            event.summary = ErrorSummary()  # type: ignore[misc]


class TestSubscribers:
    @pytest.mark.anyio
    async def test_receives_events_until_closed(self) -> None:
        bus = FeedbackBus()
        received: list[FeedbackEvent] = []

        async def consume() -> None:
            async for event in bus.subscribe():
                received.append(event)

        task = asyncio.create_task(consume())
        while bus.subscriber_count == 0:
            await asyncio.sleep(0)

        bus.emit(_slot_event())
        bus.emit(FocusRequested(target_id="email"))
        bus.close()
        await asyncio.wait_for(task, timeout=1.0)

        assert received == [_slot_event(), FocusRequested(target_id="email")]
        assert bus.subscriber_count == 0

    @pytest.mark.anyio
    async def test_controller_changes_reach_subscriber(self) -> None:
        controller = FeedbackController()
        controller.register("email")
        received: list[FeedbackEvent] = []

        async def consume() -> None:
            async for event in controller.bus.subscribe():
                received.append(event)

        task = asyncio.create_task(consume())
        while controller.bus.subscriber_count == 0:
            await asyncio.sleep(0)

        controller.show_error("email", "Enter a valid email")
        controller.bus.close()
        await asyncio.wait_for(task, timeout=1.0)

        assert [type(e) for e in received] == [SlotChanged, SummaryChanged, FocusRequested]

    @pytest.mark.anyio
    async def test_full_queue_drops_and_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        bus = FeedbackBus(queue_size=1)
        stream = bus.subscribe()
        first = asyncio.create_task(_next(stream))
        while bus.subscriber_count == 0:
            await asyncio.sleep(0)

        with caplog.at_level(logging.WARNING, logger="wren.events"):
            bus.emit(_slot_event("one"))
            bus.emit(_slot_event("two"))

        assert (await first) == _slot_event("one")
        assert "slow subscriber" in caplog.text
        await stream.aclose()
        assert bus.subscriber_count == 0

    @pytest.mark.anyio
    async def test_close_ends_subscriber_with_full_queue(self) -> None:
        bus = FeedbackBus(queue_size=1)
        received: list[FeedbackEvent] = []

        async def consume() -> None:
            async for event in bus.subscribe():
                received.append(event)

        task = asyncio.create_task(consume())
        while bus.subscriber_count == 0:
            await asyncio.sleep(0)

        bus.emit(_slot_event("one"))
        bus.close()
        await asyncio.wait_for(task, timeout=1.0)

        assert task.done()
        assert received == []
        assert bus.subscriber_count == 0
