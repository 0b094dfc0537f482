import asyncio

from nagarconnect.realtime.controller import RealtimeRefreshController
from nagarconnect.realtime.feed import ChangeEvent, ChangeFeed

DEBOUNCE = 0.02


def make_controller(feed, poll_interval=None, fail=False):
    calls = []

    async def fetch():
        calls.append(1)
        if fail and len(calls) > 1:
            raise RuntimeError("backend unavailable")
        return [f"issue-{len(calls)}"]

    controller = RealtimeRefreshController(
        fetch, feed, table="issues", poll_interval=poll_interval, debounce=DEBOUNCE,
    )
    return controller, calls


def change():
    return ChangeEvent("issues", "UPDATE", "42")


def test_start_fetches_once():
    async def scenario():
        controller, calls = make_controller(ChangeFeed())
        async with controller:
            await asyncio.sleep(DEBOUNCE * 3)
        return controller, calls

    controller, calls = asyncio.run(scenario())

    assert len(calls) == 1
    assert controller.items == ["issue-1"]


def test_one_event_one_refetch():
    async def scenario():
        feed = ChangeFeed()
        controller, calls = make_controller(feed)
        async with controller:
            feed.publish(change())
            await asyncio.sleep(DEBOUNCE * 5)
        return controller, calls

    controller, calls = asyncio.run(scenario())

    assert len(calls) == 2
    assert controller.items == ["issue-2"]


def test_burst_is_coalesced():
    async def scenario():
        feed = ChangeFeed()
        controller, calls = make_controller(feed)
        async with controller:
            for _ in range(5):
                feed.publish(change())
            await asyncio.sleep(DEBOUNCE * 5)
        return calls

    calls = asyncio.run(scenario())

    assert len(calls) == 2


def test_poll_timer_refetches():
    async def scenario():
        controller, calls = make_controller(ChangeFeed(), poll_interval=0.03)
        async with controller:
            await asyncio.sleep(0.1)
        return calls

    calls = asyncio.run(scenario())

    assert len(calls) >= 3


def test_no_fetch_after_stop():
    async def scenario():
        feed = ChangeFeed()
        controller, calls = make_controller(feed, poll_interval=0.01)
        await controller.start()
        feed.publish(change())
        await controller.stop()
        stopped_at = len(calls)

        feed.publish(change())
        await asyncio.sleep(0.05)
        return controller, calls, stopped_at, feed.subscriber_count("issues")

    controller, calls, stopped_at, subscribers = asyncio.run(scenario())

    assert not controller.running
    assert len(calls) == stopped_at
    assert subscribers == 0


def test_failed_refetch_keeps_last_items():
    async def scenario():
        feed = ChangeFeed()
        controller, calls = make_controller(feed, fail=True)
        async with controller:
            feed.publish(change())
            await asyncio.sleep(DEBOUNCE * 5)
        return controller, calls

    controller, calls = asyncio.run(scenario())

    assert len(calls) == 2
    assert controller.items == ["issue-1"]
    assert controller.refresh_count == 1
