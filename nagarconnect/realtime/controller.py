import asyncio
import logging
from typing import Awaitable, Callable, List, Optional

from nagarconnect.realtime.feed import ChangeFeed, Subscription

logger = logging.getLogger(__name__)

Fetch = Callable[[], Awaitable[list]]
OnRefresh = Callable[[list], Awaitable[None]]


class RealtimeRefreshController:
    """Keeps a list eventually consistent with a table.

    Every change event and every poll tick triggers a full re-fetch that
    replaces ``items``. Events arriving within ``debounce`` seconds of each
    other are coalesced into one re-fetch; an event that arrives while a
    re-fetch is running schedules exactly one more.
    """

    def __init__(
        self,
        fetch: Fetch,
        source: ChangeFeed,
        table: str = "issues",
        poll_interval: Optional[float] = 30.0,
        debounce: float = 0.25,
        on_refresh: Optional[OnRefresh] = None,
    ):
        self.fetch = fetch
        self.source = source
        self.table = table
        self.poll_interval = poll_interval
        self.debounce = debounce
        self.on_refresh = on_refresh

        self.items: List = []
        self.refresh_count = 0

        self._running = False
        self._subscription: Optional[Subscription] = None
        self._listener: Optional[asyncio.Task] = None
        self._poller: Optional[asyncio.Task] = None
        self._pending: Optional[asyncio.Task] = None
        self._window_open = False
        self._rerun = False

    @property
    def running(self) -> bool:
        return self._running

    async def start(self) -> None:
        if self._running:
            return
        self._running = True

        # subscribe before the first fetch
        self._subscription = self.source.subscribe(self.table)
        await self.refresh()

        self._listener = asyncio.create_task(self._listen())
        if self.poll_interval:
            self._poller = asyncio.create_task(self._poll())

    async def stop(self) -> None:
        if not self._running:
            return
        self._running = False

        if self._subscription is not None:
            self._subscription.close()

        tasks = [t for t in (self._listener, self._poller, self._pending) if t is not None]
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

        self._subscription = self._listener = self._poller = self._pending = None

    async def __aenter__(self) -> "RealtimeRefreshController":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()

    async def refresh(self) -> None:
        if not self._running:
            return
        try:
            items = await self.fetch()
        except Exception:
            logger.exception("re-fetch of %s failed", self.table)
            return

        self.items = list(items)
        self.refresh_count += 1

        if self.on_refresh is not None:
            await self.on_refresh(self.items)

    def notify(self) -> None:
        """Treat the table as changed: schedule one (debounced) re-fetch."""
        if not self._running:
            return
        if self._pending is not None and not self._pending.done():
            if not self._window_open:
                self._rerun = True
            return
        self._pending = asyncio.create_task(self._debounced_refresh())

    async def _debounced_refresh(self) -> None:
        while True:
            self._window_open = True
            if self.debounce > 0:
                await asyncio.sleep(self.debounce)
            self._window_open = False
            self._rerun = False

            await self.refresh()

            if not self._rerun:
                return

    async def _listen(self) -> None:
        async for event in self._subscription:
            logger.debug("%s change on %s", event.type, event.table)
            self.notify()

    async def _poll(self) -> None:
        while self._running:
            await asyncio.sleep(self.poll_interval)
            await self.refresh()
