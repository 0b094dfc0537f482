"""In-process change feed.

Committed writes on any SQLModel table are published here by the session
listeners in ``nagarconnect.db.db``. Subscribers receive every event for
their table at least once; there is no ordering guarantee across writers.
"""
import asyncio
import logging
import threading
from collections import defaultdict
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

ALL_TABLES = "*"

_CLOSED = object()


@dataclass(frozen=True)
class ChangeEvent:
    table: str
    type: str  # INSERT, UPDATE or DELETE
    record_id: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)


class Subscription:
    """Async iterator over change events for one table."""

    def __init__(self, feed: "ChangeFeed", table: str, loop: asyncio.AbstractEventLoop):
        self.table = table
        self._feed = feed
        self._loop = loop
        self._queue: asyncio.Queue = asyncio.Queue()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _deliver(self, item) -> bool:
        try:
            self._loop.call_soon_threadsafe(self._queue.put_nowait, item)
        except RuntimeError:
            # owning loop is gone
            return False
        return True

    def __aiter__(self):
        return self

    async def __anext__(self) -> ChangeEvent:
        if self._closed and self._queue.empty():
            raise StopAsyncIteration
        item = await self._queue.get()
        if item is _CLOSED:
            raise StopAsyncIteration
        return item

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._feed._remove(self)
        self._deliver(_CLOSED)


class ChangeFeed:
    def __init__(self):
        self._subscribers: Dict[str, List[Subscription]] = defaultdict(list)
        self._lock = threading.Lock()

    def subscribe(self, table: str) -> Subscription:
        """Must be called from a running event loop; events are delivered to it."""
        subscription = Subscription(self, table, asyncio.get_running_loop())
        with self._lock:
            self._subscribers[table].append(subscription)
        logger.debug("subscribed to %s changes", table)
        return subscription

    def publish(self, event: ChangeEvent) -> None:
        """Thread-safe; sync route handlers publish from the threadpool."""
        with self._lock:
            targets = list(self._subscribers.get(event.table, ()))
            targets += self._subscribers.get(ALL_TABLES, ())
        for subscription in targets:
            if not subscription._deliver(event):
                self._remove(subscription)

    def subscriber_count(self, table: str) -> int:
        with self._lock:
            return len(self._subscribers.get(table, ()))

    def _remove(self, subscription: Subscription) -> None:
        with self._lock:
            subs = self._subscribers.get(subscription.table)
            if subs and subscription in subs:
                subs.remove(subscription)
