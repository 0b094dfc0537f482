import logging
from typing import Optional

from fastapi import Depends
from sqlalchemy import event
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine
from starlette.requests import HTTPConnection

from nagarconnect.realtime.feed import ChangeEvent, ChangeFeed

# Register every table on SQLModel.metadata
from nagarconnect.models import (  # noqa: F401
    approval_request,
    community_event,
    donation,
    emergency_alert,
    feedback,
    issue,
    local_stall,
    notification,
    upvote,
    user,
    volunteer,
)

logger = logging.getLogger(__name__)

_PENDING_CHANGES = "nagarconnect.pending_changes"


class Database:
    """Connection handle to the data platform.

    Built once by ``create_app`` and shared through ``app.state.db``; every
    session it opens publishes committed row changes to ``feed``.
    """

    def __init__(self, url: str, echo: bool = False, feed: Optional[ChangeFeed] = None):
        engine_kwargs = {"echo": echo, "pool_pre_ping": True}

        if url.startswith("sqlite"):
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if url in ("sqlite://", "sqlite:///:memory:"):
                engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs["pool_timeout"] = 30

        self.engine = create_engine(url, **engine_kwargs)
        self.feed = feed or ChangeFeed()

    def session(self) -> Session:
        session = Session(self.engine)
        event.listen(session, "after_flush", _collect_changes)
        event.listen(session, "after_commit", self._publish_changes)
        event.listen(session, "after_rollback", _discard_changes)
        return session

    def create_db_and_tables(self) -> None:
        SQLModel.metadata.create_all(self.engine)

    def dispose(self) -> None:
        self.engine.dispose()

    def _publish_changes(self, session: Session) -> None:
        changes = session.info.pop(_PENDING_CHANGES, [])
        for change in changes:
            self.feed.publish(change)


def _collect_changes(session: Session, flush_context) -> None:
    # new/dirty/deleted still hold their pre-flush contents here
    pending = session.info.setdefault(_PENDING_CHANGES, [])

    for obj in session.new:
        pending.append(_change("INSERT", obj))
    for obj in session.dirty:
        if session.is_modified(obj, include_collections=False):
            pending.append(_change("UPDATE", obj))
    for obj in session.deleted:
        pending.append(_change("DELETE", obj))


def _discard_changes(session: Session) -> None:
    session.info.pop(_PENDING_CHANGES, None)


def _change(kind: str, obj) -> ChangeEvent:
    record_id = getattr(obj, "id", None)
    return ChangeEvent(
        table=obj.__tablename__,
        type=kind,
        record_id=str(record_id) if record_id is not None else None,
    )


def get_database(conn: HTTPConnection) -> Database:
    return conn.app.state.db


def get_session(db: Database = Depends(get_database)):
    with db.session() as session:
        yield session
