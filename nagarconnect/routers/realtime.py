import asyncio
import logging

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect, status
from sqlmodel import SQLModel

from nagarconnect.db.db import Database, get_database
from nagarconnect.realtime.feed import ALL_TABLES, Subscription

logger = logging.getLogger(__name__)

router = APIRouter()


async def _forward(websocket: WebSocket, subscription: Subscription) -> None:
    async for event in subscription:
        await websocket.send_json(event.to_dict())


@router.websocket("/{table}")
async def table_changes(websocket: WebSocket, table: str, db: Database = Depends(get_database)):
    """Stream INSERT/UPDATE/DELETE events for one table (``*`` for all)."""
    if table != ALL_TABLES and table not in SQLModel.metadata.tables:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    subscription = db.feed.subscribe(table)
    forwarder = None
    try:
        await websocket.accept()
        forwarder = asyncio.create_task(_forward(websocket, subscription))
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.debug("change stream for %s closed", table)
    finally:
        subscription.close()
        if forwarder is not None:
            forwarder.cancel()
            await asyncio.gather(forwarder, return_exceptions=True)
