import logging
import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Query, Request, UploadFile, WebSocket, WebSocketDisconnect
from fastapi.concurrency import run_in_threadpool
from sqlmodel import Session

from nagarconnect import i18n
from nagarconnect.core.config import Settings
from nagarconnect.core.errors import ValidationError, request_language
from nagarconnect.db.db import Database, get_database, get_session
from nagarconnect.models.user import User
from nagarconnect.realtime.controller import RealtimeRefreshController
from nagarconnect.schemas.issue_schemas import (
    FeedbackCreateSchema,
    IssueCreateSchema,
    IssueRead,
    IssueStats,
    MapView,
    PhotoUploadResult,
    UpvoteResult,
)
from nagarconnect.services.issue_store import IssueStore
from nagarconnect.services.upvotes import UpvoteCoordinator
from nagarconnect.storage import photo_key
from nagarconnect.utils.auth_helper import (
    get_current_user_optional,
    get_current_user_required,
    get_settings_dep,
)

logger = logging.getLogger(__name__)

router = APIRouter()

MAP_STYLE = "mapbox://styles/mapbox/light-v11"
MAP_CENTER = [77.2090, 28.6139]  # Delhi, [lng, lat]
MAP_ZOOM = 11
MAX_PHOTO_BYTES = 5 * 1024 * 1024


@router.get("", response_model=List[IssueRead])
def list_issues(session: Session = Depends(get_session)):
    return IssueStore(session).list_issues().unwrap()


@router.get("/mine", response_model=List[IssueRead])
def list_my_issues(
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user_required),
):
    return IssueStore(session).list_user_issues(current_user.id).unwrap()


@router.get("/stats", response_model=IssueStats)
def issue_stats(session: Session = Depends(get_session)):
    return IssueStore(session).stats().unwrap()


@router.get("/map", response_model=MapView)
def issue_map(
    request: Request,
    lang: Optional[str] = Query(None),
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings_dep),
):
    language = i18n.normalize_language(lang) if lang else request_language(request)
    markers = IssueStore(session).map_markers(language).unwrap()

    token = settings.mapbox_public_token or None
    return MapView(
        configured=token is not None,
        token=token,
        error=None if token else i18n.t("map_not_configured", language),
        style=MAP_STYLE,
        center=MAP_CENTER,
        zoom=MAP_ZOOM,
        markers=markers,
    )


@router.post("/photos", response_model=PhotoUploadResult, status_code=201)
async def upload_photo(
    request: Request,
    file: UploadFile = File(...),
    current_user: User = Depends(get_current_user_required),
):
    if not (file.content_type or "").startswith("image/"):
        raise ValidationError("invalid_upload")

    data = await file.read()
    if not data or len(data) > MAX_PHOTO_BYTES:
        raise ValidationError("invalid_upload")

    storage = request.app.state.storage
    key = await run_in_threadpool(storage.save, photo_key(file.filename), data)

    logger.info("user %s uploaded photo %s", current_user.id, key)
    return PhotoUploadResult(path=key, url=storage.url_for(key))


@router.post("", response_model=IssueRead, status_code=201)
def create_issue(
    payload: IssueCreateSchema,
    session: Session = Depends(get_session),
    current_user: Optional[User] = Depends(get_current_user_optional),
):
    return IssueStore(session).create_issue(current_user, payload).unwrap()


@router.websocket("/live")
async def live_issues(websocket: WebSocket, db: Database = Depends(get_database)):
    """Push the full issue list on connect and after every change or poll tick."""
    settings: Settings = websocket.app.state.settings
    await websocket.accept()

    def load():
        with db.session() as session:
            issues = IssueStore(session).list_issues().unwrap()
            return [IssueRead.model_validate(i).model_dump(mode="json") for i in issues]

    async def fetch():
        return await run_in_threadpool(load)

    async def push(items):
        await websocket.send_json({"type": "issues", "data": items})

    controller = RealtimeRefreshController(
        fetch,
        db.feed,
        table="issues",
        poll_interval=settings.realtime_poll_seconds,
        debounce=settings.realtime_debounce_seconds,
        on_refresh=push,
    )

    async with controller:
        try:
            while True:
                await websocket.receive_text()
        except WebSocketDisconnect:
            logger.debug("live issues socket closed")


@router.get("/{issue_id}", response_model=IssueRead)
def get_issue(issue_id: uuid.UUID, session: Session = Depends(get_session)):
    return IssueStore(session).get_issue(issue_id).unwrap()


@router.post("/{issue_id}/upvote", response_model=UpvoteResult)
def toggle_upvote(
    issue_id: uuid.UUID,
    session: Session = Depends(get_session),
    current_user: Optional[User] = Depends(get_current_user_optional),
):
    return UpvoteCoordinator(session).toggle(issue_id, current_user).unwrap()


@router.post("/{issue_id}/feedback", status_code=201)
def leave_feedback(
    issue_id: uuid.UUID,
    payload: FeedbackCreateSchema,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user_required),
):
    feedback = IssueStore(session).add_feedback(issue_id, current_user, payload).unwrap()
    return {
        "id": str(feedback.id),
        "issue_id": str(feedback.issue_id),
        "rating": feedback.rating,
        "comment": feedback.comment,
        "created_at": feedback.created_at,
    }
