"""send-notification function.

A separate ASGI application that emails a citizen about a status change.
It trusts nothing from the caller: the bearer credential is resolved to a
user, admin rights are re-checked, and the recipient address must match
the one stored on the issue.
"""
import logging
import uuid

from fastapi import FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, Response
from pydantic import ValidationError as PydanticValidationError

from nagarconnect.core.config import Settings
from nagarconnect.db.db import Database
from nagarconnect.db.procedures import is_admin
from nagarconnect.functions.email_content import render_status_email
from nagarconnect.models.issue import Issue
from nagarconnect.providers.base import EmailDeliveryError, EmailProvider
from nagarconnect.schemas.notification_schemas import NotificationRequest
from nagarconnect.utils.auth_helper import resolve_user

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}

GENERIC_FAILURE = "Failed to send notification. Please try again later."


def _reply(status_code: int, body: dict) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body, headers=CORS_HEADERS)


def create_notification_function(
    database: Database,
    settings: Settings,
    email_provider: EmailProvider,
) -> FastAPI:
    fn = FastAPI(title="send-notification", docs_url=None, redoc_url=None, openapi_url=None)
    fn.state.db = database
    fn.state.settings = settings
    fn.state.email_provider = email_provider

    @fn.options("/")
    async def preflight():
        return Response(status_code=200, headers=CORS_HEADERS)

    @fn.post("/")
    async def send_notification(request: Request):
        logger.info("send-notification function called")

        auth_header = request.headers.get("authorization") or ""
        scheme, _, token = auth_header.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            logger.warning("send-notification called without a bearer credential")
            return _reply(401, {"error": "Unauthorized"})

        try:
            body = await request.json()
        except ValueError:
            body = None

        try:
            return await run_in_threadpool(_dispatch, request.app, token.strip(), body)
        except Exception:
            logger.exception("send-notification failed")
            return _reply(500, {"error": GENERIC_FAILURE})

    return fn


def _dispatch(fn: FastAPI, token: str, body) -> JSONResponse:
    database: Database = fn.state.db
    settings: Settings = fn.state.settings
    provider: EmailProvider = fn.state.email_provider

    with database.session() as session:
        user = resolve_user(session, settings, token)
        if user is None:
            logger.warning("send-notification credential did not resolve to a user")
            return _reply(401, {"error": "Unauthorized"})

        if not is_admin(session, user.id):
            logger.warning("send-notification refused for non-admin %s", user.id)
            return _reply(403, {"error": "Forbidden: Admin access required"})

        try:
            data = NotificationRequest.model_validate(body if isinstance(body, dict) else {})
        except PydanticValidationError:
            data = None
        if data is None or data.missing_fields():
            logger.warning("send-notification payload is missing required fields")
            return _reply(400, {"error": "Missing required fields"})

        try:
            issue = session.get(Issue, uuid.UUID(data.issueId))
        except ValueError:
            issue = None
        if issue is None:
            logger.warning("send-notification for unknown issue %s", data.issueId)
            return _reply(404, {"error": "Issue not found"})

        if issue.user_email != data.userEmail:
            logger.warning("send-notification recipient does not match issue %s", issue.id)
            return _reply(400, {"error": "Invalid request"})

    content = render_status_email(data.issueTitle, data.newStatus, data.language)
    logger.info("sending status email for issue %s - status: %s", data.issueId, data.newStatus)

    try:
        email_id = provider.send_email([data.userEmail], content.subject, content.html)
    except EmailDeliveryError:
        logger.exception("email provider failed for issue %s", data.issueId)
        return _reply(500, {"error": GENERIC_FAILURE})

    return _reply(200, {"success": True, "emailId": email_id})
