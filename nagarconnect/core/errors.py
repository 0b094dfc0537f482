import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from nagarconnect.i18n import normalize_language, t

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base of the error taxonomy; ``key`` selects the localized message."""

    kind = "internal_error"
    status_code = 500
    default_key = "internal_error"

    def __init__(self, key: Optional[str] = None, detail: Optional[str] = None):
        self.key = key or self.default_key
        self.detail = detail
        super().__init__(detail or self.key)


class AuthenticationRequired(AppError):
    kind = "authentication_required"
    status_code = 401
    default_key = "authentication_required"


class Unauthorized(AppError):
    # identity present but the privileged procedure rejected it
    kind = "unauthorized"
    status_code = 403
    default_key = "admin_required"


class Forbidden(AppError):
    kind = "forbidden"
    status_code = 403
    default_key = "admin_required"


class NotFound(AppError):
    kind = "not_found"
    status_code = 404
    default_key = "issue_not_found"


class Conflict(AppError):
    kind = "conflict"
    status_code = 409
    default_key = "duplicate"


class ValidationError(AppError):
    kind = "validation_error"
    status_code = 400
    default_key = "error"


class InternalError(AppError):
    kind = "internal_error"
    status_code = 500
    default_key = "internal_error"


def request_language(request: Request) -> str:
    return normalize_language(
        request.query_params.get("lang") or request.headers.get("accept-language")
    )


def error_response(error: AppError, language: str) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content={"error": error.kind, "message": t(error.key, language)},
    )


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        else:
            logger.info("%s %s rejected: %s", request.method, request.url.path, exc.kind)
        return error_response(exc, request_language(request))

    @app.exception_handler(IntegrityError)
    async def handle_integrity_error(request: Request, exc: IntegrityError):
        logger.warning("%s %s hit a unique constraint", request.method, request.url.path)
        return error_response(Conflict(), request_language(request))
