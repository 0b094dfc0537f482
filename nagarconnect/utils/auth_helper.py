import uuid
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlmodel import Session
from starlette.requests import HTTPConnection

from nagarconnect.core.config import Settings
from nagarconnect.core.errors import AuthenticationRequired, Forbidden
from nagarconnect.core.security import decode_token
from nagarconnect.db.db import get_session
from nagarconnect.db.procedures import is_admin
from nagarconnect.models.user import User

bearer_scheme = HTTPBearer(auto_error=False)


def get_settings_dep(conn: HTTPConnection) -> Settings:
    return conn.app.state.settings


def resolve_user(session: Session, settings: Settings, token: str) -> Optional[User]:
    """Return the user a bearer token belongs to, or None if it does not resolve."""
    try:
        payload = decode_token(settings, token)
        user_id = uuid.UUID(str(payload.get("sub")))
    except (JWTError, ValueError):
        return None
    return session.get(User, user_id)


def get_current_user_optional(
    token: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings_dep),
) -> Optional[User]:
    if token is None:
        return None
    return resolve_user(session, settings, token.credentials)


def get_current_user_required(
    token: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings_dep),
) -> User:
    if token is None:
        raise AuthenticationRequired()
    user = resolve_user(session, settings, token.credentials)
    if user is None:
        raise AuthenticationRequired("invalid_token")
    return user


def get_bearer_token(
    token: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    return token.credentials if token else None


def require_admin(
    user: User = Depends(get_current_user_required),
    session: Session = Depends(get_session),
) -> User:
    if not is_admin(session, user.id):
        raise Forbidden()
    return user
