import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from nagarconnect.core.config import Settings
from nagarconnect.core.errors import AuthenticationRequired, Conflict
from nagarconnect.core.security import create_access_token, hash_password, verify_password
from nagarconnect.db.db import get_session
from nagarconnect.db.procedures import is_admin
from nagarconnect.models.user import AdminUser, LanguageType, User
from nagarconnect.schemas.auth_schemas import LoginPayload, SignupPayload, TokenResponse
from nagarconnect.utils.auth_helper import get_settings_dep

logger = logging.getLogger(__name__)

router = APIRouter()


def _token_response(session: Session, settings: Settings, user: User) -> TokenResponse:
    token = create_access_token(settings, str(user.id), {"email": user.email})
    return TokenResponse(
        access_token=token,
        user_id=str(user.id),
        is_admin=is_admin(session, user.id),
    )


@router.post("/signup", response_model=TokenResponse, status_code=201)
def signup(
    payload: SignupPayload,
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings_dep),
):
    email = payload.email.lower()

    existing = session.exec(select(User).where(User.email == email)).first()
    if existing:
        raise Conflict("email_taken")

    user = User(
        email=email,
        password_hash=hash_password(payload.password),
        phone=payload.phone,
        full_name=payload.full_name,
        language=LanguageType(payload.language),
    )
    session.add(user)

    if email in settings.admin_email_list:
        session.add(AdminUser(user_id=user.id))

    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        raise Conflict("email_taken")
    session.refresh(user)

    logger.info("user %s signed up", user.id)
    return _token_response(session, settings, user)


@router.post("/login", response_model=TokenResponse)
def login(
    payload: LoginPayload,
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings_dep),
):
    user = session.exec(select(User).where(User.email == payload.email.lower())).first()

    if not user or not verify_password(payload.password, user.password_hash):
        raise AuthenticationRequired("invalid_credentials")

    return _token_response(session, settings, user)
