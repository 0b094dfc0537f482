from fastapi import APIRouter, Depends
from sqlmodel import Session

from nagarconnect.db.db import get_session
from nagarconnect.db.procedures import is_admin
from nagarconnect.models.user import LanguageType, User
from nagarconnect.schemas.auth_schemas import ProfileUpdatePayload
from nagarconnect.utils.auth_helper import get_current_user_required


router = APIRouter()


def _profile(session: Session, user: User) -> dict:
    return {
        "id": str(user.id),
        "email": user.email,
        "full_name": user.full_name,
        "phone": user.phone,
        "language": user.language,
        "created_at": user.created_at,
        "is_admin": is_admin(session, user.id),
    }


@router.get("/me")
def get_my_profile(
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user_required),
):
    return _profile(session, current_user)


@router.patch("/me")
def update_my_profile(
    payload: ProfileUpdatePayload,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user_required),
):
    updates = payload.model_dump(exclude_unset=True)

    if "full_name" in updates:
        current_user.full_name = updates["full_name"]
    if "phone" in updates:
        current_user.phone = updates["phone"]
    if updates.get("language"):
        # also picks the language of future status emails
        current_user.language = LanguageType(updates["language"])

    session.add(current_user)
    session.commit()
    session.refresh(current_user)

    return _profile(session, current_user)
