import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlmodel import Session

from nagarconnect.db.db import get_session
from nagarconnect.models.user import User
from nagarconnect.schemas.community_schemas import (
    AlertRead,
    DonationCreate,
    DonationRead,
    EventRead,
    RegistrationRead,
    StallRead,
    VolunteerRead,
    VolunteerUpsert,
)
from nagarconnect.services.community import CommunityService
from nagarconnect.utils.auth_helper import get_current_user_required


router = APIRouter()


# ---------- donations ----------

@router.get("/donations", response_model=List[DonationRead])
def recent_donations(session: Session = Depends(get_session)):
    return CommunityService(session).recent_donations().unwrap()


@router.post("/donations", status_code=201)
def make_donation(
    payload: DonationCreate,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user_required),
):
    donation = CommunityService(session).make_donation(current_user, payload).unwrap()
    return {
        "id": str(donation.id),
        "amount": donation.amount,
        "purpose": donation.purpose,
        "is_anonymous": donation.is_anonymous,
        "created_at": donation.created_at,
    }


# ---------- volunteers ----------

@router.get("/volunteers", response_model=List[VolunteerRead])
def active_volunteers(session: Session = Depends(get_session)):
    return CommunityService(session).active_volunteers().unwrap()


@router.get("/volunteers/me", response_model=Optional[VolunteerRead])
def my_volunteer_profile(
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user_required),
):
    return CommunityService(session).volunteer_profile(current_user).unwrap()


@router.put("/volunteers/me", response_model=VolunteerRead)
def upsert_volunteer_profile(
    payload: VolunteerUpsert,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user_required),
):
    return CommunityService(session).upsert_volunteer(current_user, payload).unwrap()


# ---------- stalls, alerts, events ----------

@router.get("/stalls", response_model=List[StallRead])
def active_stalls(session: Session = Depends(get_session)):
    return CommunityService(session).active_stalls().unwrap()


@router.get("/alerts", response_model=List[AlertRead])
def active_alerts(session: Session = Depends(get_session)):
    return CommunityService(session).active_alerts().unwrap()


@router.get("/events", response_model=List[EventRead])
def upcoming_events(session: Session = Depends(get_session)):
    return CommunityService(session).upcoming_events().unwrap()


@router.post("/events/{event_id}/register", response_model=RegistrationRead, status_code=201)
def register_for_event(
    event_id: uuid.UUID,
    session: Session = Depends(get_session),
    current_user: User = Depends(get_current_user_required),
):
    return CommunityService(session).register_for_event(current_user, event_id).unwrap()
