import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, SQLModel, func, or_, select

from nagarconnect.core.errors import AuthenticationRequired, Conflict, NotFound
from nagarconnect.core.result import returns_outcome
from nagarconnect.models.community_event import CommunityEvent, EventRegistration
from nagarconnect.models.donation import Donation
from nagarconnect.models.emergency_alert import SEVERITY_RANK, EmergencyAlert
from nagarconnect.models.local_stall import LocalStall
from nagarconnect.models.user import User
from nagarconnect.models.volunteer import Volunteer
from nagarconnect.schemas.community_schemas import DonationCreate, DonationRead, VolunteerUpsert

logger = logging.getLogger(__name__)

RECENT_DONATIONS_LIMIT = 10
ANONYMOUS_DONOR = "Anonymous"


class CommunityService:
    """Donations, volunteers, local stalls, emergency alerts and events."""

    def __init__(self, session: Session):
        self.session = session

    # ---------- donations ----------

    @returns_outcome
    def make_donation(self, user: Optional[User], payload: DonationCreate) -> Donation:
        if user is None:
            raise AuthenticationRequired()

        donation = Donation(
            user_id=user.id,
            donor_name=user.full_name or user.email or ANONYMOUS_DONOR,
            donor_email=user.email,
            donor_phone=user.phone,
            amount=payload.amount,
            purpose=payload.purpose,
            is_anonymous=payload.is_anonymous,
        )
        self.session.add(donation)
        self.session.commit()
        self.session.refresh(donation)

        logger.info("donation %s recorded for %s", donation.id, user.id)
        return donation

    @returns_outcome
    def recent_donations(self) -> List[DonationRead]:
        donations = self.session.exec(
            select(Donation)
            .order_by(Donation.created_at.desc())
            .limit(RECENT_DONATIONS_LIMIT)
        ).all()

        result = []
        for donation in donations:
            read = DonationRead.model_validate(donation)
            if donation.is_anonymous:
                read.donor_name = ANONYMOUS_DONOR
            result.append(read)
        return result

    # ---------- volunteers ----------

    @returns_outcome
    def upsert_volunteer(self, user: Optional[User], payload: VolunteerUpsert) -> Volunteer:
        if user is None:
            raise AuthenticationRequired()

        volunteer = self.session.exec(
            select(Volunteer).where(Volunteer.user_id == user.id)
        ).first()

        if volunteer is None:
            volunteer = Volunteer(user_id=user.id, email=user.email, full_name=payload.full_name)

        volunteer.full_name = payload.full_name
        volunteer.email = user.email
        volunteer.phone = payload.phone
        volunteer.skills = payload.skills
        volunteer.availability = payload.availability
        volunteer.is_active = True
        volunteer.updated_at = datetime.now(timezone.utc)

        self.session.add(volunteer)
        self.session.commit()
        self.session.refresh(volunteer)
        return volunteer

    @returns_outcome
    def volunteer_profile(self, user: User) -> Optional[Volunteer]:
        return self.session.exec(
            select(Volunteer).where(Volunteer.user_id == user.id)
        ).first()

    @returns_outcome
    def active_volunteers(self) -> List[Volunteer]:
        return list(self.session.exec(
            select(Volunteer)
            .where(Volunteer.is_active.is_(True))
            .order_by(Volunteer.created_at.desc())
        ).all())

    # ---------- stalls ----------

    @returns_outcome
    def active_stalls(self) -> List[LocalStall]:
        return list(self.session.exec(
            select(LocalStall)
            .where(LocalStall.is_active.is_(True))
            .order_by(LocalStall.created_at.desc())
        ).all())

    @returns_outcome
    def all_stalls(self) -> List[LocalStall]:
        return list(self.session.exec(
            select(LocalStall).order_by(LocalStall.created_at.desc())
        ).all())

    # ---------- alerts ----------

    @returns_outcome
    def active_alerts(self) -> List[EmergencyAlert]:
        now = datetime.now(timezone.utc)
        alerts = self.session.exec(
            select(EmergencyAlert).where(
                EmergencyAlert.is_active.is_(True),
                or_(EmergencyAlert.expires_at.is_(None), EmergencyAlert.expires_at > now),
            )
        ).all()
        # most severe first, newest first within a severity
        alerts = sorted(alerts, key=lambda a: a.created_at, reverse=True)
        return sorted(alerts, key=lambda a: SEVERITY_RANK[a.severity], reverse=True)

    @returns_outcome
    def all_alerts(self) -> List[EmergencyAlert]:
        return list(self.session.exec(
            select(EmergencyAlert).order_by(EmergencyAlert.created_at.desc())
        ).all())

    # ---------- events ----------

    @returns_outcome
    def upcoming_events(self) -> List[CommunityEvent]:
        now = datetime.now(timezone.utc)
        return list(self.session.exec(
            select(CommunityEvent)
            .where(CommunityEvent.is_active.is_(True), CommunityEvent.start_date >= now)
            .order_by(CommunityEvent.start_date)
        ).all())

    @returns_outcome
    def all_events(self) -> List[CommunityEvent]:
        return list(self.session.exec(
            select(CommunityEvent).order_by(CommunityEvent.start_date.desc())
        ).all())

    @returns_outcome
    def register_for_event(self, user: Optional[User], event_id: uuid.UUID) -> EventRegistration:
        if user is None:
            raise AuthenticationRequired()

        event = self.session.get(CommunityEvent, event_id)
        if not event or not event.is_active:
            raise NotFound("event_not_found")

        if event.max_participants:
            registered = self.session.exec(
                select(func.count(EventRegistration.id))
                .where(EventRegistration.event_id == event_id)
            ).one()
            if registered >= event.max_participants:
                raise Conflict("event_full")

        registration = EventRegistration(event_id=event_id, user_id=user.id)
        try:
            self.session.add(registration)
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise Conflict("already_registered")

        self.session.refresh(registration)
        return registration

    # ---------- admin CRUD shared by stalls, alerts and events ----------

    @returns_outcome
    def create(self, model: type, payload: BaseModel, **extra) -> SQLModel:
        record = model(**payload.model_dump(), **extra)
        self.session.add(record)
        self.session.commit()
        self.session.refresh(record)
        logger.info("%s %s created", model.__tablename__, record.id)
        return record

    @returns_outcome
    def update(self, model: type, record_id: uuid.UUID, payload: BaseModel, not_found: str) -> SQLModel:
        record = self.session.get(model, record_id)
        if not record:
            raise NotFound(not_found)

        for field, value in payload.model_dump(exclude_unset=True).items():
            setattr(record, field, value)
        record.updated_at = datetime.now(timezone.utc)

        self.session.add(record)
        self.session.commit()
        self.session.refresh(record)
        return record

    @returns_outcome
    def delete(self, model: type, record_id: uuid.UUID, not_found: str) -> bool:
        record = self.session.get(model, record_id)
        if not record:
            raise NotFound(not_found)

        self.session.delete(record)
        self.session.commit()
        logger.info("%s %s deleted", model.__tablename__, record_id)
        return True
