from datetime import datetime, timedelta, timezone

from nagarconnect.core.errors import Conflict
from nagarconnect.models.community_event import CommunityEvent, EventType
from nagarconnect.models.emergency_alert import AlertSeverity, EmergencyAlert
from nagarconnect.models.local_stall import LocalStall
from nagarconnect.schemas.community_schemas import (
    AlertWrite,
    DonationCreate,
    EventWrite,
    StallUpdate,
    StallWrite,
    VolunteerUpsert,
)
from nagarconnect.services.community import CommunityService
from nagarconnect.tests.helpers import create_user


def future(days):
    return datetime.now(timezone.utc) + timedelta(days=days)


def alert(severity, **fields):
    return AlertWrite(
        title_en=f"{severity.value} alert",
        title_hi="चेतावनी",
        message_en="Water supply disruption",
        message_hi="जल आपूर्ति बाधित",
        severity=severity,
        **fields,
    )


def test_recent_donations_mask_anonymous_donors(db):
    user = create_user(db)
    service = CommunityService(db)
    service.make_donation(user, DonationCreate(amount=100, is_anonymous=True)).unwrap()
    service.make_donation(user, DonationCreate(amount=250, purpose="Park benches")).unwrap()

    names = sorted(d.donor_name for d in service.recent_donations().unwrap())

    assert names == ["Anonymous", user.email]


def test_volunteer_profile_is_upserted(db):
    user = create_user(db)
    service = CommunityService(db)

    first = service.upsert_volunteer(user, VolunteerUpsert(full_name="Asha Verma", skills=[" first aid ", ""])).unwrap()
    second = service.upsert_volunteer(user, VolunteerUpsert(full_name="Asha V.", availability="weekends")).unwrap()

    assert first.id == second.id
    assert second.full_name == "Asha V."
    assert service.volunteer_profile(user).unwrap().availability == "weekends"
    assert len(service.active_volunteers().unwrap()) == 1


def test_active_alerts_skip_expired_and_sort_by_severity(db):
    admin = create_user(db, "admin@example.com", admin=True)
    service = CommunityService(db)
    service.create(EmergencyAlert, alert(AlertSeverity.low), created_by=admin.id).unwrap()
    service.create(EmergencyAlert, alert(AlertSeverity.critical), created_by=admin.id).unwrap()
    service.create(
        EmergencyAlert,
        alert(AlertSeverity.high, expires_at=datetime.now(timezone.utc) - timedelta(hours=1)),
    ).unwrap()
    service.create(EmergencyAlert, alert(AlertSeverity.medium, is_active=False)).unwrap()

    severities = [a.severity for a in service.active_alerts().unwrap()]

    assert severities == [AlertSeverity.critical, AlertSeverity.low]


def test_event_registration_is_unique_and_capped(db):
    service = CommunityService(db)
    event = service.create(CommunityEvent, EventWrite(
        title_en="Health camp",
        title_hi="स्वास्थ्य शिविर",
        event_type=EventType.camp,
        start_date=future(2),
        max_participants=1,
    )).unwrap()
    alice = create_user(db, "alice@example.com")
    bob = create_user(db, "bob@example.com")

    service.register_for_event(alice, event.id).unwrap()

    again = service.register_for_event(alice, event.id)
    assert isinstance(again.error, Conflict)

    full = service.register_for_event(bob, event.id)
    assert isinstance(full.error, Conflict)
    assert full.error.key == "event_full"


def test_upcoming_events_exclude_past_and_inactive(db):
    service = CommunityService(db)
    for title, start, active in (("soon", future(1), True), ("past", future(-1), True), ("off", future(5), False)):
        service.create(CommunityEvent, EventWrite(
            title_en=title, title_hi=title, event_type=EventType.meetup, start_date=start, is_active=active,
        )).unwrap()

    titles = [e.title_en for e in service.upcoming_events().unwrap()]

    assert titles == ["soon"]


def test_stall_crud(db):
    service = CommunityService(db)
    stall = service.create(LocalStall, StallWrite(name="Chai Point", category="food")).unwrap()

    updated = service.update(LocalStall, stall.id, StallUpdate(discount_percentage=10), "stall_not_found").unwrap()
    assert updated.discount_percentage == 10
    assert updated.name == "Chai Point"

    service.delete(LocalStall, stall.id, "stall_not_found").unwrap()
    missing = service.delete(LocalStall, stall.id, "stall_not_found")
    assert missing.error.key == "stall_not_found"
