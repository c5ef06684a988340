from datetime import date

import pytest
from sqlalchemy.orm import Session

from conftest import MONDAY, TUESDAY, auth, make_class
from dojo.core.config import settings
from dojo.db.models.attendance import Attendance as AttendanceModel
from dojo.errors import (
    AlreadyCheckedInError,
    ClassNotFoundError,
    NotFoundError,
    NotScheduledError,
)
from dojo.domain.schedule import weekday_of
from dojo.services import roster as roster_service


# ============================================================================
# ELIGIBILITY
# ============================================================================


def test_roster_lists_active_members_at_location(
    db: Session, member_factory, gym_class, other_location
):
    ana = member_factory("Ana")
    member_factory("Bruno", status="inactive")
    member_factory("Carla", location_id=other_location.id)

    roster = roster_service.get_roster(db, gym_class.id, MONDAY)

    assert [e.member.user_id for e in roster.entries] == [ana.id]
    assert roster.is_scheduled is True
    assert roster.checked_in_count == 0


def test_roster_respects_class_membership_type(
    db: Session, member_factory, location, membership_type, other_membership_type
):
    kids_class = make_class(
        db, location.id, name="Kids", membership_type_id=other_membership_type.id
    )
    member_factory("Ana", membership_type_id=membership_type.id)
    kid = member_factory("Kai", membership_type_id=other_membership_type.id)

    roster = roster_service.get_roster(db, kids_class.id, MONDAY)

    assert [e.member.user_id for e in roster.entries] == [kid.id]


def test_member_with_several_memberships_appears_once(
    db: Session, member_factory, gym_class, membership_type
):
    from dojo.db.models.membership import Membership as MembershipModel

    ana = member_factory("Ana")
    db.add(
        MembershipModel(
            user_id=ana.id,
            location_id=gym_class.location_id,
            membership_type_id=membership_type.id,
            status="active",
        )
    )
    db.commit()

    roster = roster_service.get_roster(db, gym_class.id, MONDAY)
    assert len(roster.entries) == 1


def test_roster_orders_checked_in_first_then_by_name(
    db: Session, member_factory, gym_class, admin_user
):
    zoe = member_factory("zoe", "Alves")
    ana = member_factory("Ana", "Souza")
    bruno = member_factory("Bruno", "Lima")
    member_factory("ana", "Costa")

    roster_service.check_in(db, gym_class.id, MONDAY, zoe.id, admin_user.id)
    roster_service.check_in(db, gym_class.id, MONDAY, bruno.id, admin_user.id)

    roster = roster_service.get_roster(db, gym_class.id, MONDAY)

    assert [(e.member.first_name, e.member.last_name) for e in roster.entries] == [
        ("Bruno", "Lima"),
        ("zoe", "Alves"),
        ("ana", "Costa"),
        ("Ana", "Souza"),
    ]
    assert [e.checked_in for e in roster.entries] == [True, True, False, False]
    assert roster.checked_in_count == 2
    assert all(e.eligible for e in roster.entries)
    assert roster.entries[0].attendance_id is not None
    assert roster.entries[2].check_in_time is None
    assert ana.id not in [e.member.user_id for e in roster.entries[:2]]


def test_roster_for_missing_class(db: Session):
    with pytest.raises(ClassNotFoundError):
        roster_service.get_roster(db, 999, MONDAY)


def test_ineligible_attendee_is_listed_and_removable(
    db: Session, member_factory, gym_class, admin_user, other_location
):
    visitor = member_factory("Vera", location_id=other_location.id)
    record = roster_service.check_in(db, gym_class.id, MONDAY, visitor.id, admin_user.id)

    roster = roster_service.get_roster(db, gym_class.id, MONDAY)

    [entry] = roster.entries
    assert entry.member.user_id == visitor.id
    assert entry.eligible is False
    assert entry.checked_in is True
    assert entry.attendance_id == record.id

    roster_service.check_out(db, entry.attendance_id)
    assert roster_service.get_roster(db, gym_class.id, MONDAY).entries == []


def test_check_in_user_without_profile(db: Session, gym_class, instructor_user, admin_user):
    with pytest.raises(NotFoundError):
        roster_service.check_in(db, gym_class.id, MONDAY, instructor_user.id, admin_user.id)
    assert db.query(AttendanceModel).count() == 0


def test_roster_on_unscheduled_date_still_lists_members(
    db: Session, member_user, gym_class
):
    roster = roster_service.get_roster(db, gym_class.id, TUESDAY)
    assert roster.is_scheduled is False
    assert len(roster.entries) == 1


# ============================================================================
# CHECK-IN / CHECK-OUT
# ============================================================================


def test_check_in_records_attendance(db: Session, member_user, gym_class, admin_user):
    record = roster_service.check_in(db, gym_class.id, MONDAY, member_user.id, admin_user.id)

    assert record.id is not None
    assert record.class_date == MONDAY
    assert record.checked_in_by == admin_user.id


def test_check_in_backfills_past_dates(db: Session, member_user, gym_class, admin_user):
    past_monday = date(2025, 1, 6)
    record = roster_service.check_in(db, gym_class.id, past_monday, member_user.id, admin_user.id)
    assert record.class_date == past_monday


def test_check_in_twice_raises(db: Session, member_user, gym_class, admin_user):
    roster_service.check_in(db, gym_class.id, MONDAY, member_user.id, admin_user.id)

    with pytest.raises(AlreadyCheckedInError) as exc_info:
        roster_service.check_in(db, gym_class.id, MONDAY, member_user.id, admin_user.id)
    assert exc_info.value.code == "ALREADY_CHECKED_IN"

    assert db.query(AttendanceModel).count() == 1


def test_duplicate_check_in_from_independent_sessions(
    session_factory, db: Session, member_user, gym_class, admin_user
):
    """Two sessions that both see no record are decided by the unique constraint."""
    first = session_factory()
    second = session_factory()
    try:
        roster_service.check_in(first, gym_class.id, MONDAY, member_user.id, admin_user.id)
        with pytest.raises(AlreadyCheckedInError):
            roster_service.check_in(second, gym_class.id, MONDAY, member_user.id, admin_user.id)
    finally:
        first.close()
        second.close()

    assert db.query(AttendanceModel).count() == 1


def test_check_in_off_schedule_rejected(db: Session, member_user, gym_class, admin_user):
    with pytest.raises(NotScheduledError) as exc_info:
        roster_service.check_in(db, gym_class.id, TUESDAY, member_user.id, admin_user.id)
    assert "Monday" in str(exc_info.value)
    assert db.query(AttendanceModel).count() == 0


def test_check_in_off_schedule_with_force_backfill(db: Session, member_user, gym_class, admin_user):
    record = roster_service.check_in(
        db, gym_class.id, TUESDAY, member_user.id, admin_user.id, force_backfill=True
    )
    assert record.class_date == TUESDAY


def test_off_schedule_record_stays_visible_and_removable(
    db: Session, member_user, member_factory, gym_class, admin_user
):
    newcomer = member_factory("Nina")
    backfilled = roster_service.check_in(
        db, gym_class.id, TUESDAY, member_user.id, admin_user.id, force_backfill=True
    )

    with pytest.raises(NotScheduledError):
        roster_service.check_in(db, gym_class.id, TUESDAY, newcomer.id, admin_user.id)

    roster = roster_service.get_roster(db, gym_class.id, TUESDAY)
    assert roster.is_scheduled is False
    entry = next(e for e in roster.entries if e.member.user_id == member_user.id)
    assert entry.checked_in is True
    assert entry.attendance_id == backfilled.id

    roster_service.check_out(db, backfilled.id)

    roster = roster_service.get_roster(db, gym_class.id, TUESDAY)
    assert roster.checked_in_count == 0
    assert db.query(AttendanceModel).count() == 0


def test_check_in_off_schedule_allowed_by_settings(
    db: Session, member_user, gym_class, admin_user, monkeypatch
):
    monkeypatch.setattr(settings, "allow_off_schedule_checkin", True)
    record = roster_service.check_in(db, gym_class.id, TUESDAY, member_user.id, admin_user.id)
    assert record.class_date == TUESDAY


def test_check_in_unknown_user(db: Session, gym_class, admin_user):
    with pytest.raises(NotFoundError):
        roster_service.check_in(db, gym_class.id, MONDAY, 999, admin_user.id)


def test_check_in_unknown_class(db: Session, member_user, admin_user):
    with pytest.raises(ClassNotFoundError):
        roster_service.check_in(db, 999, MONDAY, member_user.id, admin_user.id)


def test_check_out_is_idempotent(db: Session, member_user, gym_class, admin_user):
    record = roster_service.check_in(db, gym_class.id, MONDAY, member_user.id, admin_user.id)

    roster_service.check_out(db, record.id)
    roster_service.check_out(db, record.id)

    assert db.query(AttendanceModel).count() == 0


def test_check_in_after_check_out(db: Session, member_user, gym_class, admin_user):
    first = roster_service.check_in(db, gym_class.id, MONDAY, member_user.id, admin_user.id)
    roster_service.check_out(db, first.id)

    second = roster_service.check_in(db, gym_class.id, MONDAY, member_user.id, admin_user.id)

    roster = roster_service.get_roster(db, gym_class.id, MONDAY)
    assert roster.entries[0].checked_in is True
    assert roster.entries[0].attendance_id == second.id


def test_self_check_in_reports_repeat(db: Session, member_user, location):
    today_class = make_class(db, location.id, day_of_week=weekday_of(date.today()))

    record, already = roster_service.self_check_in(db, member_user, today_class.id)
    assert already is False
    assert record.checked_in_by is None

    again, already = roster_service.self_check_in(db, member_user, today_class.id)
    assert already is True
    assert again.id == record.id


# ============================================================================
# API
# ============================================================================


def test_get_roster_as_instructor(client, instructor_token: str, member_user, gym_class):
    response = client.get(
        f"/api/v1/classes/{gym_class.id}/roster?class_date={MONDAY.isoformat()}",
        headers=auth(instructor_token),
    )
    assert response.status_code == 200
    data = response.json()
    assert data["gym_class"]["id"] == gym_class.id
    assert data["is_scheduled"] is True
    assert data["checked_in_count"] == 0
    assert data["entries"][0]["member"]["user_id"] == member_user.id
    assert data["entries"][0]["member"]["program"] == "adult"


def test_get_roster_as_member_forbidden(client, member_token: str, gym_class):
    response = client.get(
        f"/api/v1/classes/{gym_class.id}/roster?class_date={MONDAY.isoformat()}",
        headers=auth(member_token),
    )
    assert response.status_code == 403


def test_check_in_via_api(client, admin_token: str, admin_user, member_user, gym_class):
    response = client.post(
        f"/api/v1/classes/{gym_class.id}/attendance",
        json={"user_id": member_user.id, "class_date": MONDAY.isoformat()},
        headers=auth(admin_token),
    )
    assert response.status_code == 201
    data = response.json()
    assert data["user_id"] == member_user.id
    assert data["checked_in_by"] == admin_user.id


def test_check_in_twice_via_api_conflicts(client, admin_token: str, member_user, gym_class):
    payload = {"user_id": member_user.id, "class_date": MONDAY.isoformat()}
    client.post(
        f"/api/v1/classes/{gym_class.id}/attendance", json=payload, headers=auth(admin_token)
    )
    response = client.post(
        f"/api/v1/classes/{gym_class.id}/attendance", json=payload, headers=auth(admin_token)
    )
    assert response.status_code == 409
    assert response.json()["code"] == "ALREADY_CHECKED_IN"


def test_check_in_off_schedule_via_api(client, admin_token: str, member_user, gym_class):
    payload = {"user_id": member_user.id, "class_date": TUESDAY.isoformat()}
    response = client.post(
        f"/api/v1/classes/{gym_class.id}/attendance", json=payload, headers=auth(admin_token)
    )
    assert response.status_code == 400
    assert response.json()["code"] == "NOT_SCHEDULED"

    payload["force_backfill"] = True
    response = client.post(
        f"/api/v1/classes/{gym_class.id}/attendance", json=payload, headers=auth(admin_token)
    )
    assert response.status_code == 201


def test_check_in_as_member_forbidden(client, member_token: str, member_user, gym_class):
    response = client.post(
        f"/api/v1/classes/{gym_class.id}/attendance",
        json={"user_id": member_user.id, "class_date": MONDAY.isoformat()},
        headers=auth(member_token),
    )
    assert response.status_code == 403


def test_check_out_via_api(client, db: Session, admin_token: str, admin_user, member_user, gym_class):
    record = roster_service.check_in(db, gym_class.id, MONDAY, member_user.id, admin_user.id)

    response = client.delete(f"/api/v1/attendance/{record.id}", headers=auth(admin_token))
    assert response.status_code == 204

    response = client.delete(f"/api/v1/attendance/{record.id}", headers=auth(admin_token))
    assert response.status_code == 204


def test_self_check_in_via_api(client, db: Session, member_token: str, location):
    today_class = make_class(db, location.id, day_of_week=weekday_of(date.today()))

    response = client.post(
        "/api/v1/attendance/self", json={"class_id": today_class.id}, headers=auth(member_token)
    )
    assert response.status_code == 200
    assert response.json()["already_checked_in"] is False

    response = client.post(
        "/api/v1/attendance/self", json={"class_id": today_class.id}, headers=auth(member_token)
    )
    assert response.status_code == 200
    assert response.json()["already_checked_in"] is True


def test_member_attendance_history(
    client, db: Session, member_token: str, member_user, gym_class, admin_user
):
    roster_service.check_in(db, gym_class.id, date(2026, 10, 12), member_user.id, admin_user.id)
    roster_service.check_in(db, gym_class.id, MONDAY, member_user.id, admin_user.id)

    response = client.get(
        f"/api/v1/members/{member_user.id}/attendance", headers=auth(member_token)
    )
    assert response.status_code == 200
    assert [a["class_date"] for a in response.json()] == ["2026-10-19", "2026-10-12"]


def test_member_cannot_read_other_attendance(client, member_token: str, member_factory):
    other = member_factory("Rickson")
    response = client.get(f"/api/v1/members/{other.id}/attendance", headers=auth(member_token))
    assert response.status_code == 403
