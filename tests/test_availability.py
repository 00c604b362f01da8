import json

from hospital.models import Booking, DepartmentTemplate, Holiday, SlotOverride
from hospital.services.availability import HARDCODED_DEFAULTS, find_next_available_slot, resolve_slots


DAY = "2025-03-01"


def add_booking(session, time, date=DAY, department="ENT", status="pending"):
    booking = Booking(
        name="Patient", email="p@example.com", phone="1", department=department,
        date=date, time=time, status=status,
    )
    session.add(booking)
    session.commit()
    return booking


def add_template(session, department, labels, closed=()):
    slots = [{"time": t, "status": "closed" if t in closed else "available"} for t in labels]
    session.add(DepartmentTemplate(department=department, slots=json.dumps(slots)))
    session.commit()


def times(resolved):
    return [s["time"] for s in resolved["slots"]]


def test_fallback_defaults_when_nothing_configured(session):
    resolved = resolve_slots(session, "ENT", DAY)
    assert resolved["is_holiday"] is False
    assert times(resolved) == HARDCODED_DEFAULTS
    assert all(s["status"] == "available" and s["date"] == DAY for s in resolved["slots"])


def test_template_replaces_defaults(session):
    add_template(session, "ENT", ["02:00 PM – 03:00 PM", "08:00 AM – 09:00 AM"])
    assert times(resolve_slots(session, "ENT", DAY)) == ["08:00 AM – 09:00 AM", "02:00 PM – 03:00 PM"]
    assert times(resolve_slots(session, "Orthopedics", DAY)) == HARDCODED_DEFAULTS


def test_empty_template_falls_through_to_defaults(session):
    session.add(DepartmentTemplate(department="ENT", slots="[]"))
    session.commit()
    assert times(resolve_slots(session, "ENT", DAY)) == HARDCODED_DEFAULTS


def test_overrides_beat_template_and_sort_chronologically(session):
    add_template(session, "ENT", ["08:00 AM – 09:00 AM"])
    for label in ["10:00 AM – 11:00 AM", "09:00 AM – 10:00 AM"]:
        session.add(SlotOverride(department="ENT", date=DAY, time=label, status="available"))
    session.commit()

    assert times(resolve_slots(session, "ENT", DAY)) == ["09:00 AM – 10:00 AM", "10:00 AM – 11:00 AM"]
    assert times(resolve_slots(session, "ENT", "2025-03-02")) == ["08:00 AM – 09:00 AM"]


def test_holiday_wins_over_everything(session):
    session.add(SlotOverride(department="ENT", date=DAY, time="09:00 AM – 10:00 AM", status="available"))
    session.add(Holiday(department="ENT", date=DAY))
    session.commit()
    assert resolve_slots(session, "ENT", DAY) == {"is_holiday": True, "slots": []}


def test_bookings_mark_slots_booked_but_never_reopen_closed(session):
    add_template(session, "ENT", HARDCODED_DEFAULTS, closed=["10:00 AM – 11:00 AM"])
    add_booking(session, "09:00 AM – 10:00 AM")
    add_booking(session, "10:00 AM – 11:00 AM")
    add_booking(session, "11:00 AM – 12:00 PM", status="cancelled")

    statuses = {s["time"]: s["status"] for s in resolve_slots(session, "ENT", DAY)["slots"]}
    assert statuses["09:00 AM – 10:00 AM"] == "booked"
    assert statuses["10:00 AM – 11:00 AM"] == "closed"
    assert statuses["11:00 AM – 12:00 PM"] == "available"


def test_bookings_only_affect_their_department(session):
    add_booking(session, "09:00 AM – 10:00 AM", department="Orthopedics")
    statuses = {s["time"]: s["status"] for s in resolve_slots(session, "ENT", DAY)["slots"]}
    assert statuses["09:00 AM – 10:00 AM"] == "available"


def test_next_slot_same_day_strictly_after(session):
    add_booking(session, "10:00 AM – 11:00 AM")
    slot = find_next_available_slot(session, "ENT", DAY, "09:00 AM – 10:00 AM")
    assert slot == {"date": DAY, "time": "11:00 AM – 12:00 PM", "department": "ENT"}


def test_next_slot_rolls_over_holidays(session):
    session.add(Holiday(department="ENT", date="2025-03-02"))
    session.commit()
    slot = find_next_available_slot(session, "ENT", DAY, "06:00 PM – 07:00 PM")
    assert slot == {"date": "2025-03-03", "time": "09:00 AM – 10:00 AM", "department": "ENT"}


def test_next_slot_none_within_a_week(session):
    for offset in range(7):
        session.add(Holiday(department="ENT", date=f"2025-03-0{offset + 2}"))
    session.commit()
    assert find_next_available_slot(session, "ENT", DAY, "06:00 PM – 07:00 PM") is None


def test_next_slot_skips_closed_slot(session):
    add_template(session, "ENT", HARDCODED_DEFAULTS, closed=["10:00 AM – 11:00 AM"])
    slot = find_next_available_slot(session, "ENT", DAY, "09:00 AM – 10:00 AM")
    assert slot == {"date": DAY, "time": "11:00 AM – 12:00 PM", "department": "ENT"}
