"""Slot availability for a department on a date.

Slots are re-derived on every read from four sources, first match wins:
holiday flag, date-specific overrides, the department template, and a
hardcoded fallback list. The chosen list is then overlaid with the live
(non-cancelled) bookings of that date.
"""
import logging
from datetime import datetime, timedelta
from typing import Optional

from sqlmodel import Session, select

from hospital.models import Booking, DepartmentTemplate, Holiday, SlotOverride
from hospital.utils.helpers import safe_load_json
from hospital.utils.timeslots import TimeRange, slot_start


logger = logging.getLogger(__name__)

HARDCODED_DEFAULTS = [
    "09:00 AM – 10:00 AM",
    "10:00 AM – 11:00 AM",
    "11:00 AM – 12:00 PM",
    "05:00 PM – 06:00 PM",
    "06:00 PM – 07:00 PM",
]

NEXT_SLOT_SEARCH_DAYS = 7


def find_active_booking(session: Session, department: str, date: str, time: str) -> Optional[Booking]:
    stmt = select(Booking).where(
        Booking.department == department,
        Booking.date == date,
        Booking.time == time,
        Booking.status != "cancelled",
    )
    return session.exec(stmt).first()


def booked_times(session: Session, department: str, date: str) -> set:
    stmt = select(Booking.time).where(
        Booking.department == department,
        Booking.date == date,
        Booking.status != "cancelled",
    )
    return set(session.exec(stmt).all())


def is_holiday(session: Session, department: str, date: str) -> bool:
    stmt = select(Holiday).where(Holiday.department == department, Holiday.date == date)
    return session.exec(stmt).first() is not None


def get_template(session: Session, department: str) -> Optional[DepartmentTemplate]:
    return session.exec(select(DepartmentTemplate).where(DepartmentTemplate.department == department)).first()


def source_slots(session: Session, department: str, date: Optional[str] = None):
    """Slot list before bookings are applied: overrides, then template, then fallback."""
    if date:
        overrides = session.exec(
            select(SlotOverride).where(SlotOverride.department == department, SlotOverride.date == date)
        ).all()
        if overrides:
            return [{"time": o.time, "status": o.status, "date": date} for o in overrides]

    template = get_template(session, department)
    template_slots = safe_load_json(template.slots, []) if template else []
    if template_slots:
        return [
            {"time": s["time"], "status": s.get("status") or "available", "date": date}
            for s in template_slots
        ]

    return [{"time": label, "status": "available", "date": date} for label in HARDCODED_DEFAULTS]


def resolve_slots(session: Session, department: str, date: Optional[str] = None) -> dict:
    """Return ``{"is_holiday": bool, "slots": [...]}`` for a department and optional date."""
    if date and is_holiday(session, department, date):
        return {"is_holiday": True, "slots": []}

    slots = source_slots(session, department, date)
    taken = booked_times(session, department, date) if date else set()

    merged = []
    for slot in slots:
        if slot["status"] == "closed":
            status = "closed"
        elif slot["time"] in taken:
            status = "booked"
        else:
            status = "available"
        merged.append({**slot, "status": status})

    merged.sort(key=slot_start)
    return {"is_holiday": False, "slots": merged}


def find_next_available_slot(session: Session, department: str, current_date: str, current_time: str):
    """First open slot strictly after the given one, within the next seven days.

    Returns ``{"date", "time", "department"}`` or ``None``.
    """
    start_day = datetime.strptime(current_date, "%Y-%m-%d").date()
    current_start = TimeRange.parse(current_time).start

    for offset in range(NEXT_SLOT_SEARCH_DAYS):
        day = (start_day + timedelta(days=offset)).isoformat()
        resolved = resolve_slots(session, department, day)
        if resolved["is_holiday"]:
            continue
        for slot in resolved["slots"]:
            if slot["status"] != "available":
                continue
            if offset == 0 and slot_start(slot) <= current_start:
                continue
            logger.info(f"Next available slot for {department}: {day} {slot['time']}")
            return {"date": day, "time": slot["time"], "department": department}

    logger.info(f"No open slot for {department} within {NEXT_SLOT_SEARCH_DAYS} days of {current_date}")
    return None
