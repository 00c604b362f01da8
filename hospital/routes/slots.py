import json
import logging
from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from hospital.db import get_session
from hospital.models import Department, DepartmentTemplate, Holiday, SlotOverride
from hospital.routes.auth import require_admin
from hospital.schemas import SlotsUpdate
from hospital.services.availability import get_template, is_holiday, resolve_slots
from hospital.utils.timeslots import filter_available_slots


logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/slots")
async def get_slots(department: Optional[str] = None, date: Optional[str] = None, hide_past: bool = False):
    if not department:
        raise HTTPException(status_code=400, detail="Department required")
    if date:
        try:
            date = datetime.strptime(date, "%Y-%m-%d").date().isoformat()
        except ValueError:
            raise HTTPException(status_code=400, detail="Date must be YYYY-MM-DD")

    with get_session() as session:
        resolved = resolve_slots(session, department, date)

    if hide_past and date:
        resolved["slots"] = filter_available_slots(resolved["slots"], date, datetime.now())
    return resolved


def _save_template(session, department, slots):
    template = get_template(session, department) or DepartmentTemplate(department=department)
    template.slots = json.dumps(slots)
    template.updated_at = datetime.utcnow()
    session.add(template)


def _apply_slot_change(session, payload: SlotsUpdate):
    slots = [s.model_dump() for s in payload.slots]

    if payload.is_global_template:
        if payload.apply_to_all:
            departments = session.exec(select(Department.name)).all()
            for name in departments:
                _save_template(session, name, slots)
            session.commit()
            logger.info(f"Slot template applied to {len(departments)} departments")
            return
        if not payload.department:
            raise HTTPException(status_code=400, detail="Department required")
        _save_template(session, payload.department, slots)
        session.commit()
        logger.info(f"Slot template saved for {payload.department}")
        return

    if not payload.department or not payload.date:
        raise HTTPException(status_code=400, detail="Department and date required")

    session.execute(delete(SlotOverride).where(
        SlotOverride.department == payload.department, SlotOverride.date == payload.date
    ))

    if payload.is_holiday:
        if not is_holiday(session, payload.department, payload.date):
            session.add(Holiday(department=payload.department, date=payload.date))
        session.commit()
        logger.info(f"Holiday set for {payload.department} on {payload.date}")
        return

    session.execute(delete(Holiday).where(Holiday.department == payload.department, Holiday.date == payload.date))
    for slot in slots:
        session.add(SlotOverride(department=payload.department, date=payload.date, **slot))
    session.commit()
    logger.info(f"{len(slots)} slots saved for {payload.department} on {payload.date}")


@router.post("/slots", dependencies=[Depends(require_admin)])
async def update_slots(payload: SlotsUpdate):
    with get_session() as session:
        try:
            _apply_slot_change(session, payload)
        except IntegrityError:
            # Lost a race with another admin saving the same department/date
            session.rollback()
            raise HTTPException(status_code=409, detail="Slot settings were changed by another request. Try again.")
    return {"success": True}
