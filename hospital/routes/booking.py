import json
import logging
from datetime import datetime
from typing import Optional
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from hospital.db import get_session
from hospital.models import Booking
from hospital.routes.auth import require_admin
from hospital.schemas import BookingCreate, BookingStatusUpdate
from hospital.services.availability import find_active_booking, find_next_available_slot
from hospital.services.notifications import notify_booking_created, notify_status_change
from hospital.services.zoom import ZoomError, create_zoom_meeting
from hospital.utils.helpers import safe_load_json


logger = logging.getLogger(__name__)

router = APIRouter()

SLOT_TAKEN = "Slot already booked"


def booking_to_dict(booking: Booking) -> dict:
    data = booking.model_dump()
    data["next_suggested_slot"] = safe_load_json(booking.next_suggested_slot)
    return data


@router.post("/booking")
async def create_booking(payload: BookingCreate, background_tasks: BackgroundTasks):
    with get_session() as session:
        if find_active_booking(session, payload.department, payload.date, payload.time):
            raise HTTPException(status_code=409, detail=SLOT_TAKEN)

        meeting = {}
        if payload.payment_status == "PAID" and payload.appointment_type == "Online":
            try:
                meeting = await create_zoom_meeting(
                    name=payload.name,
                    department=payload.department,
                    date=payload.date,
                    time=payload.time,
                )
            except ZoomError as e:
                # Admin can still create the meeting when confirming
                logger.warning(f"Zoom auto-creation failed for paid online booking: {e}")

        booking = Booking(
            name=payload.name,
            email=payload.email,
            phone=payload.phone,
            appointment_type=payload.appointment_type,
            department=payload.department,
            date=payload.date,
            time=payload.time,
            message=payload.message,
            file_data=payload.file_base64 or None,
            file_name=payload.file_name if payload.file_base64 else None,
            file_type=payload.file_type if payload.file_base64 else None,
            payment_id=payload.payment_id,
            order_id=payload.order_id,
            payment_status=payload.payment_status,
            amount_paid=payload.amount_paid,
            **meeting,
        )
        session.add(booking)
        try:
            session.commit()
        except IntegrityError:
            session.rollback()
            logger.info(f"Concurrent booking lost the race for {payload.department} {payload.date} {payload.time}")
            raise HTTPException(status_code=409, detail=SLOT_TAKEN)
        session.refresh(booking)
        logger.info(f"Booking saved: {booking.id}")

        background_tasks.add_task(notify_booking_created, booking)

        return {
            "success": True,
            "message": "Appointment booked & Zoom meeting created!" if booking.meeting_link else "Appointment booked successfully",
            "booking_id": booking.id,
            "meeting_link": booking.meeting_link,
        }


@router.get("/booking", dependencies=[Depends(require_admin)])
async def list_bookings(limit: int = 100):
    with get_session() as session:
        stmt = select(Booking).order_by(Booking.created_at.desc(), Booking.id.desc()).limit(limit)
        return [booking_to_dict(b) for b in session.exec(stmt).all()]


@router.put("/booking", dependencies=[Depends(require_admin)])
async def update_booking_status(payload: BookingStatusUpdate, background_tasks: BackgroundTasks):
    with get_session() as session:
        booking = session.get(Booking, payload.id)
        if not booking:
            raise HTTPException(status_code=404, detail="Booking not found")

        # Reactivating a cancelled booking must not take a slot someone else now holds
        if booking.status == "cancelled" and payload.status != "cancelled":
            holder = find_active_booking(session, booking.department, booking.date, booking.time)
            if holder and holder.id != booking.id:
                raise HTTPException(status_code=409, detail=SLOT_TAKEN)

        meeting = {}
        if payload.status == "confirmed" and booking.appointment_type == "Online" and not booking.meeting_link:
            try:
                meeting = await create_zoom_meeting(
                    name=booking.name,
                    department=booking.department,
                    date=booking.date,
                    time=booking.time,
                )
            except ZoomError as e:
                logger.error(f"Zoom creation failed while confirming booking {booking.id}: {e}")
                raise HTTPException(status_code=500, detail="Failed to create Zoom meeting. Try again.")
            for key, value in meeting.items():
                setattr(booking, key, value)

        next_slot: Optional[dict] = None
        if payload.status == "cancelled":
            try:
                next_slot = find_next_available_slot(session, booking.department, booking.date, booking.time)
            except Exception as e:
                logger.error(f"Next slot lookup failed for booking {booking.id}: {e}")

        booking.status = payload.status
        booking.cancel_reason = payload.cancel_reason
        booking.next_suggested_slot = json.dumps(next_slot) if next_slot else None
        booking.updated_at = datetime.utcnow()
        session.add(booking)
        try:
            session.commit()
        except IntegrityError:
            session.rollback()
            if meeting:
                logger.warning(f"Booking {payload.id} lost its slot, Zoom meeting {meeting['meeting_id']} is unused")
            raise HTTPException(status_code=409, detail=SLOT_TAKEN)
        session.refresh(booking)
        logger.info(f"Booking {booking.id} marked {booking.status}")

        background_tasks.add_task(notify_status_change, booking, payload.status, next_slot)

        return {
            "message": "Updated successfully",
            "next_suggested_slot": next_slot,
            "meeting_link": booking.meeting_link,
            "meeting_id": booking.meeting_id,
        }


@router.delete("/booking", dependencies=[Depends(require_admin)])
async def delete_booking(id: Optional[int] = None):
    if id is None:
        raise HTTPException(status_code=400, detail="ID required")
    with get_session() as session:
        booking = session.get(Booking, id)
        if not booking:
            raise HTTPException(status_code=404, detail="Booking not found")
        session.delete(booking)
        session.commit()
        return {"message": "Deleted"}
