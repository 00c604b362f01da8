import logging
from datetime import datetime
from typing import Optional
from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from sqlmodel import select
from hospital.db import get_session
from hospital.models import Contact
from hospital.routes.auth import require_admin
from hospital.schemas import ContactCreate, ContactStatusUpdate
from hospital.services.notifications import notify_contact_received


logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/contact", status_code=201)
async def create_contact(payload: ContactCreate, background_tasks: BackgroundTasks):
    contact = Contact(**payload.model_dump(), status="new")
    with get_session() as session:
        session.add(contact)
        session.commit()
        session.refresh(contact)
        logger.info(f"Contact message saved: {contact.id}")

        background_tasks.add_task(notify_contact_received, contact)

        return {"success": True, "data": contact}


@router.get("/contact", dependencies=[Depends(require_admin)])
async def list_contacts():
    with get_session() as session:
        stmt = select(Contact).order_by(Contact.created_at.desc(), Contact.id.desc())
        return session.exec(stmt).all()


@router.put("/contact", dependencies=[Depends(require_admin)])
async def update_contact_status(payload: ContactStatusUpdate):
    with get_session() as session:
        contact = session.get(Contact, payload.id)
        if not contact:
            raise HTTPException(status_code=404, detail="Contact not found")
        contact.status = payload.status
        contact.updated_at = datetime.utcnow()
        session.add(contact)
        session.commit()
        return {"message": "Status updated"}


@router.delete("/contact", dependencies=[Depends(require_admin)])
async def delete_contact(id: Optional[int] = None):
    if id is None:
        raise HTTPException(status_code=400, detail="ID required")
    with get_session() as session:
        contact = session.get(Contact, id)
        if not contact:
            raise HTTPException(status_code=404, detail="Contact not found")
        session.delete(contact)
        session.commit()
        return {"message": "Deleted successfully"}
