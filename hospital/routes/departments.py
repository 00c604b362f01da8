import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from hospital.db import get_session
from hospital.models import Department, Doctor
from hospital.routes.auth import require_admin
from hospital.schemas import DepartmentCreate, DoctorCreate


logger = logging.getLogger(__name__)

router = APIRouter()

# Shown until the admin adds real departments
DEFAULT_DEPARTMENTS = ["Pulmonology", "Orthopedics", "Gynaecology", "ENT"]


@router.get("/departments")
async def list_departments():
    with get_session() as session:
        departments = session.exec(select(Department).order_by(Department.name)).all()
        if not departments:
            return [{"id": None, "name": name} for name in DEFAULT_DEPARTMENTS]
        return departments


def find_department(session, name):
    return session.exec(select(Department).where(Department.name == name)).first()


@router.post("/departments", dependencies=[Depends(require_admin)])
async def add_department(payload: DepartmentCreate):
    with get_session() as session:
        if find_department(session, payload.name):
            raise HTTPException(status_code=409, detail="Department already exists")
        department = Department(name=payload.name)
        session.add(department)
        try:
            session.commit()
        except IntegrityError:
            session.rollback()
            raise HTTPException(status_code=409, detail="Department already exists")
        session.refresh(department)
        logger.info(f"Department added: {department.name}")
        return {"success": True, "data": department}


@router.delete("/departments", dependencies=[Depends(require_admin)])
async def delete_department(id: Optional[int] = None):
    if id is None:
        raise HTTPException(status_code=400, detail="ID required")
    with get_session() as session:
        department = session.get(Department, id)
        if not department:
            raise HTTPException(status_code=404, detail="Department not found")
        in_use = session.exec(select(Doctor).where(Doctor.department == department.name)).first()
        if in_use:
            raise HTTPException(status_code=409, detail="Department has doctors assigned")
        session.delete(department)
        session.commit()
        logger.info(f"Department deleted: {department.name}")
        return {"success": True}


@router.get("/doctors")
async def list_doctors(department: Optional[str] = None):
    with get_session() as session:
        stmt = select(Doctor)
        if department:
            stmt = stmt.where(Doctor.department == department)
        return session.exec(stmt.order_by(Doctor.name)).all()


@router.post("/doctors", dependencies=[Depends(require_admin)])
async def add_doctor(payload: DoctorCreate):
    doctor = Doctor(**payload.model_dump())
    with get_session() as session:
        session.add(doctor)
        session.commit()
        session.refresh(doctor)
        logger.info(f"Doctor added: {doctor.name} ({doctor.department})")
        return {"success": True, "data": doctor}


@router.delete("/doctors", dependencies=[Depends(require_admin)])
async def delete_doctor(id: Optional[int] = None):
    if id is None:
        raise HTTPException(status_code=400, detail="ID required")
    with get_session() as session:
        doctor = session.get(Doctor, id)
        if not doctor:
            raise HTTPException(status_code=404, detail="Doctor not found")
        session.delete(doctor)
        session.commit()
        return {"success": True}
