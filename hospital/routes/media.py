import asyncio
import logging
from typing import Optional
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from sqlmodel import select
from hospital.db import get_session
from hospital.models import AboutImage, HeroImage, Specialist
from hospital.routes.auth import require_admin
from hospital.schemas import AboutImageCreate, HeroImageCreate
from hospital.services.storage import ALLOWED_IMAGE_TYPES, StorageError, upload_image


logger = logging.getLogger(__name__)

router = APIRouter()


async def _store(file: UploadFile, folder: str) -> str:
    if file.content_type not in ALLOWED_IMAGE_TYPES:
        raise HTTPException(status_code=400, detail=f"Unsupported image type: {file.content_type}")
    data = await file.read()
    if not data:
        raise HTTPException(status_code=400, detail="Empty file")
    try:
        return await asyncio.to_thread(upload_image, data, file.filename, file.content_type, folder)
    except StorageError as e:
        logger.error(f"Upload to {folder} failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))


def _delete(model, id: Optional[int]):
    if id is None:
        raise HTTPException(status_code=400, detail="ID required")
    with get_session() as session:
        row = session.get(model, id)
        if not row:
            raise HTTPException(status_code=404, detail=f"{model.__name__} not found")
        session.delete(row)
        session.commit()
        return {"success": True}


@router.post("/upload", dependencies=[Depends(require_admin)])
async def upload(file: Optional[UploadFile] = File(None)):
    if file is None:
        raise HTTPException(status_code=400, detail="No file")
    return {"url": await _store(file, "hero")}


# ---- Specialists ----

@router.get("/specialists")
async def list_specialists():
    with get_session() as session:
        return session.exec(select(Specialist).order_by(Specialist.created_at.desc(), Specialist.id.desc())).all()


@router.post("/specialists", status_code=201, dependencies=[Depends(require_admin)])
async def add_specialist(name: Optional[str] = Form(None), image: Optional[UploadFile] = File(None)):
    if not name or not name.strip() or image is None:
        raise HTTPException(status_code=400, detail="Name and image are required")
    url = await _store(image, "specialists")
    specialist = Specialist(name=name.strip(), image=url)
    with get_session() as session:
        session.add(specialist)
        session.commit()
        session.refresh(specialist)
        logger.info(f"Specialist added: {specialist.name}")
        return specialist


@router.delete("/specialists", dependencies=[Depends(require_admin)])
async def delete_specialist(id: Optional[int] = None):
    return _delete(Specialist, id)


# ---- Hero images ----

@router.get("/hero-images")
async def list_hero_images():
    with get_session() as session:
        stmt = select(HeroImage).where(HeroImage.active == True).order_by(  # noqa: E712
            HeroImage.created_at.desc(), HeroImage.id.desc()
        )
        return session.exec(stmt).all()


@router.post("/hero-images", dependencies=[Depends(require_admin)])
async def add_hero_image(payload: HeroImageCreate):
    hero = HeroImage(image=payload.image, active=True)
    with get_session() as session:
        session.add(hero)
        session.commit()
        session.refresh(hero)
        return hero


@router.delete("/hero-images", dependencies=[Depends(require_admin)])
async def delete_hero_image(id: Optional[int] = None):
    return _delete(HeroImage, id)


# ---- About page images ----

@router.get("/about-images")
async def list_about_images(section: Optional[str] = None):
    with get_session() as session:
        stmt = select(AboutImage).where(AboutImage.active == True)  # noqa: E712
        if section:
            stmt = stmt.where(AboutImage.section == section)
        return session.exec(stmt.order_by(AboutImage.created_at.desc(), AboutImage.id.desc())).all()


@router.post("/about-images", dependencies=[Depends(require_admin)])
async def add_about_image(payload: AboutImageCreate):
    about = AboutImage(**payload.model_dump())
    with get_session() as session:
        session.add(about)
        session.commit()
        session.refresh(about)
        return about


@router.delete("/about-images", dependencies=[Depends(require_admin)])
async def delete_about_image(id: Optional[int] = None):
    return _delete(AboutImage, id)
