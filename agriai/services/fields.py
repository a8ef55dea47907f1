import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..envelope import ApiError, require_fields
from ..models import Field, as_utc
from ..schemas import FieldCreate, FieldUpdate
from .access import get_owned_field

logger = logging.getLogger(__name__)

REQUIRED = ["field_id", "name", "location", "area", "crop_type", "planting_date"]


def build_field(owner_id: int, payload: FieldCreate) -> Field:
    return Field(
        field_id=payload.field_id,
        name=payload.name,
        latitude=payload.location.latitude,
        longitude=payload.location.longitude,
        area=payload.area,
        crop_type=payload.crop_type,
        planting_date=as_utc(payload.planting_date),
        expected_harvest_date=as_utc(payload.expected_harvest_date) if payload.expected_harvest_date else None,
        status=payload.status or "active",
        owner_id=owner_id,
    )


def create_field(db: Session, owner_id: int, payload: FieldCreate) -> Field:
    require_fields(payload, REQUIRED)

    exists = db.query(Field).filter(Field.owner_id == owner_id, Field.field_id == payload.field_id).first()
    if exists:
        raise ApiError(409, "Field with this ID already exists")

    rec = build_field(owner_id, payload)
    db.add(rec)
    db.commit()
    db.refresh(rec)
    logger.info("Created field %s for user %s", rec.field_id, owner_id)
    return rec


def list_fields(db: Session, owner_id: int, status: Optional[str] = None, limit: int = 10) -> List[Field]:
    q = db.query(Field).filter(Field.owner_id == owner_id)
    if status:
        q = q.filter(Field.status == status)
    return q.order_by(Field.created_at.desc(), Field.id.desc()).limit(limit).all()


def get_field(db: Session, owner_id: int, field_id: str) -> Field:
    return get_owned_field(db, owner_id, field_id)


def update_field(db: Session, owner_id: int, field_id: str, payload: FieldUpdate) -> Field:
    rec = get_owned_field(db, owner_id, field_id)

    data = payload.model_dump(exclude_unset=True, exclude_none=True)
    changed = sorted(data)
    location = data.pop("location", None)
    if location:
        rec.latitude = location["latitude"]
        rec.longitude = location["longitude"]
    for key in ("planting_date", "expected_harvest_date"):
        if key in data:
            data[key] = as_utc(data[key])
    for key, value in data.items():
        setattr(rec, key, value)

    db.commit()
    db.refresh(rec)
    logger.info("Updated field %s: %s", rec.field_id, changed)
    return rec


def delete_field(db: Session, owner_id: int, field_id: str) -> None:
    rec = get_owned_field(db, owner_id, field_id)
    db.delete(rec)
    db.commit()
    logger.info("Deleted field %s for user %s", field_id, owner_id)


def field_summary(db: Session, owner_id: int) -> dict:
    statuses = [s for (s,) in db.query(Field.status).filter(Field.owner_id == owner_id).all()]
    total = len(statuses)
    active = statuses.count("active")
    inactive = statuses.count("inactive")
    return {
        "totalFields": total,
        "activeFields": active,
        "inactiveFields": inactive,
        "maintenanceFields": total - active - inactive,
    }
