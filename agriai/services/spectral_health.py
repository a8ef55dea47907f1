import logging

from sqlalchemy.orm import Session

from .. import aggregates, scoring
from ..envelope import ApiError, require_fields
from ..models import Field, SpectralHealth, as_utc
from ..schemas import SpectralHealthCreate, SpectralHealthUpdate, SpectralHealthOut, SpectralZone
from .access import get_owned_field

logger = logging.getLogger(__name__)

REQUIRED = ["field_id", "zone_id", "ndvi_value", "health_percentage"]


def build_spectral_health(field: Field, payload: SpectralHealthCreate) -> SpectralHealth:
    rec = SpectralHealth(
        field=field,
        zone_id=payload.zone_id,
        ndvi_value=payload.ndvi_value,
        health_percentage=payload.health_percentage,
        health_status=scoring.classify_health(payload.health_percentage),
        x=payload.coordinates.x if payload.coordinates else None,
        y=payload.coordinates.y if payload.coordinates else None,
        sensor_data=payload.sensor_data.model_dump(by_alias=True) if payload.sensor_data else None,
    )
    if payload.measurement_date:
        rec.measurement_date = as_utc(payload.measurement_date)
    return rec


def create_spectral_health(db: Session, owner_id: int, payload: SpectralHealthCreate) -> SpectralHealthOut:
    require_fields(payload, REQUIRED)
    field = get_owned_field(db, owner_id, payload.field_id)

    rec = build_spectral_health(field, payload)
    db.add(rec)
    db.commit()
    db.refresh(rec)
    logger.info("Spectral reading %s for field %s zone %s: %s%% (%s)",
                rec.id, field.field_id, rec.zone_id, rec.health_percentage, rec.health_status)
    return SpectralHealthOut.model_validate(rec)


def _newest_first(db: Session, field: Field):
    return (
        db.query(SpectralHealth)
        .filter(SpectralHealth.field_pk == field.id)
        .order_by(SpectralHealth.measurement_date.desc(), SpectralHealth.id.desc())
    )


def spectral_map(db: Session, owner_id: int, field_id: str, limit: int = 50) -> dict:
    field = get_owned_field(db, owner_id, field_id)
    rows = _newest_first(db, field).limit(limit).all()

    zones = [SpectralZone.model_validate(r) for r in aggregates.latest_by(rows, lambda r: r.zone_id)]
    return {
        "fieldId": field.field_id,
        "fieldName": field.name,
        "spectralMap": zones,
        "totalZones": len(zones),
    }


def spectral_by_zone(db: Session, owner_id: int, field_id: str, zone_id: str, limit: int = 10) -> dict:
    field = get_owned_field(db, owner_id, field_id)
    rows = _newest_first(db, field).filter(SpectralHealth.zone_id == zone_id).limit(limit).all()
    return {
        "fieldId": field.field_id,
        "zoneId": zone_id,
        "data": [SpectralHealthOut.model_validate(r) for r in rows],
    }


def spectral_summary(db: Session, owner_id: int, field_id: str) -> dict:
    field = get_owned_field(db, owner_id, field_id)
    rows = db.query(SpectralHealth).filter(SpectralHealth.field_pk == field.id).all()

    return {
        "fieldId": field.field_id,
        "fieldName": field.name,
        "totalZones": len(aggregates.distinct(r.zone_id for r in rows)),
        "averageHealthPercentage": aggregates.round2(aggregates.mean(r.health_percentage for r in rows)),
        "averageNdviValue": aggregates.round2(aggregates.mean(r.ndvi_value for r in rows)),
        "healthStatusDistribution": aggregates.distribution(r.health_status for r in rows),
    }


def update_spectral_health(db: Session, owner_id: int, record_id: int, payload: SpectralHealthUpdate) -> SpectralHealthOut:
    rec = db.get(SpectralHealth, record_id)
    if not rec:
        raise ApiError(404, "Spectral health data not found")
    if rec.field.owner_id != owner_id:
        raise ApiError(403, "Access denied")

    data = payload.model_dump(exclude_unset=True, exclude_none=True)
    coordinates = data.pop("coordinates", None)
    if coordinates:
        rec.x, rec.y = coordinates["x"], coordinates["y"]
    if "sensor_data" in data:
        data["sensor_data"] = payload.sensor_data.model_dump(by_alias=True)
    if "measurement_date" in data:
        data["measurement_date"] = as_utc(data["measurement_date"])
    for key, value in data.items():
        setattr(rec, key, value)

    # status always follows the percentage
    rec.health_status = scoring.classify_health(rec.health_percentage)

    db.commit()
    db.refresh(rec)
    logger.info("Updated spectral reading %s: %s", record_id, sorted(data))
    return SpectralHealthOut.model_validate(rec)
