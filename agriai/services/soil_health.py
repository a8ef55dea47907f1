import logging
from datetime import timedelta
from typing import Optional

from sqlalchemy.orm import Session

from .. import aggregates, scoring
from ..envelope import ApiError, require_fields, camel_keys
from ..models import Field, SoilHealth, as_utc, utcnow
from ..schemas import SoilHealthCreate, SoilHealthOut, SoilZoneOverview
from .access import get_owned_field

logger = logging.getLogger(__name__)

REQUIRED = ["field_id", "zone_id", "ph_level", "moisture", "nitrogen", "phosphorus", "potassium"]


def build_soil_health(field: Field, owner_id: int, payload: SoilHealthCreate) -> SoilHealth:
    """New record with score and status derived from the measured values."""
    score = scoring.soil_health_score(
        payload.ph_level, payload.moisture, payload.nitrogen, payload.phosphorus, payload.potassium
    )
    rec = SoilHealth(
        field=field,
        zone_id=payload.zone_id,
        ph_level=payload.ph_level,
        moisture=payload.moisture,
        nitrogen=payload.nitrogen,
        phosphorus=payload.phosphorus,
        potassium=payload.potassium,
        organic_matter=payload.organic_matter,
        soil_temperature=payload.soil_temperature,
        soil_type=payload.soil_type,
        health_score=score,
        health_status=scoring.classify_health(score),
        recommendations=[r.model_dump(by_alias=True) for r in payload.recommendations] if payload.recommendations else None,
        owner_id=owner_id,
    )
    if payload.measurement_date:
        rec.measurement_date = as_utc(payload.measurement_date)
    return rec


def create_soil_health(db: Session, owner_id: int, payload: SoilHealthCreate) -> SoilHealthOut:
    require_fields(payload, REQUIRED)
    field = get_owned_field(db, owner_id, payload.field_id)

    rec = build_soil_health(field, owner_id, payload)
    db.add(rec)
    db.commit()
    db.refresh(rec)
    logger.info("Soil reading %s for field %s zone %s: score=%s (%s)",
                rec.id, field.field_id, rec.zone_id, rec.health_score, rec.health_status)
    return SoilHealthOut.model_validate(rec)


def _newest_first(db: Session, field: Field):
    return (
        db.query(SoilHealth)
        .filter(SoilHealth.field_pk == field.id)
        .order_by(SoilHealth.measurement_date.desc(), SoilHealth.id.desc())
    )


def soil_overview(db: Session, owner_id: int, field_id: str, limit: int = 10) -> dict:
    field = get_owned_field(db, owner_id, field_id)
    rows = _newest_first(db, field).limit(limit).all()

    zones = [SoilZoneOverview.model_validate(r) for r in aggregates.latest_by(rows, lambda r: r.zone_id)]
    return {
        "fieldId": field.field_id,
        "fieldName": field.name,
        "soilOverview": zones,
        "totalZones": len(zones),
    }


def soil_by_zone(db: Session, owner_id: int, field_id: str, zone_id: str, limit: int = 5) -> dict:
    field = get_owned_field(db, owner_id, field_id)
    rows = _newest_first(db, field).filter(SoilHealth.zone_id == zone_id).limit(limit).all()
    if not rows:
        raise ApiError(404, "No soil health data found for this zone")

    return {
        "fieldId": field.field_id,
        "zoneId": zone_id,
        "data": [SoilHealthOut.model_validate(r) for r in rows],
    }


def soil_summary(db: Session, owner_id: int, field_id: str) -> dict:
    field = get_owned_field(db, owner_id, field_id)
    rows = db.query(SoilHealth).filter(SoilHealth.field_pk == field.id).all()

    def avg(attr: str) -> float:
        return aggregates.round2(aggregates.mean(getattr(r, attr) for r in rows))

    return {
        "fieldId": field.field_id,
        "fieldName": field.name,
        "totalZones": len(aggregates.distinct(r.zone_id for r in rows)),
        "averagePhLevel": avg("ph_level"),
        "averageMoisture": avg("moisture"),
        "averageNitrogen": avg("nitrogen"),
        "averagePhosphorus": avg("phosphorus"),
        "averagePotassium": avg("potassium"),
        "averageHealthScore": avg("health_score"),
        "healthStatusDistribution": aggregates.distribution(r.health_status for r in rows),
    }


def soil_trends(db: Session, owner_id: int, field_id: str, zone_id: Optional[str] = None, days: int = 30) -> dict:
    field = get_owned_field(db, owner_id, field_id)

    q = db.query(SoilHealth).filter(
        SoilHealth.field_pk == field.id,
        SoilHealth.measurement_date >= utcnow() - timedelta(days=days),
    )
    if zone_id:
        q = q.filter(SoilHealth.zone_id == zone_id)
    rows = q.order_by(SoilHealth.measurement_date.asc(), SoilHealth.id.asc()).all()

    return {
        "fieldId": field.field_id,
        "zoneId": zone_id or "all",
        "period": f"{days} days",
        "data": [SoilHealthOut.model_validate(r) for r in rows],
        "trends": camel_keys(scoring.soil_trends(rows)),
    }
