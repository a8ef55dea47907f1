import logging

from sqlalchemy.orm import Session

from .. import scoring
from ..envelope import require_fields, camel_keys
from ..models import Field, TemporalAnalysis, as_utc, utcnow
from ..schemas import TemporalCreate, TemporalOut, EnvironmentalPoint, VegetationMoisturePoint
from .access import get_owned_field

logger = logging.getLogger(__name__)

REQUIRED = ["field_id", "period", "vegetation_health", "moisture", "environmental_conditions"]


def build_temporal(db: Session, field: Field, payload: TemporalCreate) -> TemporalAnalysis:
    """New point whose trendData compares it with the previous point of the same period."""
    env = payload.environmental_conditions
    rec = TemporalAnalysis(
        field_pk=field.id,
        period=payload.period,
        vegetation_health=payload.vegetation_health,
        moisture=payload.moisture,
        temperature=env.temperature,
        humidity=env.humidity,
        rainfall=env.rainfall,
        measurement_date=as_utc(payload.measurement_date) if payload.measurement_date else utcnow(),
    )

    previous = (
        db.query(TemporalAnalysis)
        .filter(
            TemporalAnalysis.field_pk == field.id,
            TemporalAnalysis.period == payload.period,
            TemporalAnalysis.measurement_date <= rec.measurement_date,
        )
        .order_by(TemporalAnalysis.measurement_date.desc(), TemporalAnalysis.id.desc())
        .first()
    )
    _set_trend_data(rec, previous)
    rec.field = field
    return rec


def _set_trend_data(rec: TemporalAnalysis, previous) -> None:
    trends = scoring.temporal_trends([previous, rec] if previous else [rec])
    rec.vegetation_trend = trends["vegetation_health"].direction
    rec.moisture_trend = trends["moisture"].direction


def _next_point(db: Session, rec: TemporalAnalysis):
    return (
        db.query(TemporalAnalysis)
        .filter(
            TemporalAnalysis.field_pk == rec.field_pk,
            TemporalAnalysis.period == rec.period,
            TemporalAnalysis.measurement_date > rec.measurement_date,
        )
        .order_by(TemporalAnalysis.measurement_date.asc(), TemporalAnalysis.id.asc())
        .first()
    )


def create_temporal(db: Session, owner_id: int, payload: TemporalCreate) -> TemporalOut:
    require_fields(payload, REQUIRED)
    field = get_owned_field(db, owner_id, payload.field_id)

    rec = build_temporal(db, field, payload)
    db.add(rec)
    # a backdated point becomes the predecessor of the point after it
    successor = _next_point(db, rec)
    if successor is not None:
        _set_trend_data(successor, rec)
    db.commit()
    db.refresh(rec)
    logger.info("Temporal point %s for field %s (%s)", rec.id, field.field_id, rec.period)
    return TemporalOut.model_validate(rec)


def _series(db: Session, field: Field, period: str, newest_first: bool = True):
    order = (
        (TemporalAnalysis.measurement_date.desc(), TemporalAnalysis.id.desc())
        if newest_first
        else (TemporalAnalysis.measurement_date.asc(), TemporalAnalysis.id.asc())
    )
    return (
        db.query(TemporalAnalysis)
        .filter(TemporalAnalysis.field_pk == field.id, TemporalAnalysis.period == period)
        .order_by(*order)
    )


def temporal_analysis(db: Session, owner_id: int, field_id: str, period: str = "6M", limit: int = 12) -> dict:
    field = get_owned_field(db, owner_id, field_id)
    rows = _series(db, field, period).limit(limit).all()

    return {
        "fieldId": field.field_id,
        "fieldName": field.name,
        "period": period,
        "data": [TemporalOut.model_validate(r) for r in rows],
        # trends run oldest -> newest over the returned window
        "trends": camel_keys(scoring.temporal_trends(rows[::-1])),
    }


def temporal_trends(db: Session, owner_id: int, field_id: str, period: str = "6M") -> dict:
    field = get_owned_field(db, owner_id, field_id)
    rows = _series(db, field, period, newest_first=False).all()

    return {
        "fieldId": field.field_id,
        "fieldName": field.name,
        "period": period,
        "trends": camel_keys(scoring.temporal_trends(rows)),
        "dataPoints": len(rows),
    }


def environmental_conditions(db: Session, owner_id: int, field_id: str, period: str = "6M", limit: int = 12) -> dict:
    field = get_owned_field(db, owner_id, field_id)
    rows = _series(db, field, period).limit(limit).all()
    return {
        "fieldId": field.field_id,
        "fieldName": field.name,
        "period": period,
        "environmentalData": [EnvironmentalPoint.model_validate(r) for r in rows],
    }


def vegetation_moisture(db: Session, owner_id: int, field_id: str, period: str = "6M", limit: int = 12) -> dict:
    field = get_owned_field(db, owner_id, field_id)
    rows = _series(db, field, period).limit(limit).all()
    return {
        "fieldId": field.field_id,
        "fieldName": field.name,
        "period": period,
        "vegetationMoistureData": [VegetationMoisturePoint.model_validate(r) for r in rows],
    }
