import logging
from typing import Optional

from sqlalchemy.orm import Session

from .. import aggregates
from ..envelope import require_fields
from ..models import Field, RiskPrediction, as_utc
from ..schemas import RiskPredictionCreate, RiskPredictionOut, RiskZone
from .access import get_owned_field

logger = logging.getLogger(__name__)

REQUIRED = ["field_id", "zone_id", "risk_level", "risk_type", "probability", "ai_confidence"]
RISK_LEVELS = ("high", "medium", "low")
PRIORITY_ORDER = {"critical": 4, "high": 3, "medium": 2, "low": 1}
MAX_RECOMMENDATIONS = 20


def build_risk_prediction(field: Field, owner_id: int, payload: RiskPredictionCreate) -> RiskPrediction:
    rec = RiskPrediction(
        field=field,
        zone_id=payload.zone_id,
        risk_level=payload.risk_level,
        risk_type=payload.risk_type,
        probability=payload.probability,
        ai_confidence=payload.ai_confidence,
        x=payload.coordinates.x if payload.coordinates else None,
        y=payload.coordinates.y if payload.coordinates else None,
        time_horizon=payload.time_horizon or "1week",
        factors=payload.factors.model_dump(by_alias=True, exclude_none=True) if payload.factors else None,
        recommendations=[r.model_dump(by_alias=True) for r in payload.recommendations] if payload.recommendations else None,
        owner_id=owner_id,
    )
    if payload.prediction_date:
        rec.prediction_date = as_utc(payload.prediction_date)
    return rec


def create_risk_prediction(db: Session, owner_id: int, payload: RiskPredictionCreate) -> RiskPredictionOut:
    require_fields(payload, REQUIRED)
    field = get_owned_field(db, owner_id, payload.field_id)

    rec = build_risk_prediction(field, owner_id, payload)
    db.add(rec)
    db.commit()
    db.refresh(rec)
    logger.info("Risk prediction %s (%s/%s, %s%%) on field %s",
                rec.id, rec.risk_type, rec.risk_level, rec.probability, field.field_id)
    return RiskPredictionOut.model_validate(rec)


def _owned(db: Session, owner_id: int, field: Field):
    return db.query(RiskPrediction).filter(
        RiskPrediction.field_pk == field.id, RiskPrediction.owner_id == owner_id
    )


def risk_predictions(db: Session, owner_id: int, field_id: str, risk_level: Optional[str] = None,
                     risk_type: Optional[str] = None, time_horizon: Optional[str] = None, limit: int = 20) -> dict:
    field = get_owned_field(db, owner_id, field_id)
    q = _owned(db, owner_id, field)
    if risk_level:
        q = q.filter(RiskPrediction.risk_level == risk_level)
    if risk_type:
        q = q.filter(RiskPrediction.risk_type == risk_type)
    if time_horizon:
        q = q.filter(RiskPrediction.time_horizon == time_horizon)
    rows = q.order_by(RiskPrediction.prediction_date.desc(), RiskPrediction.id.desc()).limit(limit).all()

    return {
        "fieldId": field.field_id,
        "fieldName": field.name,
        "riskPredictions": [RiskPredictionOut.model_validate(r) for r in rows],
    }


def risk_zone_map(db: Session, owner_id: int, field_id: str, time_horizon: str = "1week") -> dict:
    field = get_owned_field(db, owner_id, field_id)
    rows = (
        _owned(db, owner_id, field)
        .filter(RiskPrediction.time_horizon == time_horizon)
        .order_by(RiskPrediction.prediction_date.desc(), RiskPrediction.id.desc())
        .all()
    )

    # one entry per map cell, newest prediction wins
    zones = [RiskZone.model_validate(r) for r in aggregates.latest_by(rows, lambda r: (r.x, r.y))]
    return {
        "fieldId": field.field_id,
        "fieldName": field.name,
        "timeHorizon": time_horizon,
        "riskZoneMap": zones,
        "riskDistribution": {level: aggregates.count_where(rows, "risk_level", level) for level in RISK_LEVELS},
        "totalZones": len(zones),
    }


def risk_summary(db: Session, owner_id: int, field_id: str) -> dict:
    field = get_owned_field(db, owner_id, field_id)
    rows = _owned(db, owner_id, field).all()

    summary = {"totalPredictions": len(rows)}
    for level in RISK_LEVELS:
        summary[f"{level}RiskZones"] = aggregates.count_where(rows, "risk_level", level)
    summary["avgProbability"] = aggregates.round2(aggregates.mean(r.probability for r in rows))
    summary["avgAiConfidence"] = aggregates.round2(aggregates.mean(r.ai_confidence for r in rows))

    risk_types = [
        {
            "riskType": risk_type,
            "count": len(group),
            "avgProbability": aggregates.round2(aggregates.mean(r.probability for r in group)),
        }
        for risk_type, group in aggregates.group_by(rows, lambda r: r.risk_type).items()
    ]
    return {
        "fieldId": field.field_id,
        "fieldName": field.name,
        "summary": summary,
        "riskTypes": risk_types,
    }


def high_risk_zones(db: Session, owner_id: int, field_id: str, limit: int = 10) -> dict:
    field = get_owned_field(db, owner_id, field_id)
    rows = (
        _owned(db, owner_id, field)
        .filter(RiskPrediction.risk_level == "high")
        .order_by(RiskPrediction.probability.desc(), RiskPrediction.prediction_date.desc())
        .limit(limit)
        .all()
    )
    return {
        "fieldId": field.field_id,
        "fieldName": field.name,
        "highRiskZones": [RiskPredictionOut.model_validate(r) for r in rows],
    }


def risk_recommendations(db: Session, owner_id: int, field_id: str, risk_type: Optional[str] = None,
                         risk_level: Optional[str] = None) -> dict:
    field = get_owned_field(db, owner_id, field_id)
    q = _owned(db, owner_id, field)
    if risk_type:
        q = q.filter(RiskPrediction.risk_type == risk_type)
    if risk_level:
        q = q.filter(RiskPrediction.risk_level == risk_level)
    rows = q.order_by(RiskPrediction.probability.desc(), RiskPrediction.id.asc()).all()

    recommendations = [
        {**rec, "riskType": r.risk_type, "riskLevel": r.risk_level, "probability": r.probability}
        for r in rows
        for rec in (r.recommendations or [])
    ]
    # stable sort keeps the probability order within a priority
    recommendations.sort(key=lambda rec: PRIORITY_ORDER.get(rec.get("priority"), 0), reverse=True)

    return {
        "fieldId": field.field_id,
        "fieldName": field.name,
        "recommendations": recommendations[:MAX_RECOMMENDATIONS],
    }
