import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from .. import aggregates
from ..envelope import ApiError, require_fields
from ..models import Alert, Field, utcnow
from ..schemas import AlertCreate, AlertOut
from .access import get_owned_field

logger = logging.getLogger(__name__)

REQUIRED = ["field_id", "zone_id", "alert_type", "severity", "title", "description"]
ALERT_STATUSES = ("active", "acknowledged", "resolved", "dismissed")
SEVERITIES = ("critical", "high", "medium", "low")


def build_alert(field: Field, owner_id: int, payload: AlertCreate) -> Alert:
    return Alert(
        field=field,
        zone_id=payload.zone_id,
        alert_type=payload.alert_type,
        severity=payload.severity,
        title=payload.title,
        description=payload.description,
        priority=payload.priority if payload.priority is not None else 3,
        ai_confidence=payload.ai_confidence if payload.ai_confidence is not None else 85,
        alert_metadata=payload.metadata.model_dump(by_alias=True, exclude_none=True) if payload.metadata else None,
        owner_id=owner_id,
    )


def create_alert(db: Session, owner_id: int, payload: AlertCreate) -> AlertOut:
    require_fields(payload, REQUIRED)
    field = get_owned_field(db, owner_id, payload.field_id)

    rec = build_alert(field, owner_id, payload)
    db.add(rec)
    db.commit()
    db.refresh(rec)
    logger.info("Alert %s (%s/%s) raised on field %s", rec.id, rec.alert_type, rec.severity, field.field_id)
    return AlertOut.model_validate(rec)


def _owned(db: Session, owner_id: int):
    return db.query(Alert).filter(Alert.owner_id == owner_id)


def _newest_first(q):
    return q.order_by(Alert.detected_at.desc(), Alert.id.desc())


def active_alerts(db: Session, owner_id: int, severity: Optional[str] = None,
                  alert_type: Optional[str] = None, limit: int = 10) -> dict:
    q = _owned(db, owner_id).filter(Alert.status == "active")
    if severity:
        q = q.filter(Alert.severity == severity)
    if alert_type:
        q = q.filter(Alert.alert_type == alert_type)

    total = q.count()
    rows = _newest_first(q).limit(limit).all()
    return {"alerts": [AlertOut.model_validate(r) for r in rows], "totalAlerts": total}


def alerts_by_field(db: Session, owner_id: int, field_id: str, status: str = "active", limit: int = 10) -> dict:
    field = get_owned_field(db, owner_id, field_id)
    q = _owned(db, owner_id).filter(Alert.field_pk == field.id, Alert.status == status)
    rows = _newest_first(q).limit(limit).all()
    return {
        "fieldId": field.field_id,
        "fieldName": field.name,
        "alerts": [AlertOut.model_validate(r) for r in rows],
    }


def update_alert_status(db: Session, owner_id: int, alert_id: int, status: Optional[str]) -> AlertOut:
    if status not in ALERT_STATUSES:
        raise ApiError(400, "Valid status required: " + ", ".join(ALERT_STATUSES))

    rec = _owned(db, owner_id).filter(Alert.id == alert_id).first()
    if not rec:
        raise ApiError(404, "Alert not found")

    rec.status = status
    if status == "resolved":
        rec.resolved_at = utcnow()
    db.commit()
    db.refresh(rec)
    logger.info("Alert %s is now %s", alert_id, status)
    return AlertOut.model_validate(rec)


def alert_summary(db: Session, owner_id: int) -> dict:
    rows: List[Alert] = _owned(db, owner_id).all()
    active = [r for r in rows if r.status == "active"]

    summary = {
        "totalAlerts": len(rows),
        "activeAlerts": len(active),
        "resolvedAlerts": aggregates.count_where(rows, "status", "resolved"),
    }
    for severity in SEVERITIES:
        summary[f"{severity}Alerts"] = aggregates.count_where(rows, "severity", severity)

    alert_types = [
        {"alertType": t, "count": n}
        for t, n in aggregates.distribution(r.alert_type for r in active).items()
    ]
    return {"summary": summary, "alertTypes": alert_types}


def recent_alerts(db: Session, owner_id: int, limit: int = 5) -> dict:
    rows = _newest_first(_owned(db, owner_id)).limit(limit).all()
    return {"recentAlerts": [AlertOut.model_validate(r) for r in rows]}
