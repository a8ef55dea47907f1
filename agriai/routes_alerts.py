from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from .db import get_db
from .envelope import api_response
from .models import User
from .schemas import AlertCreate, AlertStatusUpdate, AlertType, AlertStatus, Severity
from .security import get_current_user
from .services import alerts

router = APIRouter(prefix="/api/v1/alerts", tags=["alerts"])


@router.post("/")
def create_alert(payload: AlertCreate, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return api_response(alerts.create_alert(db, user.id, payload), "Alert created successfully", 201)


@router.get("/active")
def active_alerts(
    severity: Optional[Severity] = None,
    alert_type: Optional[AlertType] = Query(None, alias="alertType"),
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    data = alerts.active_alerts(db, user.id, severity=severity, alert_type=alert_type, limit=limit)
    return api_response(data, "Active alerts retrieved successfully")


@router.get("/summary")
def alert_summary(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return api_response(alerts.alert_summary(db, user.id), "Alert summary retrieved successfully")


@router.get("/recent")
def recent_alerts(limit: int = Query(5, ge=1, le=100),
                  db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return api_response(alerts.recent_alerts(db, user.id, limit=limit), "Recent alerts retrieved successfully")


@router.get("/field/{field_id}")
def alerts_by_field(
    field_id: str,
    status: AlertStatus = "active",
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    data = alerts.alerts_by_field(db, user.id, field_id, status=status, limit=limit)
    return api_response(data, "Field alerts retrieved successfully")


@router.put("/{alert_id}/status")
def update_alert_status(alert_id: int, payload: AlertStatusUpdate,
                        db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    rec = alerts.update_alert_status(db, user.id, alert_id, payload.status)
    return api_response(rec, "Alert status updated successfully")
