from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from .db import get_db
from .envelope import api_response
from .models import User
from .schemas import TemporalCreate, Period
from .security import get_current_user
from .services import temporal

router = APIRouter(prefix="/api/v1/temporal-analysis", tags=["temporal-analysis"])


@router.post("/create-temporal-data")
def create_temporal(payload: TemporalCreate, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    rec = temporal.create_temporal(db, user.id, payload)
    return api_response(rec, "Temporal analysis data created successfully", 201)


@router.get("/field/{field_id}")
def analysis(field_id: str, period: Period = "6M", limit: int = Query(12, ge=1, le=500),
             db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    data = temporal.temporal_analysis(db, user.id, field_id, period=period, limit=limit)
    return api_response(data, "Temporal analysis retrieved successfully")


@router.get("/field/{field_id}/trends")
def trends(field_id: str, period: Period = "6M",
           db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    data = temporal.temporal_trends(db, user.id, field_id, period=period)
    message = "Temporal trends retrieved successfully" if data["dataPoints"] else "No temporal data available"
    return api_response(data, message)


@router.get("/field/{field_id}/environmental")
def environmental(field_id: str, period: Period = "6M", limit: int = Query(12, ge=1, le=500),
                  db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    data = temporal.environmental_conditions(db, user.id, field_id, period=period, limit=limit)
    return api_response(data, "Environmental conditions retrieved successfully")


@router.get("/field/{field_id}/vegetation-moisture")
def vegetation_moisture(field_id: str, period: Period = "6M", limit: int = Query(12, ge=1, le=500),
                        db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    data = temporal.vegetation_moisture(db, user.id, field_id, period=period, limit=limit)
    return api_response(data, "Vegetation and moisture data retrieved successfully")
