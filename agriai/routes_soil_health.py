from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from .db import get_db
from .envelope import api_response
from .models import User
from .schemas import SoilHealthCreate
from .security import get_current_user
from .services import soil_health

router = APIRouter(prefix="/api/v1/soil-health", tags=["soil-health"])


@router.post("/")
def create_soil_health(payload: SoilHealthCreate, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    rec = soil_health.create_soil_health(db, user.id, payload)
    return api_response(rec, "Soil health data created successfully", 201)


@router.get("/field/{field_id}/overview")
def overview(field_id: str, limit: int = Query(10, ge=1, le=500),
             db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    data = soil_health.soil_overview(db, user.id, field_id, limit=limit)
    return api_response(data, "Soil health overview retrieved successfully")


@router.get("/field/{field_id}/zone/{zone_id}")
def by_zone(field_id: str, zone_id: str, limit: int = Query(5, ge=1, le=500),
            db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    data = soil_health.soil_by_zone(db, user.id, field_id, zone_id, limit=limit)
    return api_response(data, "Soil health data for zone retrieved successfully")


@router.get("/field/{field_id}/summary")
def summary(field_id: str, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return api_response(soil_health.soil_summary(db, user.id, field_id), "Soil health summary retrieved successfully")


@router.get("/field/{field_id}/trends")
def trends(
    field_id: str,
    zone_id: Optional[str] = Query(None, alias="zoneId"),
    days: int = Query(30, ge=1, le=3650),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    data = soil_health.soil_trends(db, user.id, field_id, zone_id=zone_id, days=days)
    return api_response(data, "Soil health trends retrieved successfully")
