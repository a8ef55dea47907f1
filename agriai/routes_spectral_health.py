from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from .db import get_db
from .envelope import api_response
from .models import User
from .schemas import SpectralHealthCreate, SpectralHealthUpdate
from .security import get_current_user
from .services import spectral_health

router = APIRouter(prefix="/api/v1/spectral-health", tags=["spectral-health"])


@router.post("/create-data")
def create_spectral_health(payload: SpectralHealthCreate,
                           db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    rec = spectral_health.create_spectral_health(db, user.id, payload)
    return api_response(rec, "Spectral health data created successfully", 201)


@router.get("/field/{field_id}/map")
def health_map(field_id: str, limit: int = Query(50, ge=1, le=500),
               db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    data = spectral_health.spectral_map(db, user.id, field_id, limit=limit)
    return api_response(data, "Spectral health map retrieved successfully")


@router.get("/field/{field_id}/zone/{zone_id}")
def by_zone(field_id: str, zone_id: str, limit: int = Query(10, ge=1, le=500),
            db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    data = spectral_health.spectral_by_zone(db, user.id, field_id, zone_id, limit=limit)
    return api_response(data, "Spectral health data for zone retrieved successfully")


@router.get("/field/{field_id}/summary")
def summary(field_id: str, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    data = spectral_health.spectral_summary(db, user.id, field_id)
    return api_response(data, "Spectral health summary retrieved successfully")


@router.put("/update-data/{record_id}")
def update_spectral_health(record_id: int, payload: SpectralHealthUpdate,
                           db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    rec = spectral_health.update_spectral_health(db, user.id, record_id, payload)
    return api_response(rec, "Spectral health data updated successfully")
