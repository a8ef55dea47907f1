from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from .db import get_db
from .envelope import api_response
from .models import User
from .schemas import RiskPredictionCreate, RiskLevel, RiskType, TimeHorizon
from .security import get_current_user
from .services import risk

router = APIRouter(prefix="/api/v1/risk-predictions", tags=["risk-predictions"])


@router.post("/")
def create_risk_prediction(payload: RiskPredictionCreate,
                           db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    rec = risk.create_risk_prediction(db, user.id, payload)
    return api_response(rec, "Risk prediction created successfully", 201)


@router.get("/field/{field_id}")
def predictions(
    field_id: str,
    risk_level: Optional[RiskLevel] = Query(None, alias="riskLevel"),
    risk_type: Optional[RiskType] = Query(None, alias="riskType"),
    time_horizon: Optional[TimeHorizon] = Query(None, alias="timeHorizon"),
    limit: int = Query(20, ge=1, le=500),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    data = risk.risk_predictions(db, user.id, field_id, risk_level=risk_level, risk_type=risk_type,
                                 time_horizon=time_horizon, limit=limit)
    return api_response(data, "Risk predictions retrieved successfully")


@router.get("/field/{field_id}/map")
def zone_map(field_id: str, time_horizon: TimeHorizon = Query("1week", alias="timeHorizon"),
             db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    data = risk.risk_zone_map(db, user.id, field_id, time_horizon=time_horizon)
    return api_response(data, "Risk zone map retrieved successfully")


@router.get("/field/{field_id}/summary")
def summary(field_id: str, db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return api_response(risk.risk_summary(db, user.id, field_id), "Risk summary retrieved successfully")


@router.get("/field/{field_id}/high-risk")
def high_risk(field_id: str, limit: int = Query(10, ge=1, le=500),
              db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    data = risk.high_risk_zones(db, user.id, field_id, limit=limit)
    return api_response(data, "High risk zones retrieved successfully")


@router.get("/field/{field_id}/recommendations")
def recommendations(
    field_id: str,
    risk_type: Optional[RiskType] = Query(None, alias="riskType"),
    risk_level: Optional[RiskLevel] = Query(None, alias="riskLevel"),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    data = risk.risk_recommendations(db, user.id, field_id, risk_type=risk_type, risk_level=risk_level)
    return api_response(data, "Risk recommendations retrieved successfully")
