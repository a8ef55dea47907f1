from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field as PydField, field_validator
from pydantic.alias_generators import to_camel

HealthStatus = Literal["excellent", "good", "fair", "poor"]
TrendDirection = Literal["increasing", "decreasing", "stable"]
FieldStatus = Literal["active", "inactive", "maintenance"]
SoilType = Literal["clay", "sandy", "loamy", "silty", "peaty", "chalky"]
Period = Literal["6M", "1Y"]
AlertType = Literal["drought", "pest", "disease", "irrigation", "nutrient", "weather", "equipment"]
Severity = Literal["low", "medium", "high", "critical"]
AlertStatus = Literal["active", "acknowledged", "resolved", "dismissed"]
RiskLevel = Literal["low", "medium", "high"]
RiskType = Literal["drought", "pest", "disease", "weather", "nutrient", "equipment"]
TimeHorizon = Literal["1day", "3days", "1week", "2weeks", "1month"]


class CamelModel(BaseModel):
    # camelCase on the wire, snake_case in Python, readable from ORM rows
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class Coordinates(CamelModel):
    x: float
    y: float


# ---------------------------
# Users
# ---------------------------
class UserRegister(CamelModel):
    full_name: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class UserLogin(CamelModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class UserOut(CamelModel):
    id: int
    full_name: str
    username: str
    email: str
    created_at: datetime


# ---------------------------
# Fields
# ---------------------------
class Location(CamelModel):
    latitude: float = PydField(..., ge=-90, le=90)
    longitude: float = PydField(..., ge=-180, le=180)


class FieldCreate(CamelModel):
    field_id: Optional[str] = None
    name: Optional[str] = None
    location: Optional[Location] = None
    area: Optional[float] = PydField(None, gt=0)
    crop_type: Optional[str] = None
    planting_date: Optional[datetime] = None
    expected_harvest_date: Optional[datetime] = None
    status: Optional[FieldStatus] = None

    @field_validator("field_id", "name")
    @classmethod
    def strip(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if isinstance(v, str) else v


class FieldUpdate(CamelModel):
    name: Optional[str] = None
    location: Optional[Location] = None
    area: Optional[float] = PydField(None, gt=0)
    crop_type: Optional[str] = None
    planting_date: Optional[datetime] = None
    expected_harvest_date: Optional[datetime] = None
    status: Optional[FieldStatus] = None


class FieldOut(CamelModel):
    id: int
    field_id: str
    name: str
    location: Location
    area: float
    crop_type: str
    planting_date: datetime
    expected_harvest_date: Optional[datetime] = None
    status: FieldStatus
    created_at: datetime
    updated_at: datetime


# ---------------------------
# Soil health
# ---------------------------
class SoilRecommendation(CamelModel):
    text: str
    category: Optional[str] = None
    priority: Optional[Literal["low", "medium", "high"]] = None


class SoilHealthCreate(CamelModel):
    field_id: Optional[str] = None
    zone_id: Optional[str] = None
    ph_level: Optional[float] = PydField(None, ge=0, le=14)
    moisture: Optional[float] = PydField(None, ge=0, le=100)
    nitrogen: Optional[float] = PydField(None, ge=0, le=100)
    phosphorus: Optional[float] = PydField(None, ge=0, le=100)
    potassium: Optional[float] = PydField(None, ge=0, le=100)
    organic_matter: Optional[float] = PydField(None, ge=0, le=100)
    soil_temperature: Optional[float] = None
    soil_type: Optional[SoilType] = None
    measurement_date: Optional[datetime] = None
    recommendations: Optional[List[SoilRecommendation]] = None


class SoilHealthOut(CamelModel):
    id: int
    field_id: str
    zone_id: str
    ph_level: float
    moisture: float
    nitrogen: float
    phosphorus: float
    potassium: float
    organic_matter: Optional[float] = None
    soil_temperature: Optional[float] = None
    soil_type: Optional[str] = None
    health_score: int
    health_status: HealthStatus
    measurement_date: datetime
    recommendations: Optional[List[SoilRecommendation]] = None


class SoilZoneOverview(CamelModel):
    zone_id: str
    ph_level: float
    moisture: float
    nitrogen: float
    phosphorus: float
    potassium: float
    health_status: HealthStatus
    health_score: int
    measurement_date: datetime


# ---------------------------
# Spectral health
# ---------------------------
class SensorData(CamelModel):
    vegetation_index: Optional[float] = None
    moisture_index: Optional[float] = None
    temperature_index: Optional[float] = None


class SpectralHealthCreate(CamelModel):
    field_id: Optional[str] = None
    zone_id: Optional[str] = None
    ndvi_value: Optional[float] = PydField(None, ge=0, le=1)
    health_percentage: Optional[float] = PydField(None, ge=0, le=100)
    coordinates: Optional[Coordinates] = None
    sensor_data: Optional[SensorData] = None
    measurement_date: Optional[datetime] = None


class SpectralHealthUpdate(CamelModel):
    zone_id: Optional[str] = None
    ndvi_value: Optional[float] = PydField(None, ge=0, le=1)
    health_percentage: Optional[float] = PydField(None, ge=0, le=100)
    coordinates: Optional[Coordinates] = None
    sensor_data: Optional[SensorData] = None
    measurement_date: Optional[datetime] = None


class SpectralHealthOut(CamelModel):
    id: int
    field_id: str
    zone_id: str
    ndvi_value: float
    health_percentage: float
    health_status: HealthStatus
    coordinates: Optional[Coordinates] = None
    sensor_data: Optional[SensorData] = None
    measurement_date: datetime


class SpectralZone(CamelModel):
    zone_id: str
    health_percentage: float
    health_status: HealthStatus
    coordinates: Optional[Coordinates] = None
    measurement_date: datetime


# ---------------------------
# Temporal analysis
# ---------------------------
class EnvironmentalConditions(CamelModel):
    temperature: float
    humidity: float
    rainfall: float


class TrendData(CamelModel):
    vegetation_trend: TrendDirection = "stable"
    moisture_trend: TrendDirection = "stable"


class TemporalCreate(CamelModel):
    field_id: Optional[str] = None
    period: Optional[Period] = None
    vegetation_health: Optional[float] = PydField(None, ge=0, le=100)
    moisture: Optional[float] = PydField(None, ge=0, le=100)
    environmental_conditions: Optional[EnvironmentalConditions] = None
    measurement_date: Optional[datetime] = None


class TemporalOut(CamelModel):
    id: int
    field_id: str
    period: Period
    vegetation_health: float
    moisture: float
    environmental_conditions: EnvironmentalConditions
    measurement_date: datetime
    trend_data: TrendData


class EnvironmentalPoint(CamelModel):
    environmental_conditions: EnvironmentalConditions
    measurement_date: datetime


class VegetationMoisturePoint(CamelModel):
    vegetation_health: float
    moisture: float
    measurement_date: datetime


# ---------------------------
# Alerts
# ---------------------------
class AlertMetadata(CamelModel):
    sensor_data: Optional[Dict[str, Any]] = None
    weather_conditions: Optional[Dict[str, Any]] = None
    recommendations: Optional[List[str]] = None


class AlertCreate(CamelModel):
    field_id: Optional[str] = None
    zone_id: Optional[str] = None
    alert_type: Optional[AlertType] = None
    severity: Optional[Severity] = None
    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[int] = PydField(None, ge=1, le=5)
    ai_confidence: Optional[float] = PydField(None, ge=0, le=100)
    metadata: Optional[AlertMetadata] = None


class AlertStatusUpdate(CamelModel):
    status: Optional[str] = None


class AlertOut(CamelModel):
    id: int
    field_id: str
    field_name: str
    zone_id: str
    alert_type: AlertType
    severity: Severity
    title: str
    description: str
    status: AlertStatus
    priority: int
    detected_at: datetime
    resolved_at: Optional[datetime] = None
    ai_confidence: float
    metadata: Optional[AlertMetadata] = PydField(
        None, validation_alias="alert_metadata", serialization_alias="metadata"
    )


# ---------------------------
# Risk predictions
# ---------------------------
class RiskRecommendation(CamelModel):
    action: str
    priority: Optional[Severity] = None
    description: Optional[str] = None


class RiskFactors(CamelModel):
    weather: Optional[Dict[str, Any]] = None
    soil: Optional[Dict[str, Any]] = None
    vegetation: Optional[Dict[str, Any]] = None


class RiskPredictionCreate(CamelModel):
    field_id: Optional[str] = None
    zone_id: Optional[str] = None
    risk_level: Optional[RiskLevel] = None
    risk_type: Optional[RiskType] = None
    probability: Optional[float] = PydField(None, ge=0, le=100)
    ai_confidence: Optional[float] = PydField(None, ge=0, le=100)
    coordinates: Optional[Coordinates] = None
    time_horizon: Optional[TimeHorizon] = None
    prediction_date: Optional[datetime] = None
    factors: Optional[RiskFactors] = None
    recommendations: Optional[List[RiskRecommendation]] = None


class RiskPredictionOut(CamelModel):
    id: int
    field_id: str
    zone_id: str
    risk_level: RiskLevel
    risk_type: RiskType
    probability: float
    ai_confidence: float
    coordinates: Optional[Coordinates] = None
    prediction_date: datetime
    time_horizon: TimeHorizon
    factors: Optional[RiskFactors] = None
    recommendations: Optional[List[RiskRecommendation]] = None


class RiskZone(CamelModel):
    zone_id: str
    coordinates: Optional[Coordinates] = None
    risk_level: RiskLevel
    risk_type: RiskType
    probability: float
    ai_confidence: float
