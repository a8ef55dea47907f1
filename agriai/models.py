from datetime import datetime, timezone

from sqlalchemy import (
    Column, Integer, String, Float, Text, DateTime, ForeignKey, JSON, UniqueConstraint
)
from sqlalchemy.orm import relationship

from .db import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    # naive datetimes from clients are taken to be UTC already
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(120), nullable=False)
    username = Column(String(80), unique=True, index=True, nullable=False)
    email = Column(String(200), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    fields = relationship("Field", back_populates="owner", cascade="all, delete-orphan")


class Field(Base):
    __tablename__ = "fields"
    __table_args__ = (UniqueConstraint("owner_id", "field_id", name="uq_fields_owner_field_id"),)

    id = Column(Integer, primary_key=True, index=True)
    field_id = Column(String(64), index=True, nullable=False)  # public id, e.g. "A-1"
    name = Column(String(120), nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    area = Column(Float, nullable=False)  # acres
    crop_type = Column(String(80), nullable=False)
    planting_date = Column(DateTime(timezone=True), nullable=False)
    expected_harvest_date = Column(DateTime(timezone=True), nullable=True)
    status = Column(String(20), default="active", nullable=False)
    owner_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    owner = relationship("User", back_populates="fields")
    soil_health = relationship("SoilHealth", back_populates="field", cascade="all, delete-orphan")
    spectral_health = relationship("SpectralHealth", back_populates="field", cascade="all, delete-orphan")
    temporal_analysis = relationship("TemporalAnalysis", back_populates="field", cascade="all, delete-orphan")
    alerts = relationship("Alert", back_populates="field", cascade="all, delete-orphan")
    risk_predictions = relationship("RiskPrediction", back_populates="field", cascade="all, delete-orphan")

    @property
    def location(self) -> dict:
        return {"latitude": self.latitude, "longitude": self.longitude}


class SoilHealth(Base):
    __tablename__ = "soil_health"

    id = Column(Integer, primary_key=True)
    field_pk = Column(Integer, ForeignKey("fields.id"), index=True, nullable=False)
    zone_id = Column(String(40), index=True, nullable=False)
    ph_level = Column(Float, nullable=False)
    moisture = Column(Float, nullable=False)
    nitrogen = Column(Float, nullable=False)
    phosphorus = Column(Float, nullable=False)
    potassium = Column(Float, nullable=False)
    organic_matter = Column(Float, nullable=True)
    soil_temperature = Column(Float, nullable=True)
    soil_type = Column(String(20), nullable=True)
    health_score = Column(Integer, nullable=False)
    health_status = Column(String(20), nullable=False)
    measurement_date = Column(DateTime(timezone=True), default=utcnow, index=True, nullable=False)
    recommendations = Column(JSON, nullable=True)
    owner_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    field = relationship("Field", back_populates="soil_health")

    @property
    def field_id(self) -> str:
        return self.field.field_id


class SpectralHealth(Base):
    __tablename__ = "spectral_health"

    id = Column(Integer, primary_key=True)
    field_pk = Column(Integer, ForeignKey("fields.id"), index=True, nullable=False)
    zone_id = Column(String(40), index=True, nullable=False)  # e.g. "A-1", "B-2"
    ndvi_value = Column(Float, nullable=False)
    health_percentage = Column(Float, nullable=False)
    health_status = Column(String(20), nullable=False)
    x = Column(Float, nullable=True)
    y = Column(Float, nullable=True)
    sensor_data = Column(JSON, nullable=True)
    measurement_date = Column(DateTime(timezone=True), default=utcnow, index=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    field = relationship("Field", back_populates="spectral_health")

    @property
    def field_id(self) -> str:
        return self.field.field_id

    @property
    def coordinates(self):
        if self.x is None and self.y is None:
            return None
        return {"x": self.x, "y": self.y}


class TemporalAnalysis(Base):
    __tablename__ = "temporal_analysis"

    id = Column(Integer, primary_key=True)
    field_pk = Column(Integer, ForeignKey("fields.id"), index=True, nullable=False)
    period = Column(String(4), index=True, nullable=False)  # "6M" | "1Y"
    vegetation_health = Column(Float, nullable=False)
    moisture = Column(Float, nullable=False)
    temperature = Column(Float, nullable=False)
    humidity = Column(Float, nullable=False)
    rainfall = Column(Float, nullable=False)
    vegetation_trend = Column(String(12), default="stable", nullable=False)
    moisture_trend = Column(String(12), default="stable", nullable=False)
    measurement_date = Column(DateTime(timezone=True), default=utcnow, index=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    field = relationship("Field", back_populates="temporal_analysis")

    @property
    def field_id(self) -> str:
        return self.field.field_id

    @property
    def environmental_conditions(self) -> dict:
        return {"temperature": self.temperature, "humidity": self.humidity, "rainfall": self.rainfall}

    @property
    def trend_data(self) -> dict:
        return {"vegetation_trend": self.vegetation_trend, "moisture_trend": self.moisture_trend}


class Alert(Base):
    __tablename__ = "alerts"

    id = Column(Integer, primary_key=True)
    field_pk = Column(Integer, ForeignKey("fields.id"), index=True, nullable=False)
    zone_id = Column(String(40), nullable=False)
    alert_type = Column(String(20), nullable=False)
    severity = Column(String(20), index=True, nullable=False)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    status = Column(String(20), default="active", index=True, nullable=False)
    priority = Column(Integer, default=3, nullable=False)
    detected_at = Column(DateTime(timezone=True), default=utcnow, index=True, nullable=False)
    resolved_at = Column(DateTime(timezone=True), nullable=True)
    ai_confidence = Column(Float, default=85, nullable=False)
    # "metadata" is reserved on declarative classes
    alert_metadata = Column("metadata", JSON, nullable=True)
    owner_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    field = relationship("Field", back_populates="alerts")

    @property
    def field_id(self) -> str:
        return self.field.field_id

    @property
    def field_name(self) -> str:
        return self.field.name


class RiskPrediction(Base):
    __tablename__ = "risk_predictions"

    id = Column(Integer, primary_key=True)
    field_pk = Column(Integer, ForeignKey("fields.id"), index=True, nullable=False)
    zone_id = Column(String(40), nullable=False)
    risk_level = Column(String(10), index=True, nullable=False)
    risk_type = Column(String(20), index=True, nullable=False)
    probability = Column(Float, nullable=False)
    ai_confidence = Column(Float, nullable=False)
    x = Column(Float, nullable=True)
    y = Column(Float, nullable=True)
    prediction_date = Column(DateTime(timezone=True), default=utcnow, index=True, nullable=False)
    time_horizon = Column(String(10), default="1week", nullable=False)
    factors = Column(JSON, nullable=True)
    recommendations = Column(JSON, nullable=True)
    owner_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    field = relationship("Field", back_populates="risk_predictions")

    @property
    def field_id(self) -> str:
        return self.field.field_id

    @property
    def coordinates(self):
        if self.x is None and self.y is None:
            return None
        return {"x": self.x, "y": self.y}
