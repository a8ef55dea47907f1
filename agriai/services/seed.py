import logging
from datetime import timedelta

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import scoring, seed_data
from ..envelope import ApiError
from ..models import Field, utcnow
from ..schemas import (
    FieldCreate, SoilHealthCreate, SpectralHealthCreate, TemporalCreate, AlertCreate, RiskPredictionCreate
)
from .alerts import build_alert
from .fields import build_field
from .risk import build_risk_prediction
from .soil_health import build_soil_health
from .spectral_health import build_spectral_health
from .temporal import build_temporal

logger = logging.getLogger(__name__)


def seed_database(db: Session, owner_id: int) -> dict:
    """Replace everything the user owns with the example data set, in one transaction."""
    counts = {
        "fields": 0,
        "spectralHealth": 0,
        "soilHealth": 0,
        "temporalAnalysis": 0,
        "alerts": 0,
        "riskPredictions": 0,
    }
    try:
        # field deletes cascade to telemetry, alerts and predictions
        for old in db.query(Field).filter(Field.owner_id == owner_id).all():
            db.delete(old)
        db.flush()

        fields = [build_field(owner_id, FieldCreate.model_validate(f)) for f in seed_data.EXAMPLE_FIELDS]
        db.add_all(fields)
        db.flush()
        counts["fields"] = len(fields)

        now = utcnow()
        n_points = len(seed_data.EXAMPLE_TEMPORAL)
        for field in fields:
            for item in seed_data.EXAMPLE_SPECTRAL_HEALTH:
                payload = SpectralHealthCreate.model_validate({**item, "measurementDate": now})
                db.add(build_spectral_health(field, payload))
                counts["spectralHealth"] += 1

            for item in seed_data.EXAMPLE_SOIL_HEALTH:
                payload = SoilHealthCreate.model_validate({**item, "measurementDate": now})
                db.add(build_soil_health(field, owner_id, payload))
                counts["soilHealth"] += 1

            for i, item in enumerate(seed_data.EXAMPLE_TEMPORAL):
                taken = now - timedelta(days=seed_data.TEMPORAL_SPACING_DAYS * (n_points - 1 - i))
                payload = TemporalCreate.model_validate({**item, "measurementDate": taken})
                db.add(build_temporal(db, field, payload))
                # the next point's trend is computed against this one
                db.flush()
                counts["temporalAnalysis"] += 1

            for item in seed_data.EXAMPLE_ALERTS:
                db.add(build_alert(field, owner_id, AlertCreate.model_validate(item)))
                counts["alerts"] += 1

            for item in seed_data.EXAMPLE_RISK_PREDICTIONS:
                db.add(build_risk_prediction(field, owner_id, RiskPredictionCreate.model_validate(item)))
                counts["riskPredictions"] += 1

        db.commit()
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Seeding failed for user %s", owner_id)
        raise ApiError(500, "Failed to seed database")

    logger.info("Seeded example data for user %s: %s", owner_id, counts)
    return {**counts, "message": "Database seeded successfully with example agricultural data"}


def example_data() -> dict:
    """The example data set as it would be stored, derived soil/spectral health included."""
    soil = []
    for item in seed_data.EXAMPLE_SOIL_HEALTH:
        score = scoring.soil_health_score(
            item["phLevel"], item["moisture"], item["nitrogen"], item["phosphorus"], item["potassium"]
        )
        soil.append({**item, "healthScore": score, "healthStatus": scoring.classify_health(score)})

    spectral = [
        {**item, "healthStatus": scoring.classify_health(item["healthPercentage"])}
        for item in seed_data.EXAMPLE_SPECTRAL_HEALTH
    ]

    return {
        "fields": seed_data.EXAMPLE_FIELDS,
        "spectralHealth": spectral,
        "soilHealth": soil,
        "temporalData": seed_data.EXAMPLE_TEMPORAL,
        "alerts": seed_data.EXAMPLE_ALERTS,
        "riskPredictions": seed_data.EXAMPLE_RISK_PREDICTIONS,
        "cropTypes": seed_data.CROP_TYPES,
        "soilTypes": seed_data.SOIL_TYPES,
        "pestTypes": seed_data.PEST_TYPES,
        "diseases": seed_data.DISEASES,
        "nutrientRanges": seed_data.NUTRIENT_RANGES,
        "weatherRanges": seed_data.WEATHER_RANGES,
    }
