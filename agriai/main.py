# agriai/main.py
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Depends, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import CORS_ORIGINS, LOG_LEVEL
from .db import get_db, init_db, ping
from .envelope import ApiError, api_response, error_response
from .routes_alerts import router as alerts_router
from .routes_fields import router as fields_router
from .routes_risk import router as risk_router
from .routes_seed import router as seed_router
from .routes_soil_health import router as soil_health_router
from .routes_spectral_health import router as spectral_health_router
from .routes_temporal import router as temporal_router
from .routes_users import router as users_router

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("Database tables ready")
    yield


app = FastAPI(title="AgriAI Monitoring API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS, allow_credentials=CORS_ORIGINS != ["*"],
    allow_methods=["*"], allow_headers=["*"],
)


# ---------------------------
# Errors -> response envelope
# ---------------------------
@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError):
    return error_response(exc.status_code, exc.message, exc.errors)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"field": ".".join(str(p) for p in err.get("loc", ()) if p != "body"), "message": err.get("msg")}
        for err in exc.errors()
    ]
    return error_response(400, "Invalid request", errors)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail))


@app.exception_handler(SQLAlchemyError)
async def db_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return error_response(500, "Database error")


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(500, "Internal server error")


# ---------------------------
# Endpoints
# ---------------------------
@app.get("/")
def root():
    return api_response({"service": "agriai-api"}, "AgriAI Backend API is running!")


@app.get("/health")
def health():
    return api_response({"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()}, "OK")


@app.get("/healthz")
def healthz(db: Session = Depends(get_db)):
    ping(db)
    return api_response({"ok": True, "db": "up"}, "OK")


app.include_router(users_router)
app.include_router(fields_router)
app.include_router(alerts_router)
app.include_router(soil_health_router)
app.include_router(spectral_health_router)
app.include_router(temporal_router)
app.include_router(risk_router)
app.include_router(seed_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("agriai.main:app", host="0.0.0.0", port=8000)
