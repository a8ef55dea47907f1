from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .db import get_db
from .envelope import api_response
from .models import User
from .security import get_current_user
from .services import seed

router = APIRouter(prefix="/api/v1/seed", tags=["seed"])


@router.post("/seed-db")
def seed_db(db: Session = Depends(get_db), user: User = Depends(get_current_user)):
    return api_response(seed.seed_database(db, user.id), "Database seeded successfully", 201)


@router.get("/examples")
def examples(user: User = Depends(get_current_user)):
    return api_response(seed.example_data(), "Example data retrieved successfully")
