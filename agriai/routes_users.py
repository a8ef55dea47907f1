from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from .db import get_db
from .envelope import api_response
from .models import User
from .schemas import UserRegister, UserLogin, UserOut
from .security import get_current_user
from .services import users

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.post("/register")
def register(payload: UserRegister, db: Session = Depends(get_db)):
    user = users.register_user(db, payload)
    return api_response(UserOut.model_validate(user), "User registered successfully", 201)


@router.post("/login")
def login(payload: UserLogin, db: Session = Depends(get_db)):
    user, token = users.login_user(db, payload)
    return api_response(
        {"user": UserOut.model_validate(user), "accessToken": token, "tokenType": "bearer"},
        "User logged in successfully",
    )


@router.get("/current-user")
def current_user(user: User = Depends(get_current_user)):
    return api_response(UserOut.model_validate(user), "Current user fetched successfully")
