import logging
from typing import Tuple

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ..envelope import ApiError, require_fields
from ..models import User
from ..schemas import UserRegister, UserLogin
from ..security import hash_password, verify_password, create_access_token

logger = logging.getLogger(__name__)


def register_user(db: Session, payload: UserRegister) -> User:
    require_fields(payload, ["full_name", "username", "email", "password"])

    username = payload.username.strip().lower()
    email = payload.email.strip().lower()
    existing = db.query(User).filter(or_(User.username == username, User.email == email)).first()
    if existing:
        raise ApiError(409, "User with the same username or email already exists")

    user = User(
        full_name=payload.full_name.strip(),
        username=username,
        email=email,
        password_hash=hash_password(payload.password),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Registered user %s (id=%s)", user.username, user.id)
    return user


def login_user(db: Session, payload: UserLogin) -> Tuple[User, str]:
    username = (payload.username or "").strip().lower()
    email = (payload.email or "").strip().lower()
    if not username and not email:
        raise ApiError(400, "Either username or email is required")

    query = db.query(User)
    if username and email:
        query = query.filter(or_(User.username == username, User.email == email))
    elif username:
        query = query.filter(User.username == username)
    else:
        query = query.filter(User.email == email)

    user = query.first()
    if not user:
        raise ApiError(404, "User does not exist")
    if not payload.password or not verify_password(payload.password, user.password_hash):
        raise ApiError(401, "Invalid user credentials")

    logger.info("User %s logged in", user.username)
    return user, create_access_token(user.id)
