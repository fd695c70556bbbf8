"""Accounts that own contact collections.

A user's id doubles as the owner stamped on every contact they create, and
the access token's ``sub`` claim carries that id.
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.core.config import settings
from app.models.user import User

logger = logging.getLogger(__name__)

ACCESS_TOKEN_TYPE = "access"


# ---------------------------------------------------------------------------
# Passwords
# ---------------------------------------------------------------------------


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))


# ---------------------------------------------------------------------------
# Access tokens
# ---------------------------------------------------------------------------


def create_access_token(user_id: uuid.UUID) -> str:
    """Issue a token whose subject is the contact owner id."""
    issued = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "iat": issued,
        "exp": issued + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        "type": ACCESS_TOKEN_TYPE,
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_token(token: str) -> dict:
    """Raises ``jwt.PyJWTError`` when the token is malformed, forged or expired."""
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------


def get_user_by_id(db: Session, user_id: uuid.UUID) -> User | None:
    return db.get(User, user_id)


def find_conflicting_user(db: Session, *, email: str, username: str) -> str | None:
    """Name the field that clashes with an existing account, if any."""
    if db.scalar(select(User.id).where(func.lower(User.email) == email.lower())) is not None:
        return "email"
    if db.scalar(select(User.id).where(User.username == username)) is not None:
        return "username"
    return None


def authenticate(db: Session, email: str, password: str) -> User | None:
    user = db.scalar(select(User).where(func.lower(User.email) == email.lower()))
    if user is None or not verify_password(password, user.password_hash):
        return None
    return user


def create_user(
    db: Session,
    *,
    first_name: str,
    last_name: str,
    username: str,
    email: str,
    password: str,
) -> User:
    user = User(
        first_name=first_name,
        last_name=last_name,
        username=username,
        email=email.lower(),
        password_hash=hash_password(password),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Registered user %s; contacts live under /users/%s/contacts", user.username, user.id)
    return user
