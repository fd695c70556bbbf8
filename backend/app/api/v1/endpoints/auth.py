"""Account endpoints: sign up, obtain a token, and find your contacts collection."""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core.auth import get_current_user
from app.core.database import get_db
from app.models.user import User
from app.schemas.auth import (
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
    UserProfileResponse,
)
from app.services.auth import (
    authenticate,
    create_access_token,
    create_user,
    find_conflicting_user,
)

router = APIRouter()

_CONFLICT_DETAIL = {
    "email": "Email already registered",
    "username": "Username already taken",
}


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(body: RegisterRequest, db: Session = Depends(get_db)):
    conflict = find_conflicting_user(db, email=body.email, username=body.username)
    if conflict is not None:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=_CONFLICT_DETAIL[conflict])

    user = create_user(
        db,
        first_name=body.first_name,
        last_name=body.last_name,
        username=body.username,
        email=body.email,
        password=body.password,
    )
    return RegisterResponse.model_validate(user)


@router.post("/login", response_model=TokenResponse)
def login(body: LoginRequest, db: Session = Depends(get_db)):
    """Exchange credentials for a bearer token and the caller's user id."""
    user = authenticate(db, body.email, body.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )
    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is deactivated",
        )
    return TokenResponse(access_token=create_access_token(user.id), user_id=user.id)


@router.get("/user-profile", response_model=UserProfileResponse)
def user_profile(current_user: User = Depends(get_current_user)):
    return UserProfileResponse.model_validate(current_user)
