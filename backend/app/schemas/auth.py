"""Account schemas. Responses carry the user id that addresses the caller's contacts."""

import uuid

from pydantic import BaseModel, ConfigDict, EmailStr, Field, computed_field

from app.core.config import settings


def contacts_path(user_id: uuid.UUID) -> str:
    return f"{settings.API_V1_PREFIX}/users/{user_id}/contacts"


class RegisterRequest(BaseModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    username: str = Field(..., min_length=3, max_length=150)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)


class LoginRequest(BaseModel):
    email: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: uuid.UUID


class UserProfileResponse(BaseModel):
    """Account details plus the location of the user's contacts collection."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    first_name: str
    last_name: str
    username: str
    email: str

    @computed_field
    @property
    def contacts_url(self) -> str:
        return contacts_path(self.id)


class RegisterResponse(UserProfileResponse):
    message: str = "Registration successful"
