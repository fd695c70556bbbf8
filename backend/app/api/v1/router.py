from fastapi import APIRouter

from app.api.v1.endpoints import auth, contacts

api_v1_router = APIRouter()

api_v1_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_v1_router.include_router(contacts.router, prefix="/users/{user_id}/contacts", tags=["contacts"])
