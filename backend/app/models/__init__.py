from app.models.contact import ContactRecord
from app.models.user import User

__all__ = [
    "ContactRecord",
    "User",
]
