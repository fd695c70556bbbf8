from datetime import datetime

from sqlalchemy import JSON, Index, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base


class ContactRecord(Base):
    """Persisted contact document.

    ``owner`` is the id of the user that created the contact. It never appears
    in API responses and is always set server-side.
    """

    __tablename__ = "contacts"
    __table_args__ = (
        Index("ix_contacts_owner", "owner"),
        Index("ix_contacts_owner_first_name", "owner", "first_name"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    owner: Mapped[str] = mapped_column(String(64), nullable=False)
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str | None] = mapped_column(String(255))
    email: Mapped[str | None] = mapped_column(String(255))
    phone_numbers: Mapped[dict | None] = mapped_column(JSON)
    created_at: Mapped[datetime] = mapped_column(server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(server_default=func.now(), onupdate=func.now())

    def __repr__(self) -> str:
        return f"<ContactRecord {self.id}>"
