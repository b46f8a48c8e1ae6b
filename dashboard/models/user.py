"""User ORM — dashboard operator able to sign in. password holds a bcrypt hash."""

import uuid

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from dashboard.db.base import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4()),
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)
