"""Season and user models."""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from mtb_fantasy.database import Base
from mtb_fantasy.models.base import TimestampMixin


class Season(Base, TimestampMixin):
    """Season table model."""

    __tablename__ = "seasons"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    start_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def __repr__(self) -> str:
        return f"<Season(id={self.id}, name='{self.name}')>"


class User(Base, TimestampMixin):
    """User table model. Accounts are owned by the auth layer."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    username: Mapped[str | None] = mapped_column(String(50), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    @property
    def display_name(self) -> str:
        return self.username or self.id

    def __repr__(self) -> str:
        return f"<User(id='{self.id}')>"
