"""SQLAlchemy models for the User aggregate."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from client_register.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)


class UserModel(Base, TimestampMixin):
    """
    SQLAlchemy model for persisting User aggregates.

    created_at / updated_at carry the user's created and modified times.
    Phones live in their own table and are loaded eagerly with the user.

    Table: users
    """

    __tablename__ = "users"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )

    # Password hash (bcrypt format, 60 chars)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    # Last issued token
    token: Mapped[str] = mapped_column(Text, nullable=False)

    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    last_login_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    phones: Mapped[list["PhoneModel"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="PhoneModel.id",
    )

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, email={self.email})>"


class PhoneModel(Base):
    """
    SQLAlchemy model for a user's phone.

    Table: phones
    """

    __tablename__ = "phones"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    number: Mapped[str] = mapped_column(String(32), nullable=False)
    city_code: Mapped[str] = mapped_column(String(8), nullable=False)
    country_code: Mapped[str] = mapped_column(String(8), nullable=False)

    user: Mapped[UserModel] = relationship(back_populates="phones")

    def __repr__(self) -> str:
        return f"<PhoneModel(id={self.id}, user_id={self.user_id})>"
