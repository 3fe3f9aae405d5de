"""Declarative base and shared columns for the ORM models."""

from datetime import datetime

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from client_register.domain.shared.time import utc_now


class Base(DeclarativeBase):
    pass


class TimestampMixin:
    """Adds timezone-aware ``created_at`` / ``updated_at`` columns.

    Repositories copy the aggregate's own timestamps into these; the
    defaults only apply to rows written without them.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        onupdate=utc_now,
    )
