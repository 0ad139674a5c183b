"""SQLAlchemy models for Status Store."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003 - used at runtime for SQLAlchemy

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class StatusEntry(Base):
    """One key/value pair of observable daemon state."""

    __tablename__ = "status_entries"

    key: Mapped[str] = mapped_column(String(1024), primary_key=True)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<StatusEntry(key={self.key!r})>"
