"""Base model mixins and utilities.

This module provides reusable mixins for common catalog model patterns:
- UUIDMixin: UUID primary key
- TimestampMixin: created_at and updated_at fields
- AuthoredMixin: created_by reference to the creating user
- PublishableMixin: published_at timestamp
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, func
from sqlalchemy.orm import Mapped, declared_attr, mapped_column

from catalog_ingest.core.database import Base


class UUIDMixin:
    """Mixin for UUID primary key.

    Example:
        >>> class Channel(Base, UUIDMixin, TimestampMixin):
        ...     __tablename__ = "community_channels"
        ...     slug: Mapped[str]
    """

    @declared_attr
    @classmethod
    def id(cls) -> Mapped[uuid.UUID]:
        """UUID primary key, generated client-side."""
        return mapped_column(
            primary_key=True,
            default=uuid.uuid4,
            index=True,
        )


class TimestampMixin:
    """Mixin for created_at and updated_at timestamps."""

    @declared_attr
    @classmethod
    def created_at(cls) -> Mapped[datetime]:
        """Timestamp when record was created."""
        return mapped_column(
            DateTime(timezone=True),
            nullable=False,
            server_default=func.now(),
        )

    @declared_attr
    @classmethod
    def updated_at(cls) -> Mapped[datetime]:
        """Timestamp when record was last updated."""
        return mapped_column(
            DateTime(timezone=True),
            nullable=False,
            server_default=func.now(),
            onupdate=func.now(),
        )


class AuthoredMixin:
    """Mixin for rows attributed to the user that created them.

    Ingested rows are stamped with the administrative user resolved at the
    start of a run.
    """

    @declared_attr
    @classmethod
    def created_by(cls) -> Mapped[uuid.UUID]:
        """Foreign key to the creating user."""
        return mapped_column(ForeignKey("users.id"), nullable=False)


class PublishableMixin:
    """Mixin for rows that carry a publication timestamp."""

    @declared_attr
    @classmethod
    def published_at(cls) -> Mapped[datetime | None]:
        """Timestamp when the row was published (None while draft)."""
        return mapped_column(DateTime(timezone=True))


__all__ = [
    "AuthoredMixin",
    "Base",
    "PublishableMixin",
    "TimestampMixin",
    "UUIDMixin",
]
