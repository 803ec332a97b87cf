"""User ORM model.

The identity directory is owned by the web application; the ingest job only
reads it to find an administrative user to attribute created rows to.
"""

import enum

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column

from catalog_ingest.models.base import Base, TimestampMixin, UUIDMixin


class UserRole(str, enum.Enum):
    """User role."""

    USER = "user"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"


class User(Base, UUIDMixin, TimestampMixin):
    """Application user.

    Attributes:
        email: Login email (unique)
        name: Display name
        role: Access role
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    name: Mapped[str | None] = mapped_column(String(200))
    role: Mapped[UserRole] = mapped_column(
        String(20),
        nullable=False,
        default=UserRole.USER,
    )

    __table_args__ = (Index("idx_user_role", "role"),)

    def __repr__(self) -> str:
        """String representation."""
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"


__all__ = [
    "User",
    "UserRole",
]
