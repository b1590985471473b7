"""
Snippetbox Backend — User SQLAlchemy Model
============================================

What:  ORM model representing the `users` table.
Who:   Written and read by UserService; tracked by Alembic.

Table Design:
    - id:              Integer primary key (autoincrement)
    - email:           Unique through the named constraint `users_uc_email`.
                       UserService matches this name (or the column) in
                       integrity errors to detect duplicate registrations.
    - hashed_password: bcrypt output, always 60 ASCII characters
    - created:         UTC with timezone
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column

from snippetbox.database import Base

EMAIL_UNIQUE_CONSTRAINT = "users_uc_email"


class User(Base):
    """A registered account. Mutated only through UserService.insert."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    email: Mapped[str] = mapped_column(String(255), nullable=False)

    hashed_password: Mapped[str] = mapped_column(
        String(60),
        nullable=False,
        comment="bcrypt hash of the account password",
    )

    created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        UniqueConstraint("email", name=EMAIL_UNIQUE_CONSTRAINT),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}')>"
