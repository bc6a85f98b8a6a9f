"""Read-only models for the identity provider's Better-Auth tables.

The frontend's Better-Auth instance owns these tables. The API only reads
``session`` to validate bearer tokens; the demo seed script writes ``user``
and ``session`` rows so local logins work without the frontend.
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column

from medimind.database import Base


class BetterAuthUser(Base):
    """Better-Auth user table."""

    __tablename__ = "user"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    emailVerified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    createdAt: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updatedAt: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class BetterAuthSession(Base):
    """Better-Auth session table."""

    __tablename__ = "session"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    expiresAt: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    token: Mapped[str] = mapped_column(Text, unique=True, index=True)
    createdAt: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updatedAt: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    ipAddress: Mapped[str | None] = mapped_column(Text, nullable=True)
    userAgent: Mapped[str | None] = mapped_column(Text, nullable=True)
    userId: Mapped[str] = mapped_column(Text, nullable=False, index=True)
