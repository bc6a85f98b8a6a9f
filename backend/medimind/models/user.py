"""Portal user profiles.

A profile attaches a portal role (doctor or patient) and display details to an
identity-provider user id. The identity provider authenticates; the profile
decides which screens and endpoints a user may reach.
"""

import enum
from datetime import datetime

from sqlalchemy import DateTime, Enum, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from medimind.database import Base, utcnow


class UserType(str, enum.Enum):
    """Portal roles."""

    DOCTOR = "doctor"
    PATIENT = "patient"


class UserProfile(Base):
    """Role and display details for an authenticated user."""

    __tablename__ = "user_profiles"

    user_id: Mapped[str] = mapped_column(Text, primary_key=True)
    user_type: Mapped[UserType] = mapped_column(
        Enum(UserType, name="user_type", create_constraint=True),
        nullable=False,
        index=True,
    )
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Doctor-only details
    specialization: Mapped[str | None] = mapped_column(String(255), nullable=True)
    license_number: Mapped[str | None] = mapped_column(String(255), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
    )

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __repr__(self) -> str:
        return f"<UserProfile(user_id={self.user_id}, user_type={self.user_type})>"
