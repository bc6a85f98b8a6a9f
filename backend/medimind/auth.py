"""Bearer token authentication via the Better-Auth session table, plus role checks."""

from datetime import datetime, timezone

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from medimind.database import get_db
from medimind.models.auth import BetterAuthSession
from medimind.models.user import UserProfile, UserType

bearer_scheme = HTTPBearer(auto_error=False)


async def verify_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> str:
    """Validate a bearer token against the Better-Auth session table.

    Returns:
        The authenticated user_id.

    Raises:
        HTTPException: 401 if token is missing, invalid, or expired.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authentication token",
        )

    token = credentials.credentials
    result = await db.execute(
        select(BetterAuthSession).where(
            BetterAuthSession.token == token,
            BetterAuthSession.expiresAt > datetime.now(timezone.utc),
        )
    )
    session = result.scalar_one_or_none()

    if session is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    return session.userId


async def get_current_profile(
    user_id: str = Depends(verify_bearer_token),
    db: AsyncSession = Depends(get_db),
) -> UserProfile:
    """Load the portal profile of the authenticated user.

    Raises:
        HTTPException: 403 if the user has no portal profile.
    """
    profile = await db.get(UserProfile, user_id)
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="No portal profile for this user",
        )
    return profile


async def require_doctor(profile: UserProfile = Depends(get_current_profile)) -> UserProfile:
    """Allow only doctors."""
    if profile.user_type != UserType.DOCTOR:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Doctor access required",
        )
    return profile


async def require_patient(profile: UserProfile = Depends(get_current_profile)) -> UserProfile:
    """Allow only patients."""
    if profile.user_type != UserType.PATIENT:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Patient access required",
        )
    return profile
