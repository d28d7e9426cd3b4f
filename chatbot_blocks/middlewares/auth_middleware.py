from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from chatbot_blocks.database.database import get_db
from chatbot_blocks.exceptions.api_exceptions import ForbiddenException, UnauthorizedException
from chatbot_blocks.repositories.user_repository import UserRepository
from chatbot_blocks.utils.security import decode_access_token

ADMIN_ROLE = "ADMIN"

# auto_error=False so a missing header reaches us and gets the standard envelope
security_optional = HTTPBearer(auto_error=False)


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_optional),
) -> int:
    """Resolve the acting user id from the bearer token."""
    if not credentials or not credentials.credentials:
        raise UnauthorizedException("Authorization token is required")

    user_id = decode_access_token(credentials.credentials)
    if user_id is None:
        raise UnauthorizedException("Invalid or expired token", "INVALID_TOKEN")

    return user_id


async def get_current_admin_id(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> int:
    """
    Like get_current_user_id, but only for users holding the ADMIN role.

    The role is read from the database, not from token claims.
    """
    role_name = await UserRepository(db).get_role_name(user_id)
    if role_name is None or role_name.upper() != ADMIN_ROLE:
        raise ForbiddenException("Admin role required")
    return user_id
