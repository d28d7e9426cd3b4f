from sqlalchemy import select
from typing import Optional

from chatbot_blocks.models.role import Role
from chatbot_blocks.models.user import User
from chatbot_blocks.repositories.base_repository import BaseRepository


class UserRepository(BaseRepository):
    """Read-only access to accounts; they are created by the auth service."""

    async def get_role_name(self, user_id: int) -> Optional[str]:
        """Role name of the user, or None when the user or its role is missing."""
        result = await self.db.execute(
            select(Role.name)
            .join(User, User.role_id == Role.id)
            .where(User.id == user_id)
        )
        return result.scalars().first()
