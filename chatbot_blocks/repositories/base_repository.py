from sqlalchemy.ext.asyncio import AsyncSession

from chatbot_blocks.database.database import atomic


class BaseRepository:
    """Holds the request-scoped session shared by every repository of a request."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def atomic(self):
        """Transaction unit over this repository's session."""
        return atomic(self.db)
