from sqlalchemy import delete, select
from typing import List, Optional

from chatbot_blocks.models.chatbot import Chatbot
from chatbot_blocks.dto.chatbot_dto import ChatbotCreate, ChatbotUpdate
from chatbot_blocks.repositories.base_repository import BaseRepository


class ChatbotRepository(BaseRepository):
    """Persistence for chatbot rows. Every lookup is scoped by owner."""

    async def create(self, owner_id: int, data: ChatbotCreate) -> Chatbot:
        db_chatbot = Chatbot(
            owner_id=owner_id,
            display_name=data.display_name,
            domain=data.domain,
        )
        self.db.add(db_chatbot)
        await self.db.flush()
        await self.db.refresh(db_chatbot)
        return db_chatbot

    async def get_for_owner(self, owner_id: int, chatbot_id: int) -> Optional[Chatbot]:
        """
        Fetch a chatbot only if it belongs to owner_id.

        Returns None both when the chatbot does not exist and when it belongs
        to someone else.
        """
        result = await self.db.execute(
            select(Chatbot)
            .where(Chatbot.id == chatbot_id, Chatbot.owner_id == owner_id)
        )
        return result.scalars().first()

    async def list_for_owner(self, owner_id: int) -> List[Chatbot]:
        result = await self.db.execute(
            select(Chatbot)
            .where(Chatbot.owner_id == owner_id)
            .order_by(Chatbot.created_at.desc(), Chatbot.id.desc())
        )
        return list(result.scalars().all())

    async def update(self, db_chatbot: Chatbot, data: ChatbotUpdate) -> Chatbot:
        update_data = data.model_dump(exclude_none=True)
        for field, value in update_data.items():
            setattr(db_chatbot, field, value)
        await self.db.flush()
        return db_chatbot

    async def delete(self, chatbot_id: int) -> None:
        await self.db.execute(delete(Chatbot).where(Chatbot.id == chatbot_id))
