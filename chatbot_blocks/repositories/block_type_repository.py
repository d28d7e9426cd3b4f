from sqlalchemy import delete, func, or_, and_, select
from typing import Any, Dict, List, Optional

from chatbot_blocks.models.block_entity import BlockEntity
from chatbot_blocks.models.block_type_definition import BlockTypeDefinition
from chatbot_blocks.repositories.base_repository import BaseRepository


def _readable_by(chatbot_id: int):
    """Types owned by the chatbot plus the global system templates."""
    return or_(
        BlockTypeDefinition.chatbot_id == chatbot_id,
        and_(BlockTypeDefinition.chatbot_id.is_(None), BlockTypeDefinition.is_system.is_(True)),
    )


class BlockTypeRepository(BaseRepository):
    """Persistence for dynamic block type definitions."""

    async def list_for_chatbot(self, chatbot_id: int) -> List[BlockTypeDefinition]:
        result = await self.db.execute(
            select(BlockTypeDefinition)
            .where(_readable_by(chatbot_id))
            .order_by(BlockTypeDefinition.is_system.desc(), BlockTypeDefinition.type_name.asc())
        )
        return list(result.scalars().all())

    async def get_readable(self, chatbot_id: int, type_id: int) -> Optional[BlockTypeDefinition]:
        result = await self.db.execute(
            select(BlockTypeDefinition)
            .where(BlockTypeDefinition.type_id == type_id, _readable_by(chatbot_id))
        )
        return result.scalars().first()

    async def get_custom(self, chatbot_id: int, type_id: int) -> Optional[BlockTypeDefinition]:
        """A type the chatbot itself defined; system templates are never returned."""
        result = await self.db.execute(
            select(BlockTypeDefinition).where(
                BlockTypeDefinition.type_id == type_id,
                BlockTypeDefinition.chatbot_id == chatbot_id,
                BlockTypeDefinition.is_system.is_(False),
            )
        )
        return result.scalars().first()

    async def get_by_name(self, chatbot_id: int, type_name: str) -> Optional[BlockTypeDefinition]:
        result = await self.db.execute(
            select(BlockTypeDefinition).where(
                BlockTypeDefinition.chatbot_id == chatbot_id,
                BlockTypeDefinition.type_name == type_name,
            )
        )
        return result.scalars().first()

    async def create(self, chatbot_id: int, data: Dict[str, Any]) -> BlockTypeDefinition:
        db_type = BlockTypeDefinition(chatbot_id=chatbot_id, is_system=False, **data)
        self.db.add(db_type)
        await self.db.flush()
        await self.db.refresh(db_type)
        return db_type

    async def update(self, db_type: BlockTypeDefinition, changes: Dict[str, Any]) -> BlockTypeDefinition:
        for field, value in changes.items():
            setattr(db_type, field, value)
        await self.db.flush()
        return db_type

    async def delete(self, type_id: int) -> None:
        await self.db.execute(delete(BlockTypeDefinition).where(BlockTypeDefinition.type_id == type_id))

    async def delete_for_chatbot(self, chatbot_id: int) -> None:
        await self.db.execute(delete(BlockTypeDefinition).where(BlockTypeDefinition.chatbot_id == chatbot_id))

    async def count_instances(self, type_id: int) -> int:
        result = await self.db.execute(
            select(func.count()).select_from(BlockEntity).where(BlockEntity.type_id == type_id)
        )
        return result.scalar_one()
