from sqlalchemy import delete, func, select
from typing import Any, Dict, Iterable, List, Optional

from chatbot_blocks.models.block_entity import BlockEntity, BlockType
from chatbot_blocks.models.block_entity_tag import BlockEntityTag
from chatbot_blocks.models.contact_block import ContactBlock
from chatbot_blocks.models.schedule_block import ScheduleBlock
from chatbot_blocks.models.tag import Tag
from chatbot_blocks.dto.contact_dto import ContactCreate
from chatbot_blocks.dto.schedule_dto import ScheduleCreate
from chatbot_blocks.repositories.base_repository import BaseRepository


class BlockRepository(BaseRepository):
    """
    Persistence for blocks attached to chatbots.

    Blocks are addressed by (chatbot_id, block_type) and exposed through
    kind-specific accessors. Dynamic blocks and items have no payload table,
    so their accessors return the entity row itself. Nothing here checks
    ownership, that is the service layer's job.
    """

    # --- Contact -------------------------------------------------------------

    async def get_contact(self, chatbot_id: int) -> Optional[ContactBlock]:
        result = await self.db.execute(
            select(ContactBlock)
            .join(BlockEntity, BlockEntity.entity_id == ContactBlock.entity_id)
            .where(
                BlockEntity.chatbot_id == chatbot_id,
                BlockEntity.block_type == BlockType.CONTACT,
            )
        )
        return result.scalars().first()

    async def create_contact(self, chatbot_id: int, data: ContactCreate) -> ContactBlock:
        """
        Insert the entity row and its contact payload in one flush.

        Raises IntegrityError when the chatbot already has a contact.
        """
        entity = BlockEntity(chatbot_id=chatbot_id, block_type=BlockType.CONTACT)
        contact = ContactBlock(entity=entity, **data.model_dump())
        self.db.add_all([entity, contact])
        await self.db.flush()
        return contact

    async def has_contact(self, chatbot_id: int) -> bool:
        result = await self.db.execute(
            select(func.count())
            .select_from(BlockEntity)
            .where(
                BlockEntity.chatbot_id == chatbot_id,
                BlockEntity.block_type == BlockType.CONTACT,
            )
        )
        return result.scalar_one() > 0

    async def update_contact(self, contact: ContactBlock, changes: Dict[str, Any]) -> ContactBlock:
        for field, value in changes.items():
            setattr(contact, field, value)
        await self.db.flush()
        return contact

    # --- Schedule ------------------------------------------------------------

    async def list_schedules(self, chatbot_id: int) -> List[ScheduleBlock]:
        # entity ids grow with insertion, so this is creation order
        result = await self.db.execute(
            select(ScheduleBlock)
            .join(BlockEntity, BlockEntity.entity_id == ScheduleBlock.entity_id)
            .where(
                BlockEntity.chatbot_id == chatbot_id,
                BlockEntity.block_type == BlockType.SCHEDULE,
            )
            .order_by(ScheduleBlock.entity_id.asc())
        )
        return list(result.scalars().all())

    async def get_schedule(self, chatbot_id: int, entity_id: int) -> Optional[ScheduleBlock]:
        """Return the schedule only if entity_id is a SCHEDULE attached to chatbot_id."""
        result = await self.db.execute(
            select(ScheduleBlock)
            .join(BlockEntity, BlockEntity.entity_id == ScheduleBlock.entity_id)
            .where(
                ScheduleBlock.entity_id == entity_id,
                BlockEntity.chatbot_id == chatbot_id,
                BlockEntity.block_type == BlockType.SCHEDULE,
            )
        )
        return result.scalars().first()

    async def create_schedule(self, chatbot_id: int, data: ScheduleCreate) -> ScheduleBlock:
        entity = BlockEntity(chatbot_id=chatbot_id, block_type=BlockType.SCHEDULE)
        schedule = ScheduleBlock(
            entity=entity,
            title=data.title,
            day_of_week=data.day_of_week.value,
            open_time=data.open_time,
            close_time=data.close_time,
            notes=data.notes,
        )
        self.db.add_all([entity, schedule])
        await self.db.flush()
        return schedule

    async def update_schedule(self, schedule: ScheduleBlock, changes: Dict[str, Any]) -> ScheduleBlock:
        for field, value in changes.items():
            setattr(schedule, field, value)
        await self.db.flush()
        return schedule

    # --- Dynamic -------------------------------------------------------------

    async def list_dynamic(self, chatbot_id: int, type_id: int) -> List[BlockEntity]:
        result = await self.db.execute(
            select(BlockEntity)
            .where(
                BlockEntity.chatbot_id == chatbot_id,
                BlockEntity.block_type == BlockType.DYNAMIC,
                BlockEntity.type_id == type_id,
            )
            .order_by(BlockEntity.entity_id.desc())
        )
        return list(result.scalars().all())

    async def get_dynamic(self, chatbot_id: int, type_id: int, entity_id: int) -> Optional[BlockEntity]:
        """Return the block only if it is a DYNAMIC block of type_id attached to chatbot_id."""
        result = await self.db.execute(
            select(BlockEntity).where(
                BlockEntity.entity_id == entity_id,
                BlockEntity.chatbot_id == chatbot_id,
                BlockEntity.block_type == BlockType.DYNAMIC,
                BlockEntity.type_id == type_id,
            )
        )
        return result.scalars().first()

    async def create_dynamic(self, chatbot_id: int, type_id: int, data: Dict[str, Any]) -> BlockEntity:
        entity = BlockEntity(chatbot_id=chatbot_id, block_type=BlockType.DYNAMIC, type_id=type_id, data=data)
        self.db.add(entity)
        await self.db.flush()
        return entity

    async def replace_dynamic_data(self, entity: BlockEntity, data: Dict[str, Any]) -> BlockEntity:
        entity.data = data
        await self.db.flush()
        return entity

    # --- Items and their tags ------------------------------------------------

    async def list_items(self, chatbot_id: int) -> List[BlockEntity]:
        result = await self.db.execute(
            select(BlockEntity)
            .where(BlockEntity.chatbot_id == chatbot_id)
            .order_by(BlockEntity.entity_id.asc())
        )
        return list(result.scalars().all())

    async def get_item(self, chatbot_id: int, entity_id: int) -> Optional[BlockEntity]:
        result = await self.db.execute(
            select(BlockEntity).where(
                BlockEntity.entity_id == entity_id,
                BlockEntity.chatbot_id == chatbot_id,
            )
        )
        return result.scalars().first()

    async def list_item_tags(self, entity_id: int) -> List[Tag]:
        result = await self.db.execute(
            select(Tag)
            .join(BlockEntityTag, BlockEntityTag.tag_id == Tag.id)
            .where(BlockEntityTag.entity_id == entity_id)
            .order_by(Tag.name.asc())
        )
        return list(result.scalars().all())

    async def replace_tags(self, entity_id: int, tag_ids: Iterable[int]) -> None:
        await self.db.execute(delete(BlockEntityTag).where(BlockEntityTag.entity_id == entity_id))
        await self.attach_tags(entity_id, tag_ids)

    # --- Shared --------------------------------------------------------------

    async def attach_tags(self, entity_id: int, tag_ids: Iterable[int]) -> None:
        rows = [BlockEntityTag(entity_id=entity_id, tag_id=tag_id) for tag_id in sorted(set(tag_ids))]
        if rows:
            self.db.add_all(rows)
            await self.db.flush()

    async def delete_blocks(self, entity_ids: List[int]) -> None:
        """Remove tag links, payload rows and entity rows for the given blocks."""
        if not entity_ids:
            return
        await self.db.execute(delete(BlockEntityTag).where(BlockEntityTag.entity_id.in_(entity_ids)))
        await self.db.execute(delete(ContactBlock).where(ContactBlock.entity_id.in_(entity_ids)))
        await self.db.execute(delete(ScheduleBlock).where(ScheduleBlock.entity_id.in_(entity_ids)))
        await self.db.execute(delete(BlockEntity).where(BlockEntity.entity_id.in_(entity_ids)))

    async def list_entity_ids(self, chatbot_id: int) -> List[int]:
        result = await self.db.execute(
            select(BlockEntity.entity_id).where(BlockEntity.chatbot_id == chatbot_id)
        )
        return list(result.scalars().all())
