from sqlalchemy import delete, func, or_, select
from typing import Any, Dict, List, Optional

from chatbot_blocks.models.tag import Tag
from chatbot_blocks.models.block_entity_tag import BlockEntityTag
from chatbot_blocks.dto.tag_dto import TagFilter
from chatbot_blocks.repositories.base_repository import BaseRepository


class TagRepository(BaseRepository):
    """CRUD for the tag catalog."""

    async def list_tags(self, tag_filter: TagFilter) -> List[Tag]:
        query = select(Tag)
        if tag_filter.category:
            query = query.where(Tag.category == tag_filter.category)
        if tag_filter.is_custom is not None:
            query = query.where(Tag.is_custom == tag_filter.is_custom)
        if tag_filter.search:
            term = f"%{tag_filter.search}%"
            query = query.where(or_(Tag.name.ilike(term), Tag.description.ilike(term)))
        result = await self.db.execute(query.order_by(Tag.name.asc()))
        return list(result.scalars().all())

    async def get_by_id(self, tag_id: int) -> Optional[Tag]:
        result = await self.db.execute(select(Tag).where(Tag.id == tag_id))
        return result.scalars().first()

    async def get_by_name(self, name: str) -> Optional[Tag]:
        result = await self.db.execute(
            select(Tag).where(func.upper(Tag.name) == name.upper())
        )
        return result.scalars().first()

    async def get_by_names(self, names: List[str]) -> List[Tag]:
        if not names:
            return []
        result = await self.db.execute(select(Tag).where(Tag.name.in_(names)))
        return list(result.scalars().all())

    async def create(self, data: Dict[str, Any]) -> Tag:
        db_tag = Tag(**data)
        self.db.add(db_tag)
        await self.db.flush()
        await self.db.refresh(db_tag)
        return db_tag

    async def update(self, db_tag: Tag, changes: Dict[str, Any]) -> Tag:
        for field, value in changes.items():
            setattr(db_tag, field, value)
        await self.db.flush()
        return db_tag

    async def delete(self, tag_id: int) -> None:
        await self.db.execute(delete(Tag).where(Tag.id == tag_id))

    async def count_links(self, tag_id: int) -> int:
        result = await self.db.execute(
            select(func.count()).select_from(BlockEntityTag).where(BlockEntityTag.tag_id == tag_id)
        )
        return result.scalar_one()

    async def get_by_ids(self, tag_ids: List[int]) -> List[Tag]:
        if not tag_ids:
            return []
        result = await self.db.execute(select(Tag).where(Tag.id.in_(tag_ids)))
        return list(result.scalars().all())
