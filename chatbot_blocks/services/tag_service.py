import logging
from typing import Dict, List

from sqlalchemy.exc import IntegrityError

from chatbot_blocks.models.block_entity import BlockType
from chatbot_blocks.dto.tag_dto import TagCreate, TagFilter, TagRead, TagUpdate
from chatbot_blocks.repositories.tag_repository import TagRepository
from chatbot_blocks.exceptions.api_exceptions import ConflictException, NotFoundException, ValidationException

logger = logging.getLogger(__name__)

# Tags every new block receives, by block kind
DEFAULT_BLOCK_TAGS: Dict[BlockType, List[str]] = {
    BlockType.CONTACT: ["CONTACT", "PHONE", "ADDRESS", "HOURS"],
    BlockType.SCHEDULE: ["SCHEDULE", "HOURS"],
}

# Extra tags for dynamic blocks, keyed by the upper-cased block type name
DEFAULT_DYNAMIC_TAGS: Dict[str, List[str]] = {
    "PERSONAL_INFORMATION": ["PERSONAL_INFO"],
}


class TagService:
    """
    Tag catalog management and default tag resolution for new blocks.
    """

    def __init__(self, tags: TagRepository):
        self.tags = tags

    @staticmethod
    def get_default_tags_for_block(block_type: BlockType) -> List[str]:
        return list(DEFAULT_BLOCK_TAGS.get(block_type, []))

    @staticmethod
    def get_default_tags_for_dynamic(type_name: str) -> List[str]:
        return list(DEFAULT_DYNAMIC_TAGS.get(type_name.strip().upper(), []))

    async def resolve_tag_names(self, names: List[str]) -> Dict[str, int]:
        """
        Map tag names to ids.

        The catalog is seeded outside this service, so names that are not in
        it yet are skipped instead of failing the block write.
        """
        normalized = []
        for name in names:
            code = name.strip().upper()
            if code and code not in normalized:
                normalized.append(code)

        found = {tag.name: tag.id for tag in await self.tags.get_by_names(normalized)}
        missing = [code for code in normalized if code not in found]
        if missing:
            logger.warning("Default tags missing from catalog, not linked: %s", ", ".join(missing))
        return found

    async def require_tag_ids_by_names(self, names: List[str]) -> List[int]:
        """Map names to ids in input order; any unknown name fails the whole call."""
        found = {tag.name: tag.id for tag in await self.tags.get_by_names(names)}
        missing = [name for name in names if name not in found]
        if missing:
            raise ValidationException("Unknown tags", details=missing, error_code="TAG_NOT_FOUND")
        return [found[name] for name in names]

    async def ensure_tag_ids_exist(self, tag_ids: List[int]) -> List[int]:
        found = {tag.id for tag in await self.tags.get_by_ids(tag_ids)}
        missing = [tag_id for tag_id in tag_ids if tag_id not in found]
        if missing:
            raise ValidationException("Unknown tags", details=missing, error_code="TAG_NOT_FOUND")
        return list(tag_ids)

    async def list_tags(self, tag_filter: TagFilter) -> List[TagRead]:
        tags = await self.tags.list_tags(tag_filter)
        return [TagRead.model_validate(t) for t in tags]

    async def create_custom_tag(self, data: TagCreate) -> TagRead:
        name = data.name.upper()
        if await self.tags.get_by_name(name):
            raise ConflictException("Tag name already exists", "TAG_NAME_ALREADY_EXISTS")

        try:
            async with self.tags.atomic():
                tag = await self.tags.create({
                    "name": name,
                    "description": data.description,
                    "category": data.category,
                    "is_custom": True,
                    "synonyms": data.synonyms or None,
                })
        except IntegrityError:
            raise ConflictException("Tag name already exists", "TAG_NAME_ALREADY_EXISTS")

        logger.info("Custom tag %s created", tag.name)
        return TagRead.model_validate(tag)

    async def update_tag(self, tag_id: int, data: TagUpdate) -> TagRead:
        tag = await self.tags.get_by_id(tag_id)
        if not tag:
            raise NotFoundException("Tag not found", "TAG_NOT_FOUND")

        provided = data.model_dump(exclude_unset=True)
        changes = {}
        if provided.get("name") is not None:
            name = provided["name"].upper()
            existing = await self.tags.get_by_name(name)
            if existing and existing.id != tag.id:
                raise ConflictException("Tag name already exists", "TAG_NAME_ALREADY_EXISTS")
            changes["name"] = name
        if "description" in provided:
            changes["description"] = provided["description"] or None
        if "category" in provided:
            changes["category"] = provided["category"] or None
        if "synonyms" in provided:
            changes["synonyms"] = provided["synonyms"] or None

        try:
            async with self.tags.atomic():
                tag = await self.tags.update(tag, changes)
        except IntegrityError:
            raise ConflictException("Tag name already exists", "TAG_NAME_ALREADY_EXISTS")

        return TagRead.model_validate(tag)

    async def delete_tag(self, tag_id: int) -> None:
        """Delete a tag; tags still linked to blocks are refused with TAG_IN_USE."""
        async with self.tags.atomic():
            tag = await self.tags.get_by_id(tag_id)
            if not tag:
                raise NotFoundException("Tag not found", "TAG_NOT_FOUND")
            if await self.tags.count_links(tag_id) > 0:
                raise ConflictException("Tag is linked to one or more blocks and cannot be deleted", "TAG_IN_USE")
            await self.tags.delete(tag_id)

        logger.info("Tag %s deleted", tag_id)
