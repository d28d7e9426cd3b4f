import logging
from datetime import time
from typing import List, Optional

from sqlalchemy.exc import IntegrityError

from chatbot_blocks.models.block_entity import BlockType
from chatbot_blocks.dto.contact_dto import ContactCreate, ContactRead, ContactUpdate
from chatbot_blocks.dto.schedule_dto import ScheduleCreate, ScheduleRead, ScheduleUpdate
from chatbot_blocks.repositories.block_repository import BlockRepository
from chatbot_blocks.services.chatbot_service import ChatbotService
from chatbot_blocks.services.tag_service import TagService
from chatbot_blocks.exceptions.api_exceptions import ConflictException, NotFoundException, ValidationException

logger = logging.getLogger(__name__)


class StaticBlockService:
    """
    Contact and schedule blocks attached to a chatbot.

    Every method passes the chatbot ownership gate first and only then looks
    at block invariants, so a foreign tenant always gets CHATBOT_NOT_FOUND and
    never learns whether a contact or schedule exists. Writes run in one
    transaction each: entity row, payload row and tag links commit together.
    """

    def __init__(self, chatbots: ChatbotService, blocks: BlockRepository, tags: TagService):
        self.chatbots = chatbots
        self.blocks = blocks
        self.tags = tags

    # --- Contact -------------------------------------------------------------

    async def create_contact(self, chatbot_id: int, acting_user_id: Optional[int], data: ContactCreate) -> ContactRead:
        await self.chatbots.ensure_owned(acting_user_id, chatbot_id)

        if await self.blocks.get_contact(chatbot_id):
            raise ConflictException("Contact already exists for this chatbot", "CONTACT_ALREADY_EXISTS")

        tag_ids = await self._default_tag_ids(BlockType.CONTACT)
        try:
            async with self.blocks.atomic():
                contact = await self.blocks.create_contact(chatbot_id, data)
                await self.blocks.attach_tags(contact.entity_id, tag_ids)
        except IntegrityError:
            # Only the one-contact index counts as a conflict; anything else is re-checked
            if await self.blocks.has_contact(chatbot_id):
                raise ConflictException("Contact already exists for this chatbot", "CONTACT_ALREADY_EXISTS")
            await self.chatbots.ensure_owned(acting_user_id, chatbot_id)
            raise

        logger.info("Contact block %s created for chatbot %s", contact.entity_id, chatbot_id)
        return ContactRead.model_validate(contact)

    async def get_contact(self, chatbot_id: int, acting_user_id: Optional[int]) -> ContactRead:
        await self.chatbots.ensure_owned(acting_user_id, chatbot_id)

        contact = await self.blocks.get_contact(chatbot_id)
        if not contact:
            raise NotFoundException("Contact not found", "CONTACT_NOT_FOUND")
        return ContactRead.model_validate(contact)

    async def update_contact(self, chatbot_id: int, acting_user_id: Optional[int], data: ContactUpdate) -> ContactRead:
        async with self.blocks.atomic():
            await self.chatbots.ensure_owned(acting_user_id, chatbot_id)

            contact = await self.blocks.get_contact(chatbot_id)
            if not contact:
                raise NotFoundException("Contact not found", "CONTACT_NOT_FOUND")

            # Merge: fields the caller left out stay as they are
            contact = await self.blocks.update_contact(contact, data.model_dump(exclude_none=True))

        return ContactRead.model_validate(contact)

    # --- Schedule ------------------------------------------------------------

    async def create_schedule(self, chatbot_id: int, acting_user_id: Optional[int], data: ScheduleCreate) -> ScheduleRead:
        await self.chatbots.ensure_owned(acting_user_id, chatbot_id)
        self._check_time_order(data.open_time, data.close_time)

        tag_ids = await self._default_tag_ids(BlockType.SCHEDULE)
        async with self.blocks.atomic():
            schedule = await self.blocks.create_schedule(chatbot_id, data)
            await self.blocks.attach_tags(schedule.entity_id, tag_ids)

        logger.info("Schedule block %s created for chatbot %s", schedule.entity_id, chatbot_id)
        return ScheduleRead.model_validate(schedule)

    async def list_schedules(self, chatbot_id: int, acting_user_id: Optional[int]) -> List[ScheduleRead]:
        await self.chatbots.ensure_owned(acting_user_id, chatbot_id)

        schedules = await self.blocks.list_schedules(chatbot_id)
        return [ScheduleRead.model_validate(s) for s in schedules]

    async def update_schedule(
        self,
        chatbot_id: int,
        acting_user_id: Optional[int],
        entity_id: int,
        data: ScheduleUpdate,
    ) -> ScheduleRead:
        async with self.blocks.atomic():
            await self.chatbots.ensure_owned(acting_user_id, chatbot_id)
            schedule = await self._get_member_schedule(chatbot_id, entity_id)

            changes = data.model_dump(exclude_none=True)
            if "day_of_week" in changes:
                changes["day_of_week"] = changes["day_of_week"].value

            # The ordering rule applies to the merged slot, not just the patch
            self._check_time_order(
                changes.get("open_time", schedule.open_time),
                changes.get("close_time", schedule.close_time),
            )
            schedule = await self.blocks.update_schedule(schedule, changes)

        return ScheduleRead.model_validate(schedule)

    async def delete_schedule(self, chatbot_id: int, acting_user_id: Optional[int], entity_id: int) -> None:
        async with self.blocks.atomic():
            await self.chatbots.ensure_owned(acting_user_id, chatbot_id)
            await self._get_member_schedule(chatbot_id, entity_id)
            await self.blocks.delete_blocks([entity_id])

        logger.info("Schedule block %s deleted from chatbot %s", entity_id, chatbot_id)

    # --- Helpers -------------------------------------------------------------

    async def _get_member_schedule(self, chatbot_id: int, entity_id: int):
        """Membership check: entity_id must be a schedule of this chatbot."""
        schedule = await self.blocks.get_schedule(chatbot_id, entity_id)
        if not schedule:
            raise NotFoundException("Schedule not found", "SCHEDULE_NOT_FOUND")
        return schedule

    async def _default_tag_ids(self, block_type: BlockType) -> List[int]:
        names = self.tags.get_default_tags_for_block(block_type)
        resolved = await self.tags.resolve_tag_names(names)
        return list(resolved.values())

    @staticmethod
    def _check_time_order(open_time: time, close_time: time) -> None:
        if open_time >= close_time:
            raise ValidationException(details=["close_time: must be later than open_time"])
