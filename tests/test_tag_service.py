import pytest

from chatbot_blocks.dto.chatbot_dto import ChatbotCreate
from chatbot_blocks.dto.contact_dto import ContactCreate
from chatbot_blocks.dto.tag_dto import TagCreate, TagFilter, TagUpdate
from chatbot_blocks.exceptions.api_exceptions import ConflictException, NotFoundException
from chatbot_blocks.models.block_entity import BlockType
from chatbot_blocks.services.tag_service import TagService

from tests.conftest import OWNER_ID


def test_default_tags_per_block_type():
    assert TagService.get_default_tags_for_block(BlockType.CONTACT) == ["CONTACT", "PHONE", "ADDRESS", "HOURS"]
    assert TagService.get_default_tags_for_block(BlockType.SCHEDULE) == ["SCHEDULE", "HOURS"]


async def test_resolve_skips_unknown_names(services, catalog, caplog):
    resolved = await services.tags.resolve_tag_names(["contact", "HOURS", "hours", "MISSING"])

    assert set(resolved) == {"CONTACT", "HOURS"}
    assert "MISSING" in caplog.text


async def test_create_custom_tag_normalizes_name(services):
    tag = await services.tags.create_custom_tag(
        TagCreate(name="parking", description="Where to park", synonyms=["car park", "car park", "garage"])
    )

    assert tag.name == "PARKING"
    assert tag.is_custom is True
    assert tag.synonyms == ["car park", "garage"]


async def test_duplicate_tag_name_conflicts(services, catalog):
    with pytest.raises(ConflictException) as exc:
        await services.tags.create_custom_tag(TagCreate(name="Hours"))

    assert exc.value.error_code == "TAG_NAME_ALREADY_EXISTS"


async def test_list_tags_filters(services, catalog):
    await services.tags.create_custom_tag(TagCreate(name="parking", description="Where to park"))

    custom = await services.tags.list_tags(TagFilter(is_custom=True))
    system = await services.tags.list_tags(TagFilter(category="SYSTEM"))
    found = await services.tags.list_tags(TagFilter(search="park"))

    assert [t.name for t in custom] == ["PARKING"]
    assert [t.name for t in system] == sorted(catalog)
    assert [t.name for t in found] == ["PARKING"]


async def test_update_tag(services):
    tag = await services.tags.create_custom_tag(TagCreate(name="parking", category="PLACE"))

    updated = await services.tags.update_tag(tag.id, TagUpdate(name="car_park", category=None))

    assert updated.name == "CAR_PARK"
    assert updated.category is None


async def test_rename_onto_existing_tag_conflicts(services, catalog):
    tag = await services.tags.create_custom_tag(TagCreate(name="parking"))

    with pytest.raises(ConflictException) as exc:
        await services.tags.update_tag(tag.id, TagUpdate(name="hours"))

    assert exc.value.error_code == "TAG_NAME_ALREADY_EXISTS"


async def test_update_and_delete_missing_tag(services):
    with pytest.raises(NotFoundException) as exc:
        await services.tags.update_tag(404, TagUpdate(description="x"))
    assert exc.value.error_code == "TAG_NOT_FOUND"

    with pytest.raises(NotFoundException):
        await services.tags.delete_tag(404)


async def test_linked_tag_cannot_be_deleted(services, catalog):
    chatbot = await services.chatbots.create(OWNER_ID, ChatbotCreate(display_name="Acme Bot", domain="acme.com"))
    await services.blocks.create_contact(chatbot.id, OWNER_ID, ContactCreate(org_name="Acme"))
    phone = await services.tags.tags.get_by_name("PHONE")

    with pytest.raises(ConflictException) as exc:
        await services.tags.delete_tag(phone.id)

    assert exc.value.error_code == "TAG_IN_USE"


async def test_delete_unused_tag(services):
    tag = await services.tags.create_custom_tag(TagCreate(name="parking"))

    await services.tags.delete_tag(tag.id)

    assert await services.tags.list_tags(TagFilter()) == []
