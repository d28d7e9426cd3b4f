import pytest

from chatbot_blocks.dto.block_type_dto import BlockTypeCreate
from chatbot_blocks.dto.chatbot_dto import ChatbotCreate
from chatbot_blocks.dto.dynamic_block_dto import DynamicBlockWrite
from chatbot_blocks.exceptions.api_exceptions import NotFoundException, ValidationException
from chatbot_blocks.models import Tag
from chatbot_blocks.services.dynamic_block_service import check_data_against_schema

from tests.conftest import OTHER_ID, OWNER_ID

ROOM_SCHEMA = {
    "fields": [
        {"name": "name", "label": "Room name", "type": "string", "required": True},
        {"name": "capacity", "label": "Capacity", "type": "number"},
        {"name": "accessible", "label": "Wheelchair access", "type": "boolean"},
        {"name": "opened_on", "label": "Opened on", "type": "date"},
        {"name": "floor", "label": "Floor", "type": "select", "options": ["GROUND", "FIRST"]},
    ]
}


async def make_chatbot(services, owner_id=OWNER_ID):
    return await services.chatbots.create(owner_id, ChatbotCreate(display_name="Acme Bot", domain="acme.com"))


async def make_type(services, chatbot_id, owner_id=OWNER_ID, name="meeting_room", schema=None):
    data = BlockTypeCreate(type_name=name, schema_definition=schema or ROOM_SCHEMA)
    return await services.block_types.create_block_type(chatbot_id, owner_id, data)


def room(**values):
    return DynamicBlockWrite(data={"name": "Blue room", **values})


# --- Schema check ----------------------------------------------------------

def test_schema_accepts_well_typed_data():
    check_data_against_schema(
        {"name": "Blue", "capacity": 12.5, "accessible": False, "opened_on": "2024-05-01T08:00:00Z", "floor": "FIRST"},
        ROOM_SCHEMA,
    )


def test_schema_skips_optional_empty_values():
    check_data_against_schema({"name": "Blue", "capacity": None, "opened_on": ""}, ROOM_SCHEMA)


@pytest.mark.parametrize(
    "data, details",
    [
        ({"name": "Blue", "colour": "blue"}, {"unknown_fields": ["colour"]}),
        ({"name": ""}, {"field": "name", "reason": "MISSING_REQUIRED_FIELD"}),
        ({"capacity": 3}, {"field": "name", "reason": "MISSING_REQUIRED_FIELD"}),
        ({"name": 42}, {"field": "name", "expected": "string"}),
        ({"name": "Blue", "capacity": "12"}, {"field": "capacity", "expected": "number"}),
        ({"name": "Blue", "capacity": True}, {"field": "capacity", "expected": "number"}),
        ({"name": "Blue", "accessible": "yes"}, {"field": "accessible", "expected": "boolean"}),
        ({"name": "Blue", "opened_on": "someday"}, {"field": "opened_on", "expected": "date"}),
        (
            {"name": "Blue", "floor": "ROOF"},
            {"field": "floor", "reason": "INVALID_SELECT_OPTION", "options": ["GROUND", "FIRST"]},
        ),
    ],
)
def test_schema_rejects_bad_data(data, details):
    with pytest.raises(ValidationException) as exc:
        check_data_against_schema(data, ROOM_SCHEMA)

    assert exc.value.error_code == "INVALID_DYNAMIC_DATA"
    assert exc.value.status_code == 400
    assert exc.value.details == details


@pytest.mark.parametrize("schema", [None, {}, {"fields": []}, {"fields": [{"name": "x", "label": "X", "type": "colour"}]}])
def test_broken_stored_schema(schema):
    with pytest.raises(ValidationException) as exc:
        check_data_against_schema({}, schema)

    assert exc.value.error_code == "INVALID_DYNAMIC_SCHEMA"


# --- Lifecycle -------------------------------------------------------------

async def test_create_and_get(services):
    chatbot = await make_chatbot(services)
    block_type = await make_type(services, chatbot.id)

    created = await services.dynamic.create_block(chatbot.id, OWNER_ID, block_type.type_id, room(capacity=8))
    fetched = await services.dynamic.get_block(chatbot.id, OWNER_ID, block_type.type_id, created.entity_id)

    assert fetched.type_name == "MEETING_ROOM"
    assert fetched.chatbot_id == chatbot.id
    assert fetched.data == {"name": "Blue room", "capacity": 8}


async def test_invalid_data_writes_nothing(services):
    chatbot = await make_chatbot(services)
    block_type = await make_type(services, chatbot.id)

    with pytest.raises(ValidationException) as exc:
        await services.dynamic.create_block(chatbot.id, OWNER_ID, block_type.type_id, room(capacity="many"))
    assert exc.value.error_code == "INVALID_DYNAMIC_DATA"

    assert await services.dynamic.list_blocks(chatbot.id, OWNER_ID, block_type.type_id) == []


async def test_list_is_newest_first_and_per_type(services):
    chatbot = await make_chatbot(services)
    rooms = await make_type(services, chatbot.id)
    faqs = await make_type(
        services, chatbot.id, name="faq",
        schema={"fields": [{"name": "question", "label": "Question", "type": "string"}]},
    )
    first = await services.dynamic.create_block(chatbot.id, OWNER_ID, rooms.type_id, room())
    second = await services.dynamic.create_block(chatbot.id, OWNER_ID, rooms.type_id, room(floor="GROUND"))
    await services.dynamic.create_block(chatbot.id, OWNER_ID, faqs.type_id, DynamicBlockWrite(data={"question": "Q?"}))

    listed = await services.dynamic.list_blocks(chatbot.id, OWNER_ID, rooms.type_id)

    assert [b.entity_id for b in listed] == [second.entity_id, first.entity_id]


async def test_update_replaces_data(services):
    chatbot = await make_chatbot(services)
    block_type = await make_type(services, chatbot.id)
    created = await services.dynamic.create_block(chatbot.id, OWNER_ID, block_type.type_id, room(capacity=8))

    updated = await services.dynamic.update_block(
        chatbot.id, OWNER_ID, block_type.type_id, created.entity_id, DynamicBlockWrite(data={"name": "Red room"})
    )

    assert updated.data == {"name": "Red room"}


async def test_block_under_wrong_type_is_not_found(services):
    chatbot = await make_chatbot(services)
    rooms = await make_type(services, chatbot.id)
    faqs = await make_type(
        services, chatbot.id, name="faq",
        schema={"fields": [{"name": "question", "label": "Question", "type": "string"}]},
    )
    created = await services.dynamic.create_block(chatbot.id, OWNER_ID, rooms.type_id, room())

    with pytest.raises(NotFoundException) as exc:
        await services.dynamic.get_block(chatbot.id, OWNER_ID, faqs.type_id, created.entity_id)
    assert exc.value.error_code == "DYNAMIC_BLOCK_NOT_FOUND"


async def test_block_of_another_chatbot_is_not_found(services):
    mine = await make_chatbot(services)
    theirs = await make_chatbot(services, OTHER_ID)
    their_type = await make_type(services, theirs.id, OTHER_ID)
    their_block = await services.dynamic.create_block(theirs.id, OTHER_ID, their_type.type_id, room())

    with pytest.raises(NotFoundException) as exc:
        await services.dynamic.delete_block(mine.id, OWNER_ID, their_type.type_id, their_block.entity_id)
    assert exc.value.error_code == "BLOCK_TYPE_NOT_FOUND"

    with pytest.raises(NotFoundException) as exc:
        await services.dynamic.delete_block(theirs.id, OWNER_ID, their_type.type_id, their_block.entity_id)
    assert exc.value.error_code == "CHATBOT_NOT_FOUND"

    still_there = await services.dynamic.get_block(theirs.id, OTHER_ID, their_type.type_id, their_block.entity_id)
    assert still_there.entity_id == their_block.entity_id


async def test_delete_removes_block(services):
    chatbot = await make_chatbot(services)
    block_type = await make_type(services, chatbot.id)
    created = await services.dynamic.create_block(chatbot.id, OWNER_ID, block_type.type_id, room())

    await services.dynamic.delete_block(chatbot.id, OWNER_ID, block_type.type_id, created.entity_id)

    with pytest.raises(NotFoundException):
        await services.dynamic.get_block(chatbot.id, OWNER_ID, block_type.type_id, created.entity_id)


async def test_personal_information_blocks_get_default_tag(services):
    db = services.blocks_repo.db
    db.add(Tag(name="PERSONAL_INFO", category="SYSTEM", is_custom=False))
    await db.commit()
    chatbot = await make_chatbot(services)
    block_type = await make_type(
        services, chatbot.id, name="personal_information",
        schema={"fields": [{"name": "full_name", "label": "Full name", "type": "string"}]},
    )

    created = await services.dynamic.create_block(
        chatbot.id, OWNER_ID, block_type.type_id, DynamicBlockWrite(data={"full_name": "Ada"})
    )

    tags = await services.blocks_repo.list_item_tags(created.entity_id)
    assert [t.name for t in tags] == ["PERSONAL_INFO"]
