import pytest

from chatbot_blocks.dto.block_type_dto import BlockTypeCreate, BlockTypeUpdate
from chatbot_blocks.dto.chatbot_dto import ChatbotCreate
from chatbot_blocks.dto.dynamic_block_dto import DynamicBlockWrite
from chatbot_blocks.exceptions.api_exceptions import ConflictException, NotFoundException
from chatbot_blocks.models import BlockTypeDefinition

from tests.conftest import OTHER_ID, OWNER_ID

FAQ_SCHEMA = {
    "fields": [
        {"name": "question", "label": "Question", "type": "string", "required": True},
        {"name": "answer", "label": "Answer", "type": "string", "required": True},
    ]
}


async def make_chatbot(services, owner_id=OWNER_ID):
    return await services.chatbots.create(owner_id, ChatbotCreate(display_name="Acme Bot", domain="acme.com"))


def faq_type(name="faq", description=None):
    return BlockTypeCreate(type_name=name, description=description, schema_definition=FAQ_SCHEMA)


async def seed_system_type(services, name="PERSONAL_INFORMATION") -> int:
    db = services.block_types_repo.db
    template = BlockTypeDefinition(
        chatbot_id=None,
        type_name=name,
        schema_definition={"fields": [{"name": "full_name", "label": "Full name", "type": "string"}]},
        is_system=True,
    )
    db.add(template)
    await db.commit()
    return template.type_id


async def test_create_normalizes_name(services):
    chatbot = await make_chatbot(services)

    block_type = await services.block_types.create_block_type(chatbot.id, OWNER_ID, faq_type("faq", "  "))

    assert block_type.type_name == "FAQ"
    assert block_type.description is None
    assert block_type.is_system is False
    assert block_type.scope == "CHATBOT"
    assert block_type.schema_definition["fields"][0]["name"] == "question"


async def test_duplicate_name_in_same_chatbot_conflicts(services):
    chatbot = await make_chatbot(services)
    await services.block_types.create_block_type(chatbot.id, OWNER_ID, faq_type("faq"))

    with pytest.raises(ConflictException) as exc:
        await services.block_types.create_block_type(chatbot.id, OWNER_ID, faq_type("FAQ"))
    assert exc.value.error_code == "BLOCK_TYPE_NAME_ALREADY_EXISTS"


async def test_same_name_in_another_chatbot_is_allowed(services):
    first = await make_chatbot(services)
    second = await make_chatbot(services, OTHER_ID)

    await services.block_types.create_block_type(first.id, OWNER_ID, faq_type())
    other = await services.block_types.create_block_type(second.id, OTHER_ID, faq_type())

    assert other.chatbot_id == second.id


async def test_list_puts_system_templates_first(services):
    chatbot = await make_chatbot(services)
    await seed_system_type(services)
    await services.block_types.create_block_type(chatbot.id, OWNER_ID, faq_type("menu"))
    await services.block_types.create_block_type(chatbot.id, OWNER_ID, faq_type("faq"))

    listed = await services.block_types.list_block_types(chatbot.id, OWNER_ID)

    assert [(t.type_name, t.scope) for t in listed] == [
        ("PERSONAL_INFORMATION", "GLOBAL"),
        ("FAQ", "CHATBOT"),
        ("MENU", "CHATBOT"),
    ]


async def test_foreign_tenant_sees_chatbot_not_found(services):
    chatbot = await make_chatbot(services)
    block_type = await services.block_types.create_block_type(chatbot.id, OWNER_ID, faq_type())

    with pytest.raises(NotFoundException) as exc:
        await services.block_types.get_block_type(chatbot.id, OTHER_ID, block_type.type_id)
    assert exc.value.error_code == "CHATBOT_NOT_FOUND"


async def test_type_of_another_chatbot_is_not_found(services):
    mine = await make_chatbot(services)
    theirs = await make_chatbot(services, OTHER_ID)
    foreign_type = await services.block_types.create_block_type(theirs.id, OTHER_ID, faq_type())

    with pytest.raises(NotFoundException) as exc:
        await services.block_types.get_block_type(mine.id, OWNER_ID, foreign_type.type_id)
    assert exc.value.error_code == "BLOCK_TYPE_NOT_FOUND"


async def test_system_template_is_readable_but_not_writable(services):
    chatbot = await make_chatbot(services)
    template_id = await seed_system_type(services)

    read = await services.block_types.get_block_type(chatbot.id, OWNER_ID, template_id)
    assert read.scope == "GLOBAL"

    with pytest.raises(NotFoundException) as exc:
        await services.block_types.update_block_type(
            chatbot.id, OWNER_ID, template_id, BlockTypeUpdate(description="mine now")
        )
    assert exc.value.error_code == "BLOCK_TYPE_NOT_FOUND"

    with pytest.raises(NotFoundException):
        await services.block_types.delete_block_type(chatbot.id, OWNER_ID, template_id)


async def test_update_renames_and_clears_description(services):
    chatbot = await make_chatbot(services)
    block_type = await services.block_types.create_block_type(chatbot.id, OWNER_ID, faq_type("faq", "Questions"))

    updated = await services.block_types.update_block_type(
        chatbot.id, OWNER_ID, block_type.type_id, BlockTypeUpdate(type_name="help", description="")
    )

    assert updated.type_name == "HELP"
    assert updated.description is None
    assert updated.schema_definition == block_type.schema_definition


async def test_rename_onto_existing_name_conflicts(services):
    chatbot = await make_chatbot(services)
    await services.block_types.create_block_type(chatbot.id, OWNER_ID, faq_type("faq"))
    menu = await services.block_types.create_block_type(chatbot.id, OWNER_ID, faq_type("menu"))

    with pytest.raises(ConflictException) as exc:
        await services.block_types.update_block_type(chatbot.id, OWNER_ID, menu.type_id, BlockTypeUpdate(type_name="Faq"))
    assert exc.value.error_code == "BLOCK_TYPE_NAME_ALREADY_EXISTS"


async def test_type_with_instances_cannot_be_deleted(services):
    chatbot = await make_chatbot(services)
    block_type = await services.block_types.create_block_type(chatbot.id, OWNER_ID, faq_type())
    instance = await services.dynamic.create_block(
        chatbot.id, OWNER_ID, block_type.type_id, DynamicBlockWrite(data={"question": "Q?", "answer": "A."})
    )

    with pytest.raises(ConflictException) as exc:
        await services.block_types.delete_block_type(chatbot.id, OWNER_ID, block_type.type_id)
    assert exc.value.error_code == "BLOCK_TYPE_IN_USE"

    await services.dynamic.delete_block(chatbot.id, OWNER_ID, block_type.type_id, instance.entity_id)
    await services.block_types.delete_block_type(chatbot.id, OWNER_ID, block_type.type_id)

    with pytest.raises(NotFoundException):
        await services.block_types.get_block_type(chatbot.id, OWNER_ID, block_type.type_id)
