import pytest
from datetime import time

from chatbot_blocks.exceptions.api_exceptions import ValidationException
from chatbot_blocks.validations.block_type_validation import validate_create_block_type, validate_update_block_type
from chatbot_blocks.validations.chatbot_validation import validate_create_chatbot, validate_update_chatbot
from chatbot_blocks.validations.common_validation import validate_path_id
from chatbot_blocks.validations.dynamic_block_validation import validate_dynamic_block
from chatbot_blocks.validations.item_tag_validation import validate_update_item_tags
from chatbot_blocks.validations.result import Parsed, Rejected, unwrap
from chatbot_blocks.validations.static_block_validation import (
    validate_create_contact,
    validate_create_schedule,
    validate_update_contact,
    validate_update_schedule,
)
from chatbot_blocks.validations.tag_validation import validate_create_tag, validate_list_tags_query, validate_update_tag


@pytest.mark.parametrize("raw, expected", [("1", 1), ("42", 42), (" 7 ", 7), (5, 5)])
def test_path_id_accepts_positive_integers(raw, expected):
    assert validate_path_id(raw, "chatbotId") == Parsed(expected)


@pytest.mark.parametrize("raw", ["0", "-3", "abc", "1.5", "", "١٢", None, True, 0])
def test_path_id_rejects_everything_else(raw):
    result = validate_path_id(raw, "chatbotId")

    assert isinstance(result, Rejected)
    assert result.reasons == ["chatbotId: must be a positive integer"]


def test_unwrap_raises_with_reasons():
    with pytest.raises(ValidationException) as exc:
        unwrap(Rejected(["entityId: must be a positive integer"]))

    assert exc.value.status_code == 400
    assert exc.value.details == ["entityId: must be a positive integer"]


def test_create_chatbot_trims_and_lowercases_domain():
    result = validate_create_chatbot({"display_name": "  Acme Bot ", "domain": "Acme.COM"})

    assert isinstance(result, Parsed)
    assert result.value.display_name == "Acme Bot"
    assert result.value.domain == "acme.com"


@pytest.mark.parametrize("body", [
    {"display_name": "", "domain": "acme.com"},
    {"display_name": "x" * 101, "domain": "acme.com"},
    {"display_name": "Acme", "domain": "not a domain"},
    {"display_name": "Acme"},
    ["display_name", "domain"],
])
def test_create_chatbot_rejections(body):
    assert isinstance(validate_create_chatbot(body), Rejected)


def test_update_chatbot_needs_a_field():
    result = validate_update_chatbot({})

    assert isinstance(result, Rejected)
    assert any("At least one" in reason for reason in result.reasons)


def test_create_contact_blank_optionals_are_absent():
    result = validate_create_contact({"org_name": "Acme", "phone": "   ", "email": ""})

    assert isinstance(result, Parsed)
    assert result.value.phone is None
    assert result.value.email is None


@pytest.mark.parametrize("body", [
    {"org_name": ""},
    {"org_name": "Acme", "email": "not-an-email"},
    {"org_name": "Acme", "phone": "1" * 51},
    {"phone": "123"},
])
def test_create_contact_rejections(body):
    assert isinstance(validate_create_contact(body), Rejected)


def test_update_contact_ignores_nulls():
    assert isinstance(validate_update_contact({"city": None, "phone": " "}), Rejected)

    result = validate_update_contact({"city": "Hamburg", "phone": None})
    assert result.value.model_dump(exclude_none=True) == {"city": "Hamburg"}


def test_create_schedule_parses_times():
    result = validate_create_schedule(
        {"title": "Weekdays", "day_of_week": "Monday", "open_time": "09:00", "close_time": "17:30"}
    )

    assert isinstance(result, Parsed)
    assert result.value.open_time == time(9, 0)
    assert result.value.close_time == time(17, 30)


@pytest.mark.parametrize("field, value", [
    ("open_time", "9:00"),
    ("open_time", "24:00"),
    ("close_time", "17:60"),
    ("close_time", 1700),
    ("day_of_week", "monday"),
    ("day_of_week", "Funday"),
])
def test_create_schedule_rejections(field, value):
    body = {"title": "Weekdays", "day_of_week": "Monday", "open_time": "09:00", "close_time": "17:00"}
    body[field] = value

    result = validate_create_schedule(body)

    assert isinstance(result, Rejected)
    assert any(reason.startswith(field) for reason in result.reasons)


def test_create_schedule_does_not_check_order():
    # Ordering depends on the stored slot on updates, so the service owns it
    result = validate_create_schedule(
        {"title": "Night", "day_of_week": "Friday", "open_time": "18:00", "close_time": "09:00"}
    )

    assert isinstance(result, Parsed)


def test_update_schedule_needs_a_field():
    assert isinstance(validate_update_schedule({"notes": ""}), Rejected)
    assert isinstance(validate_update_schedule({"close_time": "18:00"}), Parsed)


def test_list_tags_query():
    result = validate_list_tags_query({"is_custom": "true", "search": " park ", "category": ""})

    assert result.value.is_custom is True
    assert result.value.search == "park"
    assert result.value.category is None
    assert isinstance(validate_list_tags_query({"is_custom": "yes"}), Rejected)


def test_tag_bodies():
    assert isinstance(validate_create_tag({"name": "parking", "synonyms": ["garage", ""]}), Rejected)
    assert isinstance(validate_create_tag({"name": "parking", "synonyms": "garage"}), Rejected)
    assert isinstance(validate_update_tag({}), Rejected)
    assert isinstance(validate_update_tag({"description": None}), Parsed)


def field(name="size", kind="string", **extra):
    return {"name": name, "label": name.title(), "type": kind, **extra}


def test_create_block_type_keeps_schema():
    result = validate_create_block_type({
        "type_name": " menu ",
        "description": "",
        "schema_definition": {"fields": [field(), field("course", "select", options=["STARTER", "MAIN"])]},
    })

    assert result.value.type_name == "menu"
    assert result.value.description is None
    assert [f.type for f in result.value.schema_definition.fields] == ["string", "select"]


@pytest.mark.parametrize("schema", [
    {"fields": []},
    {"fields": [field(kind="colour")]},
    {"fields": [field(kind="select")]},
    {"fields": [field(kind="select", options=["A", " "])]},
    {"fields": [field(), field()]},
    {"fields": [{"name": "size", "type": "string"}]},
    [field()],
])
def test_create_block_type_rejects_bad_schemas(schema):
    assert isinstance(validate_create_block_type({"type_name": "menu", "schema_definition": schema}), Rejected)


def test_update_block_type_needs_a_field():
    assert isinstance(validate_update_block_type({}), Rejected)
    assert isinstance(validate_update_block_type({"description": None}), Parsed)
    assert isinstance(validate_update_block_type({"type_name": ""}), Rejected)


def test_dynamic_block_data_must_be_an_object():
    assert validate_dynamic_block({"data": {"size": "L"}}).value.data == {"size": "L"}
    assert isinstance(validate_dynamic_block({"data": ["L"]}), Rejected)
    assert isinstance(validate_dynamic_block({}), Rejected)


def test_item_tags_body_normalizes_names_and_ids():
    assert validate_update_item_tags({"tag_names": ["phone", " Phone ", "hours"]}).value.tag_names == ["PHONE", "HOURS"]
    assert validate_update_item_tags({"tag_ids": [3, 1, 3]}).value.tag_ids == [3, 1]


@pytest.mark.parametrize("body", [
    {},
    {"tag_names": ["PHONE"], "tag_ids": [1]},
    {"tag_names": []},
    {"tag_names": ["  "]},
    {"tag_ids": [0]},
    {"tag_ids": []},
])
def test_item_tags_body_rejections(body):
    assert isinstance(validate_update_item_tags(body), Rejected)
