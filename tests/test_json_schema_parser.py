import json
from pathlib import Path

import pytest

from cuppa_cli.errors import SpecError
from cuppa_cli.parser.base import ParsedModel, ParsedProperty
from cuppa_cli.parser.json_schema import parse_json_schema, resolve_type

FIXTURES = Path(__file__).parent / "fixtures"


def _user_schema() -> dict:
    return json.loads((FIXTURES / "User.schema.json").read_text())


class TestJsonSchemaParser:
    def test_minimal_user(self):
        model = parse_json_schema({
            "type": "object",
            "title": "User",
            "required": ["id"],
            "properties": {"id": {"type": "string"}, "age": {"type": "integer"}},
        })
        assert model.name == "User"
        assert [(p.name, p.type, p.optional) for p in model.properties] == [
            ("id", "string", False),
            ("age", "integer", True),
        ]

    def test_properties_keep_declaration_order(self):
        model = parse_json_schema(_user_schema())
        assert [p.name for p in model.properties] == [
            "id", "email", "age", "nickname", "created_at", "tags", "address", "isActive",
        ]
        assert model.description == "A registered user"

    def test_format_and_description(self):
        model = parse_json_schema(_user_schema())
        user_id = model.properties[0]
        assert user_id.format == "uuid"
        assert user_id.description == "Unique identifier"
        assert user_id.optional is False

    def test_array_property_resolves_item_type(self):
        tags = parse_json_schema(_user_schema()).properties[5]
        assert tags.is_array is True
        assert tags.type == "string"

    def test_ref_resolves_to_last_segment(self):
        address = parse_json_schema(_user_schema()).properties[6]
        assert address.type == "Address"

    def test_nullable_type_union(self):
        nickname = parse_json_schema(_user_schema()).properties[3]
        assert nickname.type == "string"

    def test_default_value_is_kept(self):
        is_active = parse_json_schema(_user_schema()).properties[7]
        assert is_active.default_value is True

    def test_nullable_required_property_is_optional(self):
        model = parse_json_schema({
            "type": "object",
            "required": ["a"],
            "properties": {"a": {"type": "string", "nullable": True}},
        })
        assert model.properties[0].optional is True

    def test_array_without_items(self):
        model = parse_json_schema({"type": "object", "properties": {"list": {"type": "array"}}})
        assert model.properties[0].type == "any"
        assert model.properties[0].is_array is True

    def test_missing_title_uses_placeholder(self):
        assert parse_json_schema({"type": "object"}).name == "UnnamedModel"

    def test_non_object_schema_is_rejected(self):
        with pytest.raises(SpecError, match="Only object schemas"):
            parse_json_schema({"type": "string"})

    def test_resolve_type(self):
        assert resolve_type({"$ref": "#/definitions/Address"}) == "Address"
        assert resolve_type({"type": ["null", "integer"]}) == "integer"
        assert resolve_type({}) == "any"

    def test_boolean_subschemas(self):
        model = parse_json_schema({
            "type": "object",
            "properties": {"anything": True, "list": {"type": "array", "items": True}},
        })
        assert [(p.type, p.is_array) for p in model.properties] == [("any", False), ("any", True)]
        assert resolve_type(True) == "any"


class TestParsedModel:
    def test_duplicate_property_names_are_rejected(self):
        prop = ParsedProperty(name="id", type="string", optional=False)
        with pytest.raises(SpecError, match="Duplicate property 'id'"):
            ParsedModel(name="User", properties=[prop, prop])

    def test_property_target_type(self):
        prop = ParsedProperty(name="ids", type="integer", optional=False, is_array=True, format="int64")
        assert prop.target_type("ios") == "[Int64]"
        assert prop.target_type("android") == "List<Long>"
        assert prop.target_type("web") == "number[]"
