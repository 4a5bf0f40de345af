"""JSON Schema parser.

Normalizes an object-rooted JSON Schema into a ParsedModel.
"""

from cuppa_cli.errors import SpecError

from .base import ParsedModel, ParsedProperty

DEFAULT_MODEL_NAME = "UnnamedModel"


def parse_json_schema(schema: dict) -> ParsedModel:
    """Parse an object-rooted JSON Schema document into a ParsedModel."""
    if not isinstance(schema, dict) or schema.get("type") != "object":
        raise SpecError("Only object schemas are supported for model generation")

    required = schema.get("required") or []
    properties = [
        parse_property(name, prop if isinstance(prop, dict) else {}, name in required)
        for name, prop in (schema.get("properties") or {}).items()
    ]

    return ParsedModel(
        name=schema.get("title") or DEFAULT_MODEL_NAME,
        description=schema.get("description"),
        properties=properties,
    )


def parse_property(name: str, prop: dict, is_required: bool) -> ParsedProperty:
    prop_type = resolve_type(prop)
    is_array = prop_type == "array"
    if is_array:
        prop_type = resolve_type(prop["items"]) if prop.get("items") else "any"

    return ParsedProperty(
        name=name,
        type=prop_type,
        description=prop.get("description"),
        optional=not is_required or prop.get("nullable") is True,
        is_array=is_array,
        format=prop.get("format"),
        default_value=prop.get("default"),
    )


def resolve_type(prop: dict) -> str:
    """Declared type of a property; unions resolve to their first non-null member."""
    if not isinstance(prop, dict):
        # boolean subschema
        return "any"
    if "$ref" in prop:
        return prop["$ref"].rstrip("/").split("/")[-1]

    declared = prop.get("type")
    if isinstance(declared, list):
        return next((t for t in declared if t != "null"), "any")
    return declared or "any"
