"""Per-platform type-name tables.

Two vocabularies are translated here:

* schema types (``string``, ``integer``, ``array`` ...) as they appear in JSON
  Schema, OpenAPI and plugin specs;
* component types (``String``, ``Binding<Bool>``, ``String[]?`` ...) as they
  appear in component specs.

Names outside a table (model names, ``$ref`` targets, platform types the table
does not know) go through the :class:`UnknownTypePolicy`.
"""

from enum import Enum

from cuppa_cli.errors import SpecError

IOS = "ios"
ANDROID = "android"
WEB = "web"
PLATFORMS = (IOS, ANDROID, WEB)

# Material 3 type scale, in declaration order.
TYPE_SCALE_NAMES = (
    "displayLarge",
    "displayMedium",
    "displaySmall",
    "headlineLarge",
    "headlineMedium",
    "headlineSmall",
    "titleLarge",
    "titleMedium",
    "titleSmall",
    "bodyLarge",
    "bodyMedium",
    "bodySmall",
    "labelLarge",
    "labelMedium",
    "labelSmall",
)


class UnknownTypePolicy(Enum):
    """What to do with a type name that is not in a platform table."""

    PASS_THROUGH = "pass_through"  # emit the name unchanged (model references)
    ERROR = "error"


SCHEMA_TYPE_TABLES: dict[str, dict[str, str]] = {
    IOS: {
        "string": "String",
        "integer": "Int",
        "number": "Double",
        "boolean": "Bool",
        "object": "[String: AnyCodable]",
        "array": "[AnyCodable]",
        "any": "AnyCodable",
        "void": "Void",
        "null": "AnyCodable",
    },
    ANDROID: {
        "string": "String",
        "integer": "Int",
        "number": "Double",
        "boolean": "Boolean",
        "object": "Map<String, Any>",
        "array": "List<Any>",
        "any": "Any",
        "void": "Unit",
        "null": "Any",
    },
    WEB: {
        "string": "string",
        "integer": "number",
        "number": "number",
        "boolean": "boolean",
        "object": "Record<string, unknown>",
        "array": "unknown[]",
        "any": "unknown",
        "void": "void",
        "null": "null",
    },
}

# (source type, format) pairs that map to a richer platform type.
SCHEMA_FORMAT_TABLES: dict[str, dict[tuple[str, str], str]] = {
    IOS: {
        ("string", "date-time"): "Date",
        ("string", "date"): "Date",
        ("string", "uuid"): "UUID",
        ("string", "uri"): "URL",
        ("integer", "int64"): "Int64",
        ("number", "float"): "Float",
    },
    ANDROID: {
        ("integer", "int64"): "Long",
        ("number", "float"): "Float",
    },
    WEB: {},
}

COMPONENT_TYPE_TABLES: dict[str, dict[str, str]] = {
    IOS: {
        "String": "String",
        "Int": "Int",
        "Double": "Double",
        "Bool": "Bool",
        "Color": "Color",
        "Font": "Font",
        "Image": "Image",
        "Void": "Void",
        "Any": "Any",
    },
    ANDROID: {
        "String": "String",
        "Int": "Int",
        "Double": "Double",
        "Bool": "Boolean",
        "Color": "Color",
        "Font": "TextStyle",
        "Image": "ImageVector",
        "Void": "Unit",
        "Any": "Any",
    },
    WEB: {
        "String": "string",
        "Int": "number",
        "Double": "number",
        "Bool": "boolean",
        "Color": "string",
        "Font": "string",
        "Image": "string",
        "Void": "void",
        "Any": "unknown",
    },
}


def _table(tables: dict[str, dict], platform: str) -> dict:
    try:
        return tables[platform]
    except KeyError:
        raise SpecError(f"Unknown platform: {platform}") from None


def _fallback(type_name: str, platform: str, policy: UnknownTypePolicy) -> str:
    if policy is UnknownTypePolicy.ERROR:
        raise SpecError(f"No {platform} mapping for type '{type_name}'")
    return type_name


def schema_type(
    type_name: str,
    platform: str,
    fmt: str | None = None,
    policy: UnknownTypePolicy = UnknownTypePolicy.PASS_THROUGH,
) -> str:
    """Map a JSON-Schema/OpenAPI/plugin type name to the platform's scalar spelling."""
    if fmt:
        formatted = _table(SCHEMA_FORMAT_TABLES, platform).get((type_name, fmt))
        if formatted:
            return formatted
    table = _table(SCHEMA_TYPE_TABLES, platform)
    mapped = table.get(type_name) or table.get(type_name.lower())
    if mapped:
        return mapped
    return _fallback(type_name, platform, policy)


def collection_of(element: str, platform: str) -> str:
    if platform == IOS:
        return f"[{element}]"
    if platform == ANDROID:
        return f"List<{element}>"
    if platform == WEB:
        if " " in element or "|" in element:
            return f"Array<{element}>"
        return f"{element}[]"
    raise SpecError(f"Unknown platform: {platform}")


def optional_of(inner: str, platform: str) -> str:
    if platform in (IOS, ANDROID):
        return f"{inner}?"
    if platform == WEB:
        return f"{inner} | undefined"
    raise SpecError(f"Unknown platform: {platform}")


def schema_field_type(
    type_name: str,
    platform: str,
    is_array: bool = False,
    fmt: str | None = None,
    policy: UnknownTypePolicy = UnknownTypePolicy.PASS_THROUGH,
) -> str:
    """Like :func:`schema_type` but wraps array fields in the platform collection."""
    element = schema_type(type_name, platform, fmt=fmt, policy=policy)
    return collection_of(element, platform) if is_array else element


def unwrap_binding(type_name: str) -> str | None:
    """Return ``T`` for ``Binding<T>``, otherwise ``None``."""
    if type_name.startswith("Binding<") and type_name.endswith(">"):
        return type_name[len("Binding<"):-1]
    return None


def component_type(
    type_name: str,
    platform: str,
    policy: UnknownTypePolicy = UnknownTypePolicy.PASS_THROUGH,
) -> str:
    """Translate a component-spec type, unwrapping ``Binding<T>``, ``T[]`` and ``T?``."""
    type_name = type_name.strip()

    inner = unwrap_binding(type_name)
    if inner is not None:
        return component_type(inner, platform, policy)

    if type_name.endswith("[]"):
        return collection_of(component_type(type_name[:-2], platform, policy), platform)

    if type_name.endswith("?"):
        return optional_of(component_type(type_name[:-1], platform, policy), platform)

    mapped = _table(COMPONENT_TYPE_TABLES, platform).get(type_name)
    if mapped:
        return mapped
    return _fallback(type_name, platform, policy)
