"""Design-token parser.

Flattens nested token groups (colors, typography, spacing, border radius,
shadows, breakpoints) into ParsedTheme lists. Each entry may be a bare value
or an object carrying ``value`` and an optional ``description``.
"""

from cuppa_cli.errors import SpecError
from cuppa_cli.naming import parse_value, to_camel_case

from .base import (
    DimensionToken,
    FontFamilyToken,
    FontWeightToken,
    ParsedTheme,
    ParsedTypography,
    ValueToken,
)

DEFAULT_THEME_NAME = "Theme"


def parse_design_tokens(tokens: dict, name: str = DEFAULT_THEME_NAME) -> ParsedTheme:
    """Parse a design-token document into a ParsedTheme called ``name``."""
    if not isinstance(tokens, dict):
        raise SpecError("Design tokens document must be a JSON object")

    typography = _group(tokens, "typography")
    return ParsedTheme(
        name=name,
        colors=_value_tokens(_group(tokens, "colors")),
        typography=ParsedTypography(
            font_families=_font_families(_group(typography, "fontFamilies")),
            font_sizes=_dimension_tokens(_group(typography, "fontSizes")),
            font_weights=_font_weights(_group(typography, "fontWeights")),
            line_heights=_dimension_tokens(_group(typography, "lineHeights")),
            letter_spacing=_dimension_tokens(_group(typography, "letterSpacing")),
        ),
        spacing=_dimension_tokens(_group(tokens, "spacing")),
        border_radius=_dimension_tokens(_group(tokens, "borderRadius")),
        shadows=_value_tokens(_group(tokens, "shadows")),
        breakpoints=_dimension_tokens(_group(tokens, "breakpoints")),
    )


def _group(tokens: dict, key: str) -> dict:
    group = tokens.get(key)
    if group is None:
        return {}
    if not isinstance(group, dict):
        raise SpecError(f"Token group '{key}' must be an object")
    return group


def _unwrap(entry) -> tuple[object, str | None]:
    """Return ``(value, description)`` for both the bare and the object form."""
    if isinstance(entry, dict):
        if "value" not in entry:
            raise SpecError(f"Token entry is missing 'value': {entry}")
        return entry["value"], entry.get("description")
    return entry, None


def _value_tokens(group: dict) -> list[ValueToken]:
    parsed = []
    for name, entry in group.items():
        value, description = _unwrap(entry)
        parsed.append(ValueToken(name=to_camel_case(name), value=str(value), description=description))
    return parsed


def _dimension_tokens(group: dict) -> list[DimensionToken]:
    parsed = []
    for name, entry in group.items():
        value, description = _unwrap(entry)
        number, unit = parse_value(value)
        parsed.append(DimensionToken(name=to_camel_case(name), value=number, unit=unit, description=description))
    return parsed


def _font_families(group: dict) -> list[FontFamilyToken]:
    parsed = []
    for name, entry in group.items():
        fallback = (entry.get("fallback") or []) if isinstance(entry, dict) else []
        value, _ = _unwrap(entry)
        parsed.append(FontFamilyToken(name=to_camel_case(name), value=str(value), fallback=fallback))
    return parsed


def _font_weights(group: dict) -> list[FontWeightToken]:
    parsed = []
    for name, entry in group.items():
        value, _ = _unwrap(entry)
        if isinstance(value, str) and value.strip().isdigit():
            value = int(value)
        parsed.append(FontWeightToken(name=to_camel_case(name), value=value))
    return parsed
