"""Name conversion and numeric-with-unit helpers shared by parsers and generators."""

import re

_SEPARATED_CHAR = re.compile(r"[-_](.)")
_NON_IDENTIFIER = re.compile(r"[^A-Za-z0-9_]")
_VALUE_WITH_UNIT = re.compile(r"^(-?\d+(?:\.\d*)?|-?\.\d+)([a-z%]*)$", re.IGNORECASE)
_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+))")

DEFAULT_UNIT = "px"


def capitalize(text: str) -> str:
    """Upper-case the first character only (``bodyMedium`` -> ``BodyMedium``)."""
    return text[:1].upper() + text[1:]


def decapitalize(text: str) -> str:
    return text[:1].lower() + text[1:]


def to_camel_case(text: str) -> str:
    """Convert ``font-size_large`` style names to ``fontSizeLarge``."""
    converted = _SEPARATED_CHAR.sub(lambda m: m.group(1).upper(), text)
    return decapitalize(converted)


def to_pascal_case(text: str) -> str:
    return capitalize(to_camel_case(text))


def to_kebab_case(text: str) -> str:
    """Convert ``primaryDark`` / ``HTTPServer`` to ``primary-dark`` / ``http-server``."""
    text = re.sub(r"([a-z0-9])([A-Z])", r"\1-\2", text)
    text = re.sub(r"([A-Z])([A-Z])(?=[a-z])", r"\1-\2", text)
    return text.lower()


def to_identifier(text: str) -> str:
    """Turn an arbitrary key (``X-Request-Id``, ``user name``) into a camelCase identifier."""
    cleaned = _NON_IDENTIFIER.sub("_", text.strip()).strip("_")
    identifier = to_camel_case(cleaned) if cleaned else "value"
    if identifier[0].isdigit():
        identifier = f"_{identifier}"
    return identifier


def is_identifier(text: str) -> bool:
    return to_identifier(text) == text


def sanitize_type_name(text: str) -> str:
    """Strip everything but ASCII letters and digits (``Pet Store`` -> ``PetStore``)."""
    return re.sub(r"[^a-zA-Z0-9]", "", text)


def normalize_number(number: float) -> int | float:
    """Return integral floats as ints so ``16.0`` renders as ``16``."""
    if isinstance(number, float) and number.is_integer():
        return int(number)
    return number


def parse_value(value) -> tuple[int | float, str]:
    """Split ``"1.5rem"`` / ``"16px"`` / ``"2"`` / ``16`` into ``(magnitude, unit)``.

    The unit defaults to ``px``. A string that does not start with a number
    yields ``(0, "px")`` rather than raising.
    """
    if isinstance(value, bool):
        return int(value), DEFAULT_UNIT
    if isinstance(value, (int, float)):
        return normalize_number(value), DEFAULT_UNIT

    text = str(value).strip()
    match = _VALUE_WITH_UNIT.match(text)
    if match:
        return normalize_number(float(match.group(1))), match.group(2) or DEFAULT_UNIT

    leading = _LEADING_NUMBER.match(text)
    if leading:
        return normalize_number(float(leading.group(1))), DEFAULT_UNIT
    return 0, DEFAULT_UNIT


def format_value(number: int | float, unit: str = DEFAULT_UNIT) -> str:
    """Inverse of :func:`parse_value` for ``<number><unit>`` strings."""
    return f"{normalize_number(number)}{unit}"
