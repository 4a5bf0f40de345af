"""Shared pieces of every code generator.

Generators are pure: they receive a normalized representation plus the
source file label and return text. Output is assembled from lists of lines
that are joined once at the end.
"""

from datetime import date

TOOL_NAME = "cuppa-cli"
DO_NOT_EDIT = "DO NOT EDIT MANUALLY - Changes will be overwritten"
INDENT = "    "

# Order of the declaration blocks inside a generated SwiftUI component.
COMPONENT_SECTION_ORDER = ("properties", "state", "actions", "initializers", "body", "helpers")

Lines = list[str]


def generation_date() -> str:
    return date.today().isoformat()


def provenance_header(source_file: str, comment: str = "//") -> Lines:
    """Comment block naming the source file, the generation date and the do-not-edit marker."""
    return [
        f"{comment} Generated by {TOOL_NAME} from {source_file}",
        f"{comment} Generation date: {generation_date()}",
        f"{comment} {DO_NOT_EDIT}",
        "",
    ]


def indent(lines: Lines, level: int = 1) -> Lines:
    """Indent non-empty lines by ``level`` steps."""
    prefix = INDENT * level
    return [f"{prefix}{line}" if line else line for line in lines]


def join_lines(lines: Lines) -> str:
    return "\n".join(lines)


def doc_comment(text: str | None, style: str = "///") -> Lines:
    """Single-line documentation comment; ``style`` is ``///`` (Swift) or ``/**`` (Kotlin, TS)."""
    if not text:
        return []
    text = " ".join(text.split())
    if style == "/**":
        return [f"/** {text} */"]
    return [f"{style} {text}"]


def string_literal(value: str, quote: str = '"') -> str:
    escaped = str(value).replace("\\", "\\\\").replace(quote, f"\\{quote}")
    return f"{quote}{escaped}{quote}"


class Generator:
    """Base class for single-file generators.

    Subclasses set ``kind``/``platform``/``file_extension`` and implement
    :meth:`generate` and :meth:`file_name`.
    """

    kind: str = ""
    platform: str = ""
    file_extension: str = ""

    def generate(self, representation, source_file: str) -> str:
        raise NotImplementedError

    def file_name(self, representation) -> str:
        return f"{representation.name}{self.file_extension}"
