"""Model generators: one data type per JSON Schema, per platform.

The ``render_model`` methods are reused by the API-client generators to emit
the models declared under ``components.schemas``.
"""

from cuppa_cli import typemap
from cuppa_cli.naming import is_identifier, to_identifier
from cuppa_cli.parser.base import ParsedModel, ParsedProperty

from .base import Generator, Lines, doc_comment, indent, join_lines, provenance_header, string_literal


def literal(value, source_type: str) -> str | None:
    """Swift/Kotlin literal for a schema default, or ``None`` when it has no scalar spelling."""
    if value is None or isinstance(value, (list, dict)):
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return string_literal(value)
    if source_type == "number" and isinstance(value, int):
        return f"{value}.0"
    return str(value)


def field_identifiers(model: ParsedModel) -> dict[str, str]:
    """Swift/Kotlin field name per JSON key; keys that collapse to a taken name get a numeric suffix."""
    identifiers = {}
    taken = set()
    for prop in model.properties:
        base = to_identifier(prop.name)
        identifier, n = base, 2
        while identifier in taken:
            identifier = f"{base}{n}"
            n += 1
        taken.add(identifier)
        identifiers[prop.name] = identifier
    return identifiers


def _needs_renaming(model: ParsedModel) -> bool:
    return any(name != identifier for name, identifier in field_identifiers(model).items())


class SwiftModelGenerator(Generator):
    kind = "model"
    platform = typemap.IOS
    file_extension = ".swift"

    def generate(self, model: ParsedModel, source_file: str) -> str:
        lines = provenance_header(source_file)
        lines += ["import Foundation", ""]
        lines += self.render_model(model)
        return join_lines(lines)

    def render_model(self, model: ParsedModel) -> Lines:
        lines = doc_comment(model.description)
        identifiers = field_identifiers(model)
        lines.append(f"public struct {model.name}: Codable {{")

        for prop in model.properties:
            lines += indent(doc_comment(prop.description))
            lines.append(f"    public let {identifiers[prop.name]}: {self._field_type(prop)}")

        if _needs_renaming(model):
            lines += ["", "    enum CodingKeys: String, CodingKey {"]
            for prop in model.properties:
                identifier = identifiers[prop.name]
                if identifier == prop.name:
                    lines.append(f"        case {identifier}")
                else:
                    lines.append(f"        case {identifier} = {string_literal(prop.name)}")
            lines.append("    }")

        lines.append("")
        lines += indent(self._render_init(model))
        lines += ["}", ""]
        return lines

    def _field_type(self, prop: ParsedProperty) -> str:
        field_type = prop.target_type(self.platform)
        return f"{field_type}?" if prop.optional else field_type

    def _render_init(self, model: ParsedModel) -> Lines:
        if not model.properties:
            return ["public init() {}"]

        identifiers = field_identifiers(model)
        params = []
        for prop in model.properties:
            default = "nil" if prop.optional else (None if prop.is_array else literal(prop.default_value, prop.type))
            suffix = f" = {default}" if default else ""
            params.append(f"    {identifiers[prop.name]}: {self._field_type(prop)}{suffix}")

        lines = ["public init("]
        lines += [f"{param}," for param in params[:-1]] + params[-1:]
        lines.append(") {")
        for prop in model.properties:
            identifier = identifiers[prop.name]
            lines.append(f"    self.{identifier} = {identifier}")
        lines.append("}")
        return lines


class KotlinModelGenerator(Generator):
    kind = "model"
    platform = typemap.ANDROID
    file_extension = ".kt"

    def generate(self, model: ParsedModel, source_file: str) -> str:
        lines = provenance_header(source_file)
        lines += self.render_imports([model])
        lines += self.render_model(model)
        return join_lines(lines)

    def render_imports(self, models: list[ParsedModel]) -> Lines:
        imports = []
        if any(_needs_renaming(model) for model in models):
            imports.append("import kotlinx.serialization.SerialName")
        imports.append("import kotlinx.serialization.Serializable")
        return imports + [""]

    def render_model(self, model: ParsedModel) -> Lines:
        lines = []
        if model.description:
            lines += ["/**", f" * {model.description}", " */"]
        lines.append("@Serializable")

        if not model.properties:
            lines += [f"class {model.name}", ""]
            return lines

        lines.append(f"data class {model.name}(")
        identifiers = field_identifiers(model)
        fields = []
        for prop in model.properties:
            field = doc_comment(prop.description, "/**")
            identifier = identifiers[prop.name]
            if identifier != prop.name:
                field.append(f"@SerialName({string_literal(prop.name)})")
            field.append(f"val {identifier}: {self._field_type(prop)}")
            fields.append(indent(field))

        for i, field in enumerate(fields):
            if i < len(fields) - 1:
                field[-1] += ","
            lines += field
        lines += [")", ""]
        return lines

    def _field_type(self, prop: ParsedProperty) -> str:
        field_type = prop.target_type(self.platform)
        if prop.optional:
            return f"{field_type}? = null"
        default = None if prop.is_array else literal(prop.default_value, prop.type)
        return f"{field_type} = {default}" if default else field_type


class TypeScriptModelGenerator(Generator):
    kind = "model"
    platform = typemap.WEB
    file_extension = ".ts"

    def generate(self, model: ParsedModel, source_file: str) -> str:
        lines = provenance_header(source_file)
        lines += self.render_model(model)
        return join_lines(lines)

    def render_model(self, model: ParsedModel) -> Lines:
        lines = []
        if model.description:
            lines += ["/**", f" * {model.description}", " */"]
        lines.append(f"export interface {model.name} {{")
        for prop in model.properties:
            key = prop.name if is_identifier(prop.name) or prop.name.isidentifier() else string_literal(prop.name, "'")
            optional = "?" if prop.optional else ""
            lines += ["  " + line for line in doc_comment(prop.description, "/**")]
            lines.append(f"  {key}{optional}: {prop.target_type(self.platform)};")
        lines += ["}", ""]
        return lines
