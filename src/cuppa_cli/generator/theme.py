"""Theme generators for design tokens.

Each platform gets one file: a Kotlin ``object`` tree with a Material 3
``Typography``, a Swift ``enum`` namespace with a matching ``Typography``
enum, and a TypeScript ``as const`` object with CSS-variable helpers.
"""

import re

from cuppa_cli import typemap
from cuppa_cli.naming import capitalize, is_identifier, to_identifier, to_kebab_case
from cuppa_cli.parser.base import DimensionToken, FontWeightToken, ParsedTheme

from .base import Generator, Lines, doc_comment, indent, join_lines, provenance_header, string_literal

_HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")

KOTLIN_FONT_WEIGHTS = {
    "thin": "FontWeight.Thin",
    "extralight": "FontWeight.ExtraLight",
    "light": "FontWeight.Light",
    "normal": "FontWeight.Normal",
    "regular": "FontWeight.Normal",
    "medium": "FontWeight.Medium",
    "semibold": "FontWeight.SemiBold",
    "bold": "FontWeight.Bold",
    "extrabold": "FontWeight.ExtraBold",
    "black": "FontWeight.Black",
}

SWIFT_FONT_WEIGHTS = {
    "thin": ".thin",
    "extralight": ".ultraLight",
    "ultralight": ".ultraLight",
    "light": ".light",
    "normal": ".regular",
    "regular": ".regular",
    "medium": ".medium",
    "semibold": ".semibold",
    "bold": ".bold",
    "extrabold": ".heavy",
    "heavy": ".heavy",
    "black": ".black",
}

# CSS numeric weights, rounded down to the nearest hundred.
SWIFT_NUMERIC_WEIGHTS = {
    100: ".ultraLight",
    200: ".thin",
    300: ".light",
    400: ".regular",
    500: ".medium",
    600: ".semibold",
    700: ".bold",
    800: ".heavy",
    900: ".black",
}


def hex_components(value: str) -> tuple[int, int, int, int] | None:
    """``#RGB`` / ``#RRGGBB`` / ``#RRGGBBAA`` to ``(r, g, b, a)`` bytes, ``None`` for anything else."""
    match = _HEX_COLOR.match(value.strip())
    if not match:
        return None
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    if len(digits) == 6:
        digits += "FF"
    r, g, b, a = (int(digits[i:i + 2], 16) for i in range(0, 8, 2))
    return r, g, b, a


def _type_scale(theme: ParsedTheme) -> list[tuple[str, DimensionToken]]:
    """Font sizes that match a type-scale name (case-insensitive), in type-scale order."""
    sizes = {size.name.lower(): size for size in theme.typography.font_sizes}
    return [
        (scale_name, sizes[scale_name.lower()])
        for scale_name in typemap.TYPE_SCALE_NAMES
        if scale_name.lower() in sizes
    ]


class KotlinThemeGenerator(Generator):
    kind = "theme"
    platform = typemap.ANDROID
    file_extension = ".kt"

    def generate(self, theme: ParsedTheme, source_file: str) -> str:
        lines = provenance_header(source_file)
        lines += [
            "import androidx.compose.ui.graphics.Color",
            "import androidx.compose.ui.unit.dp",
            "import androidx.compose.ui.unit.sp",
            "import androidx.compose.material3.Typography",
            "import androidx.compose.ui.text.TextStyle",
            "import androidx.compose.ui.text.font.FontWeight",
            "",
            "/**",
            f" * Design system theme generated from {source_file}",
            " */",
            f"object {theme.name} {{",
            "",
        ]

        if theme.colors:
            body = []
            for color in theme.colors:
                body += doc_comment(color.description, "/**")
                body.append(f"val {self._name(color.name)} = {self.color(color.value)}")
            lines += self._section("Colors", "Colors", body)

        typography = theme.typography
        if typography.font_families or typography.font_sizes or typography.font_weights:
            lines.append("    // Typography")
        if typography.font_families:
            lines += self._object("FontFamilies", [
                f"const val {self._name(font.name)} = {string_literal(font.value)}"
                for font in typography.font_families
            ])
        if typography.font_sizes:
            lines += self._object("FontSizes", self._dimensions(typography.font_sizes, "sp"))
        if typography.font_weights:
            lines += self._object("FontWeights", [
                f"val {self._name(weight.name)} = {self.font_weight(weight)}"
                for weight in typography.font_weights
            ])
        if typography.line_heights:
            lines += self._object("LineHeights", self._dimensions(typography.line_heights, "sp"))
        if typography.letter_spacing:
            lines += self._object("LetterSpacing", self._dimensions(typography.letter_spacing, "sp"))

        if theme.spacing:
            lines += self._section("Spacing", "Spacing", self._dimensions(theme.spacing, "dp"))
        if theme.border_radius:
            lines += self._section("Border Radius", "BorderRadius", self._dimensions(theme.border_radius, "dp"))
        if theme.shadows:
            body = []
            for shadow in theme.shadows:
                body += doc_comment(shadow.description, "/**")
                body.append(f"const val {self._name(shadow.name)} = {string_literal(shadow.value)}")
            lines += self._section("Shadows", "Shadows", body)
        if theme.breakpoints:
            lines += self._section("Breakpoints", "Breakpoints", self._dimensions(theme.breakpoints, "dp"))

        lines += ["}", ""]

        if typography.font_sizes:
            lines += self._material_typography(theme)

        return join_lines(lines)

    def _material_typography(self, theme: ParsedTheme) -> Lines:
        entries = [
            f"    {scale_name} = TextStyle(fontSize = {theme.name}.FontSizes.{self._name(size.name)})"
            for scale_name, size in _type_scale(theme)
        ]
        lines = [
            "/**",
            " * Material 3 Typography configuration",
            " */",
            f"val {theme.name}Typography = Typography(",
        ]
        lines += [f"{entry}," for entry in entries[:-1]] + entries[-1:]
        lines += [")", ""]
        return lines

    def _section(self, comment: str, name: str, body: Lines) -> Lines:
        return [f"    // {comment}"] + self._object(name, body)

    def _object(self, name: str, body: Lines) -> Lines:
        return [f"    object {name} {{"] + indent(body, 2) + ["    }", ""]

    def _dimensions(self, tokens: tuple[DimensionToken, ...], unit: str) -> Lines:
        return [f"val {self._name(token.name)} = {token.value}.{unit}" for token in tokens]

    @staticmethod
    def _name(name: str) -> str:
        return capitalize(to_identifier(name))

    @staticmethod
    def color(value: str) -> str:
        components = hex_components(value)
        if components is None:
            return "Color.Unspecified"
        r, g, b, a = components
        return f"Color(0x{a:02X}{r:02X}{g:02X}{b:02X})"

    @staticmethod
    def font_weight(weight: FontWeightToken) -> str:
        if isinstance(weight.value, (int, float)):
            return f"FontWeight({int(weight.value)})"
        return KOTLIN_FONT_WEIGHTS.get(weight.value.lower(), "FontWeight.Normal")


class SwiftThemeGenerator(Generator):
    kind = "theme"
    platform = typemap.IOS
    file_extension = ".swift"

    def generate(self, theme: ParsedTheme, source_file: str) -> str:
        lines = provenance_header(source_file)
        lines += [
            "import SwiftUI",
            "",
            f"/// Design system theme generated from {source_file}",
            f"public enum {theme.name} {{",
            "",
        ]

        if theme.colors:
            body = []
            for color in theme.colors:
                body += doc_comment(color.description)
                body.append(f"public static let {to_identifier(color.name)} = {self.color(color.value)}")
            lines += self._enum("Colors", body)

        typography = theme.typography
        if typography.font_families:
            lines += self._enum("FontFamilies", [
                f"public static let {to_identifier(font.name)} = {string_literal(font.value)}"
                for font in typography.font_families
            ])
        if typography.font_sizes:
            lines += self._enum("FontSizes", self._dimensions(typography.font_sizes))
        if typography.font_weights:
            lines += self._enum("FontWeights", [
                f"public static let {to_identifier(weight.name)}: Font.Weight = {self.font_weight(weight)}"
                for weight in typography.font_weights
            ])
        if typography.line_heights:
            lines += self._enum("LineHeights", self._dimensions(typography.line_heights))
        if typography.letter_spacing:
            lines += self._enum("LetterSpacing", self._dimensions(typography.letter_spacing))

        if theme.spacing:
            lines += self._enum("Spacing", self._dimensions(theme.spacing))
        if theme.border_radius:
            lines += self._enum("BorderRadius", self._dimensions(theme.border_radius))
        if theme.shadows:
            body = []
            for shadow in theme.shadows:
                body += doc_comment(shadow.description)
                body.append(f"public static let {to_identifier(shadow.name)} = {string_literal(shadow.value)}")
            lines += self._enum("Shadows", body)
        if theme.breakpoints:
            lines += self._enum("Breakpoints", self._dimensions(theme.breakpoints))

        scale = _type_scale(theme)
        if scale:
            lines += self._enum("Typography", [
                f"public static let {scale_name} = Font.system(size: FontSizes.{to_identifier(size.name)})"
                for scale_name, size in scale
            ])

        lines += ["}", ""]
        return join_lines(lines)

    def _enum(self, name: str, body: Lines) -> Lines:
        return [f"    // MARK: - {name}", f"    public enum {name} {{"] + indent(body, 2) + ["    }", ""]

    def _dimensions(self, tokens: tuple[DimensionToken, ...]) -> Lines:
        return [f"public static let {to_identifier(token.name)}: CGFloat = {token.value}" for token in tokens]

    @staticmethod
    def color(value: str) -> str:
        """``Color(red:green:blue:opacity:)`` for hex values, an asset-catalog lookup otherwise."""
        components = hex_components(value)
        if components is None:
            return f"Color({string_literal(value)})"
        r, g, b, a = (component / 255 for component in components)
        return f"Color(red: {r:.3f}, green: {g:.3f}, blue: {b:.3f}, opacity: {a:.3f})"

    @staticmethod
    def font_weight(weight: FontWeightToken) -> str:
        if isinstance(weight.value, (int, float)):
            hundred = min(max(int(weight.value) // 100 * 100, 100), 900)
            return SWIFT_NUMERIC_WEIGHTS[hundred]
        return SWIFT_FONT_WEIGHTS.get(weight.value.lower(), ".regular")


class TypeScriptThemeGenerator(Generator):
    kind = "theme"
    platform = typemap.WEB
    file_extension = ".ts"

    def generate(self, theme: ParsedTheme, source_file: str) -> str:
        const = theme.name.lower()
        lines = provenance_header(source_file)
        lines += [
            "",
            "/**",
            f" * Design system theme generated from {source_file}",
            " */",
            f"export const {const} = {{",
        ]

        if theme.colors:
            lines += self._group("colors", [
                (color.name, self._quote(color.value), color.description) for color in theme.colors
            ])
            lines.append("")

        typography = theme.typography
        if not typography.is_empty:
            lines.append("  typography: {")
            if typography.font_families:
                lines += self._group("fontFamilies", [
                    (font.name, self._quote(", ".join((font.value,) + font.fallback)), None)
                    for font in typography.font_families
                ], level=2)
            if typography.font_sizes:
                lines += self._group("fontSizes", self._dimensions(typography.font_sizes), level=2)
            if typography.font_weights:
                lines += self._group("fontWeights", [
                    (weight.name, self._weight(weight), None) for weight in typography.font_weights
                ], level=2)
            if typography.line_heights:
                lines += self._group("lineHeights", self._dimensions(typography.line_heights), level=2)
            if typography.letter_spacing:
                lines += self._group("letterSpacing", self._dimensions(typography.letter_spacing), level=2)
            lines += ["  },", ""]

        if theme.spacing:
            lines += self._group("spacing", self._dimensions(theme.spacing)) + [""]
        if theme.border_radius:
            lines += self._group("borderRadius", self._dimensions(theme.border_radius)) + [""]
        if theme.shadows:
            lines += self._group("shadows", [
                (shadow.name, self._quote(shadow.value), shadow.description) for shadow in theme.shadows
            ]) + [""]
        if theme.breakpoints:
            lines += self._group("breakpoints", self._dimensions(theme.breakpoints)) + [""]

        lines += ["} as const;", ""]

        lines += [
            "// TypeScript type definitions",
            f"export type {theme.name}Theme = typeof {const};",
            "",
        ]
        if theme.colors:
            lines.append(f"export type ColorToken = keyof {theme.name}Theme['colors'];")
        if theme.spacing:
            lines.append(f"export type SpacingToken = keyof {theme.name}Theme['spacing'];")
        if theme.border_radius:
            lines.append(f"export type BorderRadiusToken = keyof {theme.name}Theme['borderRadius'];")
        lines.append("")

        lines += [
            "/**",
            " * Export theme as CSS custom properties",
            " */",
            f"export function {const}ToCSSVariables(): Record<string, string> {{",
            "  return {",
        ]
        for prefix, group, tokens in (
            ("color", "colors", theme.colors),
            ("spacing", "spacing", theme.spacing),
            ("border-radius", "borderRadius", theme.border_radius),
        ):
            for token in tokens:
                variable = self._quote(f"--{prefix}-{to_kebab_case(token.name)}")
                lines.append(f"    {variable}: {const}.{group}{self._access(token.name)},")
        lines += ["  };", "}", ""]

        if theme.colors:
            lines += [
                "/**",
                " * React hook to inject theme CSS variables",
                " */",
                f"export function use{theme.name}Theme() {{",
                "  if (typeof document !== 'undefined') {",
                f"    const vars = {const}ToCSSVariables();",
                "    Object.entries(vars).forEach(([key, value]) => {",
                "      document.documentElement.style.setProperty(key, value);",
                "    });",
                "  }",
                "}",
                "",
            ]

        return join_lines(lines)

    def file_name(self, theme: ParsedTheme) -> str:
        return f"{theme.name.lower()}{self.file_extension}"

    def _group(self, key: str, entries: list[tuple[str, str, str | None]], level: int = 1) -> Lines:
        pad = "  " * level
        lines = [f"{pad}{key}: {{"]
        for i, (name, value, description) in enumerate(entries):
            comma = "" if i == len(entries) - 1 else ","
            lines += [f"{pad}  {line}" for line in doc_comment(description, "/**")]
            lines.append(f"{pad}  {self._key(name)}: {value}{comma}")
        lines.append(f"{pad}}},")
        return lines

    def _dimensions(self, tokens: tuple[DimensionToken, ...]) -> list[tuple[str, str, None]]:
        return [(token.name, self._quote(token.css), None) for token in tokens]

    def _weight(self, weight: FontWeightToken) -> str:
        if isinstance(weight.value, (int, float)):
            return str(weight.value)
        return self._quote(weight.value)

    @staticmethod
    def _quote(value: str) -> str:
        return string_literal(value, "'")

    def _key(self, name: str) -> str:
        return name if is_identifier(name) else self._quote(name)

    def _access(self, name: str) -> str:
        return f".{name}" if is_identifier(name) else f"[{self._quote(name)}]"
