"""SwiftUI component generator."""

from cuppa_cli import typemap
from cuppa_cli.parser.base import ParsedAction, ParsedComponent, ParsedComponentProperty

from .base import COMPONENT_SECTION_ORDER, Generator, Lines, generation_date, indent, join_lines, string_literal

TITLE_NAMES = ("title", "text")
ICON_NAMES = ("icon", "iconName")
DISABLED_OPACITY = 0.6


def _header(component: ParsedComponent, source_file: str) -> Lines:
    return [
        "//",
        f"//  {component.name}.swift",
        "//  CuppaUI",
        "//",
        f"//  Generated from component specifications on {generation_date()}.",
        "//",
        f"//  {component.description}",
        "//",
        "//  ⚠️ DO NOT EDIT: This file is auto-generated from component specifications.",
        f"//  Source: {source_file}",
        "//  To make changes, update the component JSON files and regenerate.",
        "//",
        "",
    ]


def default_literal(prop: ParsedComponentProperty) -> str | None:
    """Swift spelling of a property default, ``nil`` for optionals without one."""
    value = prop.default_value
    if value is None:
        return "nil" if prop.type.endswith("?") else None
    base_type = typemap.unwrap_binding(prop.type) or prop.type
    if base_type == "String":
        return string_literal(value)
    if base_type == "Bool":
        return "true" if value else "false"
    if base_type == "Color":
        return f".{value}"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def closure_type(action: ParsedAction, is_async: bool | None = None) -> str:
    params = ", ".join(param.swift_type for param in action.parameters)
    return_type = typemap.component_type(action.return_type, typemap.IOS)
    asynchronous = action.is_async if is_async is None else is_async
    return f"({params}){' async' if asynchronous else ''} -> {return_type}"


class SwiftComponentGenerator(Generator):
    """Renders a ParsedComponent as a SwiftUI ``View``.

    Declarations are grouped into the blocks named by
    ``COMPONENT_SECTION_ORDER``; empty blocks are left out. When the
    component has an async action, the first async action drives the
    button: two initializers are emitted (async closure, and a sync closure
    wrapped in a ``Task``) together with an ``isPerformingAction`` state
    and a ``handleAction()`` helper.
    """

    kind = "component"
    platform = typemap.IOS
    file_extension = ".swift"

    def generate(self, component: ParsedComponent, source_file: str) -> str:
        lines = _header(component, source_file)
        lines.append("import SwiftUI")
        if component.category == "forms" or component.has_async_action:
            lines.append("import CuppaCore")
        lines.append("")

        lines += self._documentation(component)
        lines.append(f"public struct {component.name}: View {{")

        sections = {
            "properties": self._properties(component),
            "state": self._state(component),
            "actions": self._actions(component),
            "initializers": self._initializers(component),
            "body": self._body(component),
            "helpers": self._helpers(component),
        }
        blocks = [sections[name] for name in COMPONENT_SECTION_ORDER if sections[name]]
        for i, block in enumerate(blocks):
            lines += indent(block)
            if i < len(blocks) - 1:
                lines.append("")

        lines += ["}", ""]
        lines += self._preview(component)
        return join_lines(lines)

    @staticmethod
    def _primary_action(component: ParsedComponent) -> ParsedAction | None:
        for action in component.actions:
            if action.is_async:
                return action
        return component.actions[0] if component.actions else None

    def _documentation(self, component: ParsedComponent) -> Lines:
        lines = [f"/// {component.description}", "///", "/// Features:"]
        if component.has_async_action:
            lines += ["/// - Async action support", "/// - Synchronous action support"]
        if component.has_loading_state:
            lines += ["/// - Loading state with spinner", "/// - Automatic state management"]
        lines += [f"/// - {prop.description}" for prop in component.properties if prop.description != prop.name]
        lines += ["///", "/// Example:", "/// ```swift"]

        example_args = ", ".join(self._example_argument(prop) for prop in component.properties if prop.required)
        if component.actions:
            lines += [f"/// {component.name}({example_args}) {{", "///     // Handle action", "/// }"]
        else:
            lines.append(f"/// {component.name}({example_args})")
        lines.append("/// ```")
        return lines

    @staticmethod
    def _example_argument(prop: ParsedComponentProperty) -> str:
        if prop.type == "String":
            return f"{prop.name}: {string_literal(prop.name)}"
        if prop.type == "Bool":
            return f"{prop.name}: true"
        if prop.type in ("Int", "Double"):
            return f"{prop.name}: 0"
        if prop.is_binding:
            return f"{prop.name}: ${prop.name}"
        return f"{prop.name}: {prop.name}"

    def _properties(self, component: ParsedComponent) -> Lines:
        lines = []
        for prop in component.properties:
            if prop.is_binding:
                lines.append(f"@Binding var {prop.name}: {prop.swift_type}")
            else:
                lines.append(f"let {prop.name}: {prop.swift_type}")
        return ["// MARK: - Properties", ""] + lines if lines else []

    def _state(self, component: ParsedComponent) -> Lines:
        if not component.has_async_action:
            return []
        return ["@State private var isPerformingAction = false"]

    def _actions(self, component: ParsedComponent) -> Lines:
        return [f"let {action.name}: {closure_type(action)}" for action in component.actions]

    def _initializers(self, component: ParsedComponent) -> Lines:
        lines = ["// MARK: - Initialization", ""]
        if not component.has_async_action:
            return lines + self._initializer(component)

        primary = self._primary_action(component)
        lines += ["/// Async action initializer"]
        lines += self._initializer(component)
        lines += ["", "/// Synchronous action initializer"]
        lines += self._initializer(component, sync_wrapped=primary)
        return lines

    def _initializer(self, component: ParsedComponent, sync_wrapped: ParsedAction | None = None) -> Lines:
        params = []
        for prop in component.properties:
            param_type = f"Binding<{prop.swift_type}>" if prop.is_binding else prop.swift_type
            default = default_literal(prop) if not prop.required else None
            params.append(f"{prop.name}: {param_type}" + (f" = {default}" if default else ""))
        for action in component.actions:
            is_async = False if action is sync_wrapped else None
            params.append(f"{action.name}: @escaping {closure_type(action, is_async)}")

        lines = ["public init("]
        lines += [f"    {param}," for param in params[:-1]] + [f"    {param}" for param in params[-1:]]
        lines.append(") {")
        for prop in component.properties:
            prefix = "_" if prop.is_binding else "self."
            lines.append(f"    {prefix}{prop.name} = {prop.name}")
        for action in component.actions:
            if action is sync_wrapped:
                lines += [
                    f"    self.{action.name} = {{",
                    f"        Task {{ {action.name}() }}",
                    "    }",
                ]
            else:
                lines.append(f"    self.{action.name} = {action.name}")
        lines.append("}")
        return lines

    def _busy_condition(self, component: ParsedComponent) -> str:
        flags = []
        if component.find_property("isLoading"):
            flags.append("isLoading")
        if component.has_async_action:
            flags.append("isPerformingAction")
        return " || ".join(flags) or "false"

    def _body(self, component: ParsedComponent) -> Lines:
        content = self._content(component) + self._styling(component)

        primary = self._primary_action(component)
        if primary is not None:
            call = "handleAction()" if component.has_async_action else f"{primary.name}()"
            lines = ["Button {", f"    {call}", "} label: {"] + indent(content) + ["}", ".buttonStyle(.plain)"]
        else:
            lines = content

        loading = component.states.get("loading")
        if loading is not None:
            busy = self._busy_condition(component)
            if loading.disable_interaction:
                lines.append(f".disabled({busy})")
            opacity = loading.opacity if loading.opacity is not None else DISABLED_OPACITY
            lines.append(f".opacity(({busy}) ? {opacity} : 1.0)")

        return ["// MARK: - Body", "", "public var body: some View {"] + indent(lines) + ["}"]

    def _content(self, component: ParsedComponent) -> Lines:
        icon = component.find_property(*ICON_NAMES)
        title = component.find_property(*TITLE_NAMES)
        message = component.find_property("message")

        if not component.has_loading_state:
            if icon:
                return [f"Image(systemName: {icon.name})"]
            if message:
                return [f"Text({message.name})"]
            if title:
                return [f"Text({title.name})"]
            return ["EmptyView()"]

        busy = self._busy_condition(component)
        lines = ["ZStack {"]
        if icon:
            lines += [f"    Image(systemName: {icon.name})", f"        .opacity(({busy}) ? 0 : 1)"]
        elif title:
            lines += [f"    Text({title.name})", f"        .opacity(({busy}) ? 0 : 1)"]
        lines += [
            "",
            f"    if {busy} {{",
            "        ProgressView()",
            "            .progressViewStyle(CircularProgressViewStyle())",
            "    }",
            "}",
        ]
        return lines

    def _styling(self, component: ParsedComponent) -> Lines:
        style = component.style
        lines = []
        if style.font:
            lines.append(f".font(.{style.font})")
        if style.font_weight:
            lines.append(f".fontWeight(.{style.font_weight})")
        if style.foreground_color:
            lines.append(f".foregroundStyle(.{style.foreground_color})")
        lines.append(f".padding(.vertical, {style.padding.top})")
        lines.append(f".padding(.horizontal, {style.padding.leading})")
        if style.background_color:
            lines.append(f".background(.{style.background_color})")
        if style.corner_radius:
            lines.append(f".clipShape(RoundedRectangle(cornerRadius: {style.corner_radius}))")
        if style.border_color and style.border_width:
            lines += [
                ".overlay(",
                f"    RoundedRectangle(cornerRadius: {style.corner_radius or 0})",
                f"        .strokeBorder(.{style.border_color}, lineWidth: {style.border_width})",
                ")",
            ]
        if style.max_width:
            lines.append(f".frame(maxWidth: .{style.max_width})")
        if style.min_height:
            lines.append(f".frame(minHeight: {style.min_height})")
        return lines

    def _helpers(self, component: ParsedComponent) -> Lines:
        if not component.has_async_action:
            return []
        primary = self._primary_action(component)
        return [
            "// MARK: - Actions",
            "",
            "private func handleAction() {",
            "    Task {",
            "        isPerformingAction = true",
            f"        await {primary.name}()",
            "        isPerformingAction = false",
            "    }",
            "}",
        ]

    def _preview(self, component: ParsedComponent) -> Lines:
        lines = [f"#Preview({string_literal(component.name)}) {{"]
        bindings = [prop for prop in component.properties if prop.is_binding]
        if any(prop.swift_type != "Bool" for prop in bindings):
            lines.append('    @Previewable @State var previewText = ""')
        if any(prop.swift_type == "Bool" for prop in bindings):
            lines.append("    @Previewable @State var previewBool = false")

        args = []
        for prop in component.properties:
            value = self._preview_value(component, prop)
            if value is not None:
                args.append(f"{prop.name}: {value}")

        lines.append("    VStack(spacing: 20) {")
        call = f"{component.name}({', '.join(args)})"
        if component.has_async_action:
            lines += [f"        {call} {{", "            // Async action", "        }"]
        elif component.actions:
            lines += [f"        {call} {{", '            print("Action triggered")', "        }"]
        else:
            lines.append(f"        {call}")
        lines += ["    }", "    .padding()", "}", ""]
        return lines

    @staticmethod
    def _preview_value(component: ParsedComponent, prop: ParsedComponentProperty) -> str | None:
        """Sample argument for the preview, ``None`` to rely on the initializer default."""
        if prop.is_binding:
            return "$previewBool" if prop.swift_type == "Bool" else "$previewText"
        if prop.name in TITLE_NAMES:
            return string_literal(component.name)
        if prop.name == "message":
            return string_literal(f"This is a {prop.name}")
        if prop.name in ICON_NAMES or prop.name == "systemIcon":
            return '"star.fill"'
        if not prop.required:
            return None
        if prop.swift_type == "String":
            return string_literal(prop.name)
        if prop.swift_type == "Bool":
            return "false"
        if prop.swift_type in ("Int", "Double"):
            return "0"
        if prop.swift_type.startswith("["):
            return "[]"
        if prop.swift_type.endswith("?"):
            return "nil"
        return None
