"""Swift plugin generator.

A plugin is a small package of files rather than a single source file, so
:meth:`SwiftPluginGenerator.generate_plugin` returns a mapping of file name
to content. The manager forwards every method to the registered provider
when the plugin declares providers; otherwise it holds method stubs.
"""

from cuppa_cli import typemap
from cuppa_cli.parser.base import ParsedPlugin, ParsedPluginMethod, ParsedPluginModel, ParsedPluginProvider

from .base import Generator, Lines, doc_comment, generation_date, indent, join_lines, string_literal
from .model import literal

DEBUG_FLAG = "enableDebugLogging"


def swift_type(type_name: str) -> str:
    return typemap.schema_type(type_name, typemap.IOS)


def _header(file_name: str) -> Lines:
    return [
        "//",
        f"//  {file_name}.swift",
        "//",
        f"//  Generated by cuppa-cli on {generation_date()}",
        "//",
        "",
    ]


def method_signature(method: ParsedPluginMethod) -> str:
    params = ", ".join(f"{param.name}: {swift_type(param.type)}" for param in method.parameters)
    effects = (" async" if method.is_async else "") + (" throws" if method.throws else "")
    returns = f" -> {swift_type(method.return_type)}" if method.returns_value else ""
    return f"func {method.name}({params}){effects}{returns}"


class SwiftPluginGenerator(Generator):
    kind = "plugin"
    platform = typemap.IOS
    file_extension = ".swift"

    def generate_plugin(self, plugin: ParsedPlugin) -> dict[str, str]:
        """Render every file of the plugin, keyed by file name (insertion order is write order)."""
        files = {
            f"{plugin.name}.swift": self._plugin_file(plugin),
            f"{plugin.name}Configuration.swift": self._configuration_file(plugin),
            f"{plugin.manager_name}.swift": self._manager_file(plugin),
        }
        if plugin.protocol_name and plugin.providers:
            files[f"{plugin.protocol_name}.swift"] = self._protocol_file(plugin)
        for model in plugin.models:
            files[f"{model.name}.swift"] = self._model_file(model)
        for provider in plugin.providers:
            files[f"{provider.name}.swift"] = self._provider_file(provider, plugin)
        files["README.md"] = self._readme(plugin)
        return files

    @staticmethod
    def _has_debug_flag(plugin: ParsedPlugin) -> bool:
        return any(prop.name == DEBUG_FLAG for prop in plugin.configuration)

    def _plugin_file(self, plugin: ParsedPlugin) -> str:
        config_type = f"{plugin.name}Configuration"
        dependencies = ", ".join(string_literal(dependency) for dependency in plugin.dependencies)

        lines = _header(plugin.name)
        lines += [
            "import Foundation",
            "import CuppaCore",
            "",
            f"/// Plugin for integrating {plugin.description}",
            "@MainActor",
            f"public final class {plugin.name}: CuppaPlugin {{",
            f"    public let identifier = {string_literal(plugin.identifier)}",
            f"    public let version = {string_literal(plugin.version)}",
            f"    public let dependencies: [String] = [{dependencies}]",
            "",
            f"    private var config: {config_type}?",
            "",
            "    public init() {}",
            "",
            "    public func initialize(with config: PluginConfiguration) async throws {",
            f"        guard let pluginConfig = config as? {config_type} else {{",
            "            throw PluginError.invalidConfiguration(",
            f"                reason: \"Expected {config_type}, got \\(type(of: config))\"",
            "            )",
            "        }",
            "",
            "        self.config = pluginConfig",
            "",
        ]

        if plugin.protocol_name:
            lines += [
                f"        // Register provider with {plugin.manager_name}",
                f"        {plugin.manager_name}.shared.register(",
            ]
            if self._has_debug_flag(plugin):
                lines += ["            pluginConfig.provider,", f"            {DEBUG_FLAG}: pluginConfig.{DEBUG_FLAG}"]
            else:
                lines.append("            pluginConfig.provider")
            lines += ["        )", ""]

        if self._has_debug_flag(plugin):
            lines += [f"        if pluginConfig.{DEBUG_FLAG} {{", f'            print("🔌 {plugin.name} initialized")']
            for prop in plugin.configuration:
                if prop.name != DEBUG_FLAG:
                    lines.append(f'            print("   - {prop.name}: \\(pluginConfig.{prop.name})")')
            lines += ["        }", ""]

        lines += [
            f'        print("✅ {plugin.name} initialized")',
            "    }",
            "",
            "    nonisolated public func register(with container: ServiceContainer) {",
            f"        container.register({plugin.manager_name}.self) {{ _ in",
            f"            {plugin.manager_name}.shared",
            "        }",
            "    }",
            "",
            "    public func teardown() async {",
            "        config = nil",
            f'        print("🗑️ {plugin.name} torn down")',
            "    }",
            "}",
            "",
        ]
        return join_lines(lines)

    def _configuration_file(self, plugin: ParsedPlugin) -> str:
        lines = _header(f"{plugin.name}Configuration")
        lines += [
            "import Foundation",
            "import CuppaCore",
            "",
            f"/// Configuration for {plugin.name}.",
            f"public struct {plugin.name}Configuration: PluginConfiguration {{",
        ]
        for prop in plugin.configuration:
            lines += indent(doc_comment(prop.description))
            lines += [f"    public let {prop.name}: {swift_type(prop.type)}", ""]
        if plugin.protocol_name:
            lines += [
                f"    /// {plugin.protocol_name} implementation",
                f"    public let provider: {plugin.protocol_name}",
                "",
            ]

        lines += [
            "    /// Required settings dictionary for PluginConfiguration conformance",
            "    public var settings: [String: Any] {",
        ]
        if plugin.configuration:
            lines.append("        [")
            lines += [f"            {string_literal(prop.name)}: {prop.name}," for prop in plugin.configuration]
            lines.append("        ]")
        else:
            lines.append("        [:]")
        lines += ["    }", ""]

        params = [f"provider: {plugin.protocol_name}"] if plugin.protocol_name else []
        for prop in plugin.configuration:
            default = literal(prop.default_value, prop.type)
            params.append(f"{prop.name}: {swift_type(prop.type)}" + (f" = {default}" if default else ""))

        init = ["public init("]
        init += [f"    {param}," for param in params[:-1]] + [f"    {param}" for param in params[-1:]]
        init.append(") {")
        if plugin.protocol_name:
            init.append("    self.provider = provider")
        init += [f"    self.{prop.name} = {prop.name}" for prop in plugin.configuration]
        init.append("}")

        lines += indent(init)
        lines += ["}", ""]
        return join_lines(lines)

    def _manager_file(self, plugin: ParsedPlugin) -> str:
        manager = plugin.manager_name
        lines = _header(manager)
        lines += [
            "import Foundation",
            "",
            f"/// Manager for coordinating {plugin.description}",
            "@MainActor",
            f"public final class {manager}: ObservableObject {{",
            f"    public static let shared = {manager}()",
            "",
        ]
        if plugin.protocol_name:
            lines.append(f"    private var provider: {plugin.protocol_name}?")
        lines += [f"    private var {DEBUG_FLAG} = false", "", "    private init() {}", ""]

        if plugin.protocol_name:
            lines += [
                f"    /// Register a {plugin.protocol_name.lower()}",
                f"    public func register(_ provider: {plugin.protocol_name}, {DEBUG_FLAG}: Bool = false) {{",
                "        self.provider = provider",
                f"        self.{DEBUG_FLAG} = {DEBUG_FLAG}",
                "    }",
                "",
            ]

        for method in plugin.methods:
            lines += indent(self._manager_method(method, plugin))
            lines.append("")

        lines += ["}", ""]
        return join_lines(lines)

    def _manager_method(self, method: ParsedPluginMethod, plugin: ParsedPlugin) -> Lines:
        lines = doc_comment(method.description)
        lines.append(f"public {method_signature(method)} {{")
        if plugin.protocol_name:
            arguments = ", ".join(f"{param.name}: {param.name}" for param in method.parameters)
            call = (
                ("return " if method.returns_value else "")
                + ("try " if method.throws else "")
                + ("await " if method.is_async else "")
                + f"provider.{method.name}({arguments})"
            )
            lines += [
                "    guard let provider = provider else {",
                '        fatalError("No provider registered")',
                "    }",
                "",
                f"    {call}",
            ]
        else:
            lines.append("    // TODO: Implement this method")
            if method.returns_value:
                lines.append(f'    fatalError("{method.name} not implemented")')
        lines.append("}")
        return lines

    def _protocol_file(self, plugin: ParsedPlugin) -> str:
        lines = _header(plugin.protocol_name)
        lines += [
            "import Foundation",
            "",
            f"/// Protocol for {plugin.description.lower()} providers.",
            f"public protocol {plugin.protocol_name}: Sendable {{",
        ]
        for method in plugin.methods:
            lines += indent(doc_comment(method.description))
            lines += [f"    {method_signature(method)}", ""]
        lines += ["}", ""]
        return join_lines(lines)

    def _model_file(self, model: ParsedPluginModel) -> str:
        lines = _header(model.name)
        lines += ["import Foundation", ""]
        lines += doc_comment(model.description)
        lines.append(f"public struct {model.name}: Codable, Sendable {{")

        params = []
        for prop in model.properties:
            field_type = swift_type(prop.type) + ("" if prop.required else "?")
            lines += indent(doc_comment(prop.description))
            lines += [f"    public let {prop.name}: {field_type}", ""]
            params.append(f"{prop.name}: {field_type}" + ("" if prop.required else " = nil"))

        init = ["public init("]
        init += [f"    {param}," for param in params[:-1]] + [f"    {param}" for param in params[-1:]]
        init.append(") {")
        init += [f"    self.{prop.name} = {prop.name}" for prop in model.properties]
        init.append("}")

        lines += indent(init)
        lines += ["}", ""]
        return join_lines(lines)

    def _provider_file(self, provider: ParsedPluginProvider, plugin: ParsedPlugin) -> str:
        lines = _header(provider.name)
        lines += ["import Foundation", ""]
        lines += doc_comment(provider.description)
        lines += [
            f"public final class {provider.name}: {provider.protocol}, @unchecked Sendable {{",
            "    public init() {}",
            "",
        ]
        for method in plugin.methods:
            body = doc_comment(method.description)
            body += [f"public {method_signature(method)} {{", "    // TODO: Implement this method"]
            if method.returns_value:
                body.append(f'    fatalError("{method.name} not implemented")')
            body.append("}")
            lines += indent(body)
            lines.append("")
        lines += ["}", ""]
        return join_lines(lines)

    def _readme(self, plugin: ParsedPlugin) -> str:
        config_args = []
        if plugin.protocol_name:
            config_args.append(f"    provider: Your{plugin.protocol_name}()")
        if self._has_debug_flag(plugin):
            config_args.append(f"    {DEBUG_FLAG}: true")

        lines = [
            f"# {plugin.name}",
            "",
            plugin.description,
            "",
            "## Installation",
            "",
            "```swift",
            "// Add to your Package.swift dependencies",
            f'.package(url: "...", from: "{plugin.version}")',
            "```",
            "",
            "## Usage",
            "",
            "```swift",
            "import CuppaCore",
            f"import {plugin.name}",
            "",
            "// Configure the plugin",
            f"let config = {plugin.name}Configuration(",
        ]
        lines += [f"{arg}," for arg in config_args[:-1]] + config_args[-1:]
        lines += [
            ")",
            "",
            "// Register with PluginManager",
            f"let plugin = {plugin.name}()",
            "try await PluginManager.shared.register(plugin, config: config)",
            "```",
            "",
            "## License",
            "",
            f"Copyright © {plugin.author}",
            "",
        ]
        return join_lines(lines)
