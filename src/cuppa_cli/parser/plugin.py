"""Plugin spec parser and the built-in plugin templates."""

from typing import Any

from .base import (
    ParsedConfigProperty,
    ParsedMethodParameter,
    ParsedModelProperty,
    ParsedPlugin,
    ParsedPluginMethod,
    ParsedPluginModel,
    ParsedPluginProvider,
    SpecModel,
    validate_spec,
)

PLUGIN_TEMPLATES = ("basic", "provider", "service")
DEFAULT_AUTHOR = "MyCuppa Team"
DEFAULT_VERSION = "1.0.0"

DEBUG_LOGGING_PROPERTY = {
    "name": "enableDebugLogging",
    "type": "boolean",
    "description": "Whether to enable debug logging",
    "required": False,
    "defaultValue": False,
}


class ConfigProperty(SpecModel):
    name: str
    type: str
    description: str | None = None
    required: bool = False
    default_value: Any = None


class Configuration(SpecModel):
    properties: list[ConfigProperty] = []


class MethodParameter(SpecModel):
    name: str
    type: str
    required: bool = True
    default_value: Any = None


class Method(SpecModel):
    name: str
    description: str | None = None
    parameters: list[MethodParameter] = []
    return_type: str = "void"
    is_async: bool = False
    throws: bool = False


class ModelProperty(SpecModel):
    name: str
    type: str
    description: str | None = None
    required: bool = False


class Model(SpecModel):
    name: str
    description: str | None = None
    properties: list[ModelProperty] = []


class Provider(SpecModel):
    name: str
    description: str | None = None
    protocol: str | None = None


class PluginSpec(SpecModel):
    name: str
    identifier: str | None = None
    version: str | None = None
    description: str | None = None
    author: str | None = None
    dependencies: list[str] = []
    configuration: Configuration | None = None
    methods: list[Method] = []
    models: list[Model] = []
    providers: list[Provider] = []


def parse_plugin_spec(document: dict) -> ParsedPlugin:
    """Parse a plugin spec document into a ParsedPlugin.

    ``protocol_name`` is only set when the spec declares at least one
    provider; generators skip the protocol scaffolding otherwise.
    """
    spec = validate_spec(PluginSpec, document, "plugin")
    name = spec.name
    protocol_name = f"{name}Provider" if spec.providers else None

    configuration = spec.configuration or Configuration(properties=[ConfigProperty(**DEBUG_LOGGING_PROPERTY)])

    return ParsedPlugin(
        name=f"{name}Plugin",
        identifier=spec.identifier or f"com.cuppa.{name.lower()}",
        version=spec.version or DEFAULT_VERSION,
        description=spec.description or f"Plugin for {name} functionality",
        author=spec.author or DEFAULT_AUTHOR,
        dependencies=spec.dependencies,
        configuration=[
            ParsedConfigProperty(
                name=prop.name,
                type=prop.type,
                description=prop.description or prop.name,
                required=prop.required,
                default_value=prop.default_value,
            )
            for prop in configuration.properties
        ],
        methods=[_parse_method(method) for method in spec.methods],
        models=[
            ParsedPluginModel(
                name=model.name,
                description=model.description or model.name,
                properties=[
                    ParsedModelProperty(
                        name=prop.name,
                        type=prop.type,
                        description=prop.description or prop.name,
                        required=prop.required,
                    )
                    for prop in model.properties
                ],
            )
            for model in spec.models
        ],
        providers=[
            ParsedPluginProvider(
                name=provider.name,
                description=provider.description or provider.name,
                protocol=provider.protocol or protocol_name,
            )
            for provider in spec.providers
        ],
        manager_name=f"{name}Manager",
        protocol_name=protocol_name,
    )


def _parse_method(method: Method) -> ParsedPluginMethod:
    return ParsedPluginMethod(
        name=method.name,
        description=method.description or method.name,
        parameters=[
            ParsedMethodParameter(
                name=param.name,
                type=param.type,
                required=param.required,
                default_value=param.default_value,
            )
            for param in method.parameters
        ],
        return_type=method.return_type,
        is_async=method.is_async,
        throws=method.throws,
    )


def plugin_template(name: str, template: str = "basic") -> dict:
    """Build a plugin spec document from one of the built-in templates.

    Unknown template names fall back to ``basic``.
    """
    spec = {
        "name": name,
        "identifier": f"com.cuppa.{name.lower()}",
        "version": DEFAULT_VERSION,
        "description": f"{name} functionality",
        "author": DEFAULT_AUTHOR,
        "dependencies": [],
    }

    if template == "provider":
        spec["configuration"] = {"properties": [dict(DEBUG_LOGGING_PROPERTY)]}
        spec["methods"] = [
            {
                "name": "initialize",
                "description": "Initialize the service",
                "parameters": [],
                "returnType": "void",
                "isAsync": True,
                "throws": True,
            },
            {
                "name": "performAction",
                "description": "Perform the main action",
                "parameters": [{"name": "input", "type": "string", "required": True}],
                "returnType": "string",
                "isAsync": True,
                "throws": True,
            },
        ]
        spec["providers"] = [
            {"name": f"Console{name}Provider", "description": f"Console-based {name} provider for testing"},
        ]
    elif template == "service":
        spec["methods"] = [
            {
                "name": "start",
                "description": "Start the service",
                "parameters": [],
                "returnType": "void",
                "isAsync": True,
                "throws": False,
            },
            {
                "name": "stop",
                "description": "Stop the service",
                "parameters": [],
                "returnType": "void",
                "isAsync": True,
                "throws": False,
            },
        ]

    return spec
