"""Normalized representations produced by the spec parsers.

Every parser (JSON Schema, OpenAPI, design tokens, component and plugin
specs) converts its input into these frozen models; generators only ever
read them.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from cuppa_cli import typemap
from cuppa_cli.errors import SpecError


class Parsed(BaseModel):
    """Base for all normalized representations."""

    model_config = ConfigDict(frozen=True)


# -- models (JSON Schema / OpenAPI components) --------------------------------


class ParsedProperty(Parsed):
    """One field of a model. ``type`` is the element type when ``is_array``."""

    name: str
    type: str
    description: str | None = None
    optional: bool
    is_array: bool = False
    format: str | None = None
    default_value: Any = None

    def target_type(self, platform: str) -> str:
        """Platform spelling of the field type, collection included, optionality excluded."""
        return typemap.schema_field_type(self.type, platform, is_array=self.is_array, fmt=self.format)


class ParsedModel(Parsed):
    name: str
    description: str | None = None
    properties: tuple[ParsedProperty, ...] = ()

    @model_validator(mode="after")
    def _unique_property_names(self):
        seen = set()
        for prop in self.properties:
            if prop.name in seen:
                raise SpecError(f"Duplicate property '{prop.name}' in model {self.name}")
            seen.add(prop.name)
        return self


# -- API (OpenAPI) ------------------------------------------------------------


class ParsedParameter(Parsed):
    name: str
    type: str
    description: str | None = None
    required: bool = False
    is_array: bool = False
    format: str | None = None


class ParsedRequestBody(Parsed):
    type: str
    description: str | None = None
    required: bool = False
    content_type: str = "application/json"
    is_array: bool = False


class ParsedResponse(Parsed):
    status_code: str
    type: str | None = None
    description: str = ""
    content_type: str | None = None
    is_array: bool = False

    @property
    def is_success(self) -> bool:
        return self.status_code.startswith("2")


class ParsedEndpoint(Parsed):
    operation_id: str
    method: str  # GET / POST / PUT / PATCH / DELETE
    path: str  # /users/{id}
    summary: str | None = None
    description: str | None = None
    path_params: tuple[ParsedParameter, ...] = ()
    query_params: tuple[ParsedParameter, ...] = ()
    header_params: tuple[ParsedParameter, ...] = ()
    request_body: ParsedRequestBody | None = None
    responses: tuple[ParsedResponse, ...] = ()
    tags: tuple[str, ...] = ()

    @property
    def success_response(self) -> ParsedResponse | None:
        """First 2xx response that carries a body type."""
        for response in self.responses:
            if response.is_success and response.type:
                return response
        return None


class ParsedAPI(Parsed):
    name: str
    version: str
    description: str | None = None
    base_url: str | None = None
    endpoints: tuple[ParsedEndpoint, ...] = ()
    models: tuple[ParsedModel, ...] = ()

    @model_validator(mode="after")
    def _unique_operation_ids(self):
        seen = set()
        for endpoint in self.endpoints:
            if endpoint.operation_id in seen:
                raise SpecError(f"Duplicate operationId '{endpoint.operation_id}'")
            seen.add(endpoint.operation_id)
        return self


# -- theme (design tokens) ----------------------------------------------------


class ValueToken(Parsed):
    """A token kept as written: colors and shadows."""

    name: str
    value: str
    description: str | None = None


class DimensionToken(Parsed):
    """A numeric token with its unit: sizes, spacing, radii, breakpoints."""

    name: str
    value: int | float
    unit: str = "px"
    description: str | None = None

    @property
    def css(self) -> str:
        return f"{self.value}{self.unit}"


class FontFamilyToken(Parsed):
    name: str
    value: str
    fallback: tuple[str, ...] = ()


class FontWeightToken(Parsed):
    name: str
    value: int | float | str


class ParsedTypography(Parsed):
    font_families: tuple[FontFamilyToken, ...] = ()
    font_sizes: tuple[DimensionToken, ...] = ()
    font_weights: tuple[FontWeightToken, ...] = ()
    line_heights: tuple[DimensionToken, ...] = ()
    letter_spacing: tuple[DimensionToken, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (
            self.font_families or self.font_sizes or self.font_weights
            or self.line_heights or self.letter_spacing
        )


class ParsedTheme(Parsed):
    name: str
    colors: tuple[ValueToken, ...] = ()
    typography: ParsedTypography = ParsedTypography()
    spacing: tuple[DimensionToken, ...] = ()
    border_radius: tuple[DimensionToken, ...] = ()
    shadows: tuple[ValueToken, ...] = ()
    breakpoints: tuple[DimensionToken, ...] = ()


# -- UI components ------------------------------------------------------------


class ParsedComponentProperty(Parsed):
    name: str
    type: str  # as declared, e.g. "Binding<String>"
    target_types: dict[str, str]
    required: bool = False
    default_value: Any = None
    description: str
    is_binding: bool = False

    @property
    def swift_type(self) -> str:
        return self.target_types[typemap.IOS]


class Padding(Parsed):
    top: int | float = 16
    bottom: int | float = 16
    leading: int | float = 16
    trailing: int | float = 16


class ParsedStyle(Parsed):
    background_color: str | None = None
    foreground_color: str | None = None
    border_color: str | None = None
    border_width: int | float | None = None
    corner_radius: int | float | None = None
    padding: Padding = Padding()
    font: str | None = None
    font_weight: str | None = None
    min_height: int | float | None = None
    max_width: str | None = None


class ParsedState(Parsed):
    name: str
    show_spinner: bool = False
    disable_interaction: bool = False
    opacity: float | None = None
    background_color: str | None = None
    foreground_color: str | None = None
    border_color: str | None = None
    scale: float | None = None


class ParsedActionParameter(Parsed):
    name: str
    type: str
    target_types: dict[str, str]
    label: str | None = None

    @property
    def swift_type(self) -> str:
        return self.target_types[typemap.IOS]


class ParsedAction(Parsed):
    name: str
    is_async: bool = False
    parameters: tuple[ParsedActionParameter, ...] = ()
    return_type: str = "Void"


class ParsedSlot(Parsed):
    name: str
    required: bool = False
    description: str


class ParsedComponent(Parsed):
    name: str
    category: str
    description: str
    properties: tuple[ParsedComponentProperty, ...] = ()
    style: ParsedStyle = ParsedStyle()
    states: dict[str, ParsedState] = {}
    actions: tuple[ParsedAction, ...] = ()
    slots: tuple[ParsedSlot, ...] = ()
    has_async_action: bool = False
    has_loading_state: bool = False

    def find_property(self, *names: str) -> ParsedComponentProperty | None:
        """First property whose name is one of ``names`` (declaration order wins)."""
        for prop in self.properties:
            if prop.name in names:
                return prop
        return None


# -- plugins ------------------------------------------------------------------


class ParsedConfigProperty(Parsed):
    name: str
    type: str
    description: str
    required: bool = False
    default_value: Any = None


class ParsedMethodParameter(Parsed):
    name: str
    type: str
    required: bool = True
    default_value: Any = None


class ParsedPluginMethod(Parsed):
    name: str
    description: str
    parameters: tuple[ParsedMethodParameter, ...] = ()
    return_type: str = "void"
    is_async: bool = False
    throws: bool = False

    @property
    def returns_value(self) -> bool:
        return self.return_type.lower() != "void"


class ParsedModelProperty(Parsed):
    name: str
    type: str
    description: str
    required: bool = False


class ParsedPluginModel(Parsed):
    name: str
    description: str
    properties: tuple[ParsedModelProperty, ...] = ()


class ParsedPluginProvider(Parsed):
    name: str
    description: str
    protocol: str


class ParsedPlugin(Parsed):
    name: str
    identifier: str
    version: str
    description: str
    author: str
    dependencies: tuple[str, ...] = ()
    configuration: tuple[ParsedConfigProperty, ...] = ()
    methods: tuple[ParsedPluginMethod, ...] = ()
    models: tuple[ParsedPluginModel, ...] = ()
    providers: tuple[ParsedPluginProvider, ...] = ()
    manager_name: str
    protocol_name: str | None = None


# -- input-side validation ----------------------------------------------------


class SpecModel(BaseModel):
    """Input-side model for custom spec formats: camelCase keys, unknown keys ignored."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


def validate_spec(model: type[SpecModel], document: dict, label: str) -> SpecModel:
    """Validate ``document`` against an input model, re-raising failures as one-line SpecErrors."""
    try:
        return model.model_validate(document)
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"]) or "<root>"
        raise SpecError(f"Invalid {label} spec: {location}: {first['msg']}") from e
