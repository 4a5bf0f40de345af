"""UI component spec parser.

Validates a component spec document and normalizes it into a
ParsedComponent: defaults filled in, padding expanded to four sides, types
translated for every platform, and the async/loading flags derived once.
"""

from typing import Any, Literal

from pydantic import Field

from cuppa_cli import typemap

from .base import (
    Padding,
    ParsedAction,
    ParsedActionParameter,
    ParsedComponent,
    ParsedComponentProperty,
    ParsedSlot,
    ParsedState,
    ParsedStyle,
    SpecModel,
    validate_spec,
)

DEFAULT_PADDING = 16
LOADING_STATE = "loading"


class ComponentProperty(SpecModel):
    name: str
    type: str
    required: bool = False
    default_value: Any = None
    description: str | None = None


class PaddingSpec(SpecModel):
    top: int | float | None = None
    bottom: int | float | None = None
    leading: int | float | None = None
    trailing: int | float | None = None


class ComponentStyle(SpecModel):
    background_color: str | None = None
    foreground_color: str | None = None
    border_color: str | None = None
    border_width: int | float | None = None
    corner_radius: int | float | None = None
    padding: int | float | PaddingSpec | None = None
    font: str | None = None
    font_weight: str | None = None
    min_height: int | float | None = None
    max_width: str | None = None


class ComponentState(SpecModel):
    show_spinner: bool = False
    disable_interaction: bool = False
    opacity: int | float | None = None
    background_color: str | None = None
    foreground_color: str | None = None
    border_color: str | None = None
    scale: int | float | None = None


class ActionParameter(SpecModel):
    name: str
    type: str
    label: str | None = None


class ComponentAction(SpecModel):
    name: str
    type: Literal["sync", "async"] = "sync"
    parameters: list[ActionParameter] = []
    return_type: str | None = None


class ComponentSlot(SpecModel):
    name: str
    required: bool = False
    description: str | None = None


class ComponentSpec(SpecModel):
    component: str
    category: str = "components"
    description: str | None = None
    properties: list[ComponentProperty] = []
    style: ComponentStyle | None = None
    states: dict[str, ComponentState] = Field(default_factory=dict)
    actions: list[ComponentAction] = []
    slots: list[ComponentSlot] = []


def target_types(type_name: str) -> dict[str, str]:
    return {platform: typemap.component_type(type_name, platform) for platform in typemap.PLATFORMS}


def parse_component_spec(document: dict) -> ParsedComponent:
    """Parse a component spec document into a ParsedComponent."""
    spec = validate_spec(ComponentSpec, document, "component")

    actions = [_parse_action(action) for action in spec.actions]
    return ParsedComponent(
        name=spec.component,
        category=spec.category,
        description=spec.description or spec.component,
        properties=[_parse_property(prop) for prop in spec.properties],
        style=_parse_style(spec.style),
        states={name: _parse_state(name, state) for name, state in spec.states.items()},
        actions=actions,
        slots=[
            ParsedSlot(name=slot.name, required=slot.required, description=slot.description or slot.name)
            for slot in spec.slots
        ],
        has_async_action=any(action.is_async for action in actions),
        has_loading_state=LOADING_STATE in spec.states,
    )


def _parse_property(prop: ComponentProperty) -> ParsedComponentProperty:
    return ParsedComponentProperty(
        name=prop.name,
        type=prop.type,
        target_types=target_types(prop.type),
        required=prop.required,
        default_value=prop.default_value,
        description=prop.description or prop.name,
        is_binding=typemap.unwrap_binding(prop.type) is not None,
    )


def _parse_style(style: ComponentStyle | None) -> ParsedStyle:
    if style is None:
        return ParsedStyle()

    if isinstance(style.padding, PaddingSpec):
        padding = Padding(**{
            side: DEFAULT_PADDING if value is None else value
            for side, value in style.padding.model_dump().items()
        })
    elif style.padding is not None:
        padding = Padding(top=style.padding, bottom=style.padding, leading=style.padding, trailing=style.padding)
    else:
        padding = Padding()

    return ParsedStyle(
        background_color=style.background_color,
        foreground_color=style.foreground_color,
        border_color=style.border_color,
        border_width=style.border_width,
        corner_radius=style.corner_radius,
        padding=padding,
        font=style.font,
        font_weight=style.font_weight,
        min_height=style.min_height,
        max_width=style.max_width,
    )


def _parse_state(name: str, state: ComponentState) -> ParsedState:
    return ParsedState(name=name, **state.model_dump())


def _parse_action(action: ComponentAction) -> ParsedAction:
    return ParsedAction(
        name=action.name,
        is_async=action.type == "async",
        parameters=[
            ParsedActionParameter(name=p.name, type=p.type, target_types=target_types(p.type), label=p.label)
            for p in action.parameters
        ],
        return_type=action.return_type or "Void",
    )


def basic_component_spec(name: str, category: str = "components") -> dict:
    """Spec for a button-like component, used when no spec file is given."""
    return {
        "component": name,
        "category": category,
        "description": f"{name} component",
        "properties": [
            {"name": "title", "type": "String", "required": True, "description": "Button text"},
            {
                "name": "isLoading",
                "type": "Bool",
                "required": False,
                "defaultValue": False,
                "description": "Loading state",
            },
        ],
        "style": {
            "backgroundColor": "blue",
            "foregroundColor": "white",
            "cornerRadius": 12,
            "padding": 16,
            "font": "body",
            "fontWeight": "semibold",
            "maxWidth": "infinity",
            "minHeight": 44,
        },
        "states": {
            "loading": {"showSpinner": True, "disableInteraction": True},
        },
        "actions": [
            {"name": "action", "type": "async", "parameters": []},
        ],
    }
