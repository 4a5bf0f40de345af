import json
from pathlib import Path

import pytest

from cuppa_cli.errors import SpecError
from cuppa_cli.parser.component import basic_component_spec, parse_component_spec

FIXTURES = Path(__file__).parent / "fixtures"


def _load(name: str) -> dict:
    return json.loads((FIXTURES / name).read_text())


class TestComponentParser:
    def test_async_button(self):
        component = parse_component_spec(_load("AsyncButton.json"))
        assert component.name == "AsyncButton"
        assert component.category == "buttons"
        assert component.has_async_action is True
        assert component.has_loading_state is True
        assert component.actions[0].is_async is True
        assert component.actions[0].return_type == "Void"

    def test_property_target_types(self):
        component = parse_component_spec(_load("AsyncButton.json"))
        icon = component.find_property("icon")
        assert icon.target_types == {"ios": "String?", "android": "String?", "web": "string | undefined"}
        assert component.find_property("isLoading").default_value is False
        assert component.find_property("title").required is True

    def test_missing_description_falls_back_to_name(self):
        component = parse_component_spec(_load("AsyncButton.json"))
        assert component.find_property("icon").description == "icon"

    def test_partial_padding_is_filled(self):
        padding = parse_component_spec(_load("AsyncButton.json")).style.padding
        assert (padding.top, padding.bottom, padding.leading, padding.trailing) == (12, 16, 20, 16)

    def test_uniform_padding(self):
        doc = {"component": "Card", "style": {"padding": 8}}
        padding = parse_component_spec(doc).style.padding
        assert (padding.top, padding.bottom, padding.leading, padding.trailing) == (8, 8, 8, 8)

    def test_loading_state(self):
        loading = parse_component_spec(_load("AsyncButton.json")).states["loading"]
        assert loading.show_spinner is True
        assert loading.disable_interaction is True
        assert loading.opacity == 0.5

    def test_bindings_and_parameters(self):
        component = parse_component_spec(_load("TextInput.json"))
        text = component.find_property("text")
        assert text.is_binding is True
        assert text.swift_type == "String"
        assert component.find_property("options").swift_type == "[String]?"
        assert component.actions[0].parameters[0].swift_type == "String"
        assert component.has_async_action is False
        assert component.has_loading_state is False

    def test_defaults(self):
        component = parse_component_spec({"component": "Badge"})
        assert component.category == "components"
        assert component.description == "Badge"
        assert component.properties == ()
        assert component.style.padding.top == 16

    def test_find_property_prefers_declaration_order(self):
        component = parse_component_spec({
            "component": "Label",
            "properties": [{"name": "text", "type": "String"}, {"name": "title", "type": "String"}],
        })
        assert component.find_property("title", "text").name == "text"

    def test_missing_component_name(self):
        with pytest.raises(SpecError, match="Invalid component spec: component"):
            parse_component_spec({"properties": []})

    def test_unknown_action_type(self):
        with pytest.raises(SpecError, match="actions"):
            parse_component_spec({"component": "X", "actions": [{"name": "tap", "type": "later"}]})

    def test_basic_spec(self):
        component = parse_component_spec(basic_component_spec("PrimaryButton", "buttons"))
        assert component.name == "PrimaryButton"
        assert component.category == "buttons"
        assert component.has_async_action is True
        assert component.style.max_width == "infinity"
