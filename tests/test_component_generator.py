import json
from pathlib import Path

from cuppa_cli.generator.component import SwiftComponentGenerator, closure_type, default_literal
from cuppa_cli.parser.base import ParsedAction
from cuppa_cli.parser.component import parse_component_spec

FIXTURES = Path(__file__).parent / "fixtures"


def _component(name: str):
    return parse_component_spec(json.loads((FIXTURES / name).read_text()))


def _generate(name: str) -> str:
    return SwiftComponentGenerator().generate(_component(name), name)


class TestAsyncComponent:
    def test_two_initializers(self):
        code = _generate("AsyncButton.json")
        assert code.count("public init(") == 2
        assert "/// Async action initializer" in code
        assert "/// Synchronous action initializer" in code

    def test_action_closures(self):
        code = _generate("AsyncButton.json")
        assert "    let action: () async -> Void" in code
        assert "        action: @escaping () async -> Void\n" in code
        assert "        action: @escaping () -> Void\n" in code
        assert "        self.action = {\n            Task { action() }\n        }" in code

    def test_state_and_helper(self):
        code = _generate("AsyncButton.json")
        assert "@State private var isPerformingAction = false" in code
        assert "private func handleAction() {" in code
        assert "        await action()" in code
        assert "        handleAction()" in code

    def test_loading_state(self):
        code = _generate("AsyncButton.json")
        assert "ProgressView()" in code
        assert ".disabled(isLoading || isPerformingAction)" in code
        assert ".opacity((isLoading || isPerformingAction) ? 0.5 : 1.0)" in code

    def test_initializer_defaults(self):
        code = _generate("AsyncButton.json")
        assert "        title: String,\n" in code
        assert "        isLoading: Bool = false,\n" in code
        assert "        icon: String? = nil,\n" in code

    def test_styling(self):
        code = _generate("AsyncButton.json")
        assert ".font(.body)" in code
        assert ".fontWeight(.semibold)" in code
        assert ".foregroundStyle(.white)" in code
        assert ".padding(.vertical, 12)" in code
        assert ".padding(.horizontal, 20)" in code
        assert ".background(.blue)" in code
        assert ".clipShape(RoundedRectangle(cornerRadius: 12))" in code
        assert ".frame(minHeight: 44)" in code

    def test_header(self):
        code = _generate("AsyncButton.json")
        assert "//  AsyncButton.swift" in code
        assert "⚠️ DO NOT EDIT" in code
        assert "//  Source: AsyncButton.json" in code
        assert "import SwiftUI\nimport CuppaCore\n" in code

    def test_section_order(self):
        code = _generate("AsyncButton.json")
        positions = [
            code.index("// MARK: - Properties"),
            code.index("@State private var isPerformingAction"),
            code.index("    let action:"),
            code.index("// MARK: - Initialization"),
            code.index("// MARK: - Body"),
            code.index("// MARK: - Actions"),
        ]
        assert positions == sorted(positions)

    def test_preview(self):
        code = _generate("AsyncButton.json")
        assert '#Preview("AsyncButton") {' in code
        assert 'AsyncButton(title: "AsyncButton", icon: "star.fill") {' in code


class TestSyncComponent:
    def test_single_initializer(self):
        code = _generate("TextInput.json")
        assert code.count("public init(") == 1
        assert "isPerformingAction" not in code
        assert "handleAction" not in code

    def test_bindings(self):
        code = _generate("TextInput.json")
        assert "    @Binding var text: String" in code
        assert "        text: Binding<String>,\n" in code
        assert "        _text = text" in code
        assert "        options: [String]? = nil,\n" in code

    def test_action_with_parameter(self):
        code = _generate("TextInput.json")
        assert "    let onSubmit: (String) -> Void" in code
        assert "onSubmit: @escaping (String) -> Void" in code

    def test_forms_import_core(self):
        assert "import CuppaCore" in _generate("TextInput.json")

    def test_preview_state(self):
        code = _generate("TextInput.json")
        assert '    @Previewable @State var previewText = ""' in code
        assert "    @Previewable @State var previewBool = false" in code
        assert "TextInput(text: $previewText, isSecure: $previewBool, options: nil)" not in code
        assert "TextInput(text: $previewText, isSecure: $previewBool)" in code

    def test_no_loading_modifiers(self):
        code = _generate("TextInput.json")
        assert ".disabled(" not in code
        assert "ProgressView" not in code


class TestLoadingWithoutFlagProperty:
    def test_busy_condition_uses_action_state_only(self):
        component = parse_component_spec({
            "component": "SaveButton",
            "properties": [{"name": "title", "type": "String", "required": True}],
            "states": {"loading": {"showSpinner": True}},
            "actions": [{"name": "save", "type": "async"}],
        })
        code = SwiftComponentGenerator().generate(component, "inline")
        assert ".opacity((isPerformingAction) ? 0.6 : 1.0)" in code
        assert ".disabled(" not in code


class TestHelpers:
    def test_default_literals(self):
        component = parse_component_spec({
            "component": "Tag",
            "properties": [
                {"name": "tint", "type": "Color", "defaultValue": "blue"},
                {"name": "label", "type": "String", "defaultValue": "Hi"},
                {"name": "count", "type": "Int", "defaultValue": 3},
                {"name": "note", "type": "String?"},
                {"name": "title", "type": "String", "required": True},
            ],
        })
        assert [default_literal(p) for p in component.properties] == [".blue", '"Hi"', "3", "nil", None]

    def test_closure_type(self):
        action = ParsedAction(name="load", is_async=True, return_type="Bool")
        assert closure_type(action) == "() async -> Bool"
        assert closure_type(action, is_async=False) == "() -> Bool"

    def test_file_name(self):
        assert SwiftComponentGenerator().file_name(_component("AsyncButton.json")) == "AsyncButton.swift"
