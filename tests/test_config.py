import json

import pytest

from cuppa_cli.config import (
    CONFIG_FILE,
    component_output_dir,
    determine_platforms,
    load_config,
    new_config,
    output_dir,
    plugin_output_dir,
    save_config,
)
from cuppa_cli.errors import SpecError


def _write_config(directory, data):
    (directory / CONFIG_FILE).write_text(json.dumps(data))


class TestLoadConfig:
    def test_round_trip(self, tmp_path):
        save_config(new_config("my-app", ["ios", "web"], "https://example.com/specs.git"), tmp_path)
        config = load_config(tmp_path)
        assert config.name == "my-app"
        assert config.platforms == ["ios", "web"]
        assert config.specs.repository == "https://example.com/specs.git"
        assert config.source_for("model") == "cuppa-specs/models"
        assert config.source_for("api-client") == "cuppa-specs/api/v1/openapi.yaml"
        assert config.source_for("theme") == "cuppa-specs/design/tokens.json"

    def test_saved_file_omits_unset_values(self, tmp_path):
        save_config(new_config("my-app", ["ios"]), tmp_path)
        data = json.loads((tmp_path / CONFIG_FILE).read_text())
        assert "repository" not in data["specs"]
        assert data["generation"]["models"] == {"enabled": True, "source": "cuppa-specs/models"}

    def test_missing(self, tmp_path):
        with pytest.raises(SpecError, match="cuppa.config.json not found. Run `cuppa init` first."):
            load_config(tmp_path)

    def test_invalid_json(self, tmp_path):
        (tmp_path / CONFIG_FILE).write_text("{")
        with pytest.raises(SpecError, match="Could not parse cuppa.config.json"):
            load_config(tmp_path)

    def test_wrong_shape(self, tmp_path):
        _write_config(tmp_path, {"platforms": ["ios"]})
        with pytest.raises(SpecError, match="Invalid cuppa.config.json: name"):
            load_config(tmp_path)

    def test_unknown_keys_survive_a_save(self, tmp_path):
        _write_config(tmp_path, {"name": "app", "platforms": [], "custom": {"flag": True}})
        save_config(load_config(tmp_path), tmp_path)
        assert json.loads((tmp_path / CONFIG_FILE).read_text())["custom"] == {"flag": True}

    def test_no_generation_section(self, tmp_path):
        _write_config(tmp_path, {"name": "app"})
        config = load_config(tmp_path)
        assert config.source_for("model") is None
        assert config.platforms == []


class TestThemeName:
    def test_pascal_case(self):
        assert new_config("my-cuppa-app", []).theme_name == "MyCuppaApp"

    def test_unusable_name(self):
        assert new_config("---", []).theme_name == "AppTheme"


class TestPlatforms:
    def test_explicit_platform(self):
        assert determine_platforms("Android", new_config("app", ["ios"])) == ["android"]

    def test_all_uses_configured_platforms(self):
        config = new_config("app", ["ios", "web"])
        assert determine_platforms("all", config) == ["ios", "web"]
        assert determine_platforms(None, config) == ["ios", "web"]

    def test_configured_platforms_are_lower_cased(self):
        assert determine_platforms(None, new_config("app", ["iOS", "Web"])) == ["ios", "web"]


class TestOutputDirs:
    def test_default_layouts(self, tmp_path):
        assert output_dir("model", "ios", tmp_path) == tmp_path / "iOS" / "Sources" / "Models"
        assert output_dir("model", "android", tmp_path) == tmp_path / "Android" / "src" / "main" / "kotlin" / "models"
        assert output_dir("api-client", "web", tmp_path) == tmp_path / "Web" / "src" / "api"
        assert output_dir("theme", "ios", tmp_path) == tmp_path / "iOS" / "Sources" / "Theme"

    def test_unknown_platform_fallback(self, tmp_path):
        assert output_dir("model", "desktop", tmp_path) == tmp_path / "generated" / "desktop"
        assert output_dir("theme", "desktop", tmp_path) == tmp_path / "generated" / "desktop" / "theme"

    def test_requested_output_wins(self, tmp_path):
        config = new_config("app", ["ios"])
        assert output_dir("model", "ios", tmp_path, "out", config) == (tmp_path / "out").resolve()

    def test_configured_output(self, tmp_path):
        _write_config(tmp_path, {
            "name": "app",
            "generation": {"models": {"source": "specs", "output": {"ios": "App/Models"}}},
        })
        config = load_config(tmp_path)
        assert output_dir("model", "ios", tmp_path, None, config) == (tmp_path / "App" / "Models").resolve()
        assert output_dir("model", "web", tmp_path, None, config) == tmp_path / "Web" / "src" / "models"

    def test_component_dirs(self, tmp_path):
        assert component_output_dir("ios", "buttons", tmp_path) == (
            tmp_path / "iOS" / "Sources" / "CuppaUI" / "Generated" / "Buttons"
        )
        assert component_output_dir("ios", "buttons", tmp_path, "ui") == (tmp_path / "ui").resolve()

    def test_plugin_dirs(self, tmp_path):
        assert plugin_output_dir("ios", "AnalyticsPlugin", tmp_path) == tmp_path / "Plugins" / "iOS" / "AnalyticsPlugin"
