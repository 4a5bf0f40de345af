"""Project configuration (``cuppa.config.json``) and output-path resolution."""

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError

from cuppa_cli import typemap
from cuppa_cli.errors import SpecError
from cuppa_cli.files import read_json, write_json
from cuppa_cli.naming import capitalize, sanitize_type_name, to_pascal_case

CONFIG_FILE = "cuppa.config.json"
DEFAULT_SPECS_DIR = "./cuppa-specs"

# generate subcommand -> key under "generation"
GENERATION_KEYS = {
    "model": "models",
    "api-client": "api",
    "theme": "theme",
}

DEFAULT_SOURCES = {
    "models": "cuppa-specs/models",
    "api": "cuppa-specs/api/v1/openapi.yaml",
    "theme": "cuppa-specs/design/tokens.json",
}

OUTPUT_DIRS = {
    "model": {
        typemap.IOS: ("iOS", "Sources", "Models"),
        typemap.ANDROID: ("Android", "src", "main", "kotlin", "models"),
        typemap.WEB: ("Web", "src", "models"),
    },
    "api-client": {
        typemap.IOS: ("iOS", "Sources", "API"),
        typemap.ANDROID: ("Android", "src", "main", "kotlin", "api"),
        typemap.WEB: ("Web", "src", "api"),
    },
    "theme": {
        typemap.IOS: ("iOS", "Sources", "Theme"),
        typemap.ANDROID: ("Android", "src", "main", "kotlin", "theme"),
        typemap.WEB: ("Web", "src", "theme"),
    },
}

# Fallback subdirectory under generated/<platform>/ for platforms without a layout.
_GENERATED_SUBDIRS = {"model": None, "api-client": "api", "theme": "theme"}


class _ConfigModel(BaseModel):
    model_config = ConfigDict(extra="allow")


class GenerationConfig(_ConfigModel):
    enabled: bool = True
    source: str | None = None
    output: dict[str, str] | None = None


class GenerationTargets(_ConfigModel):
    models: GenerationConfig | None = None
    api: GenerationConfig | None = None
    theme: GenerationConfig | None = None


class PluginConfig(_ConfigModel):
    name: str
    version: str
    config: dict | None = None


class SpecsConfig(_ConfigModel):
    repository: str | None = None
    branch: str | None = None
    local: str | None = None


class CuppaConfig(_ConfigModel):
    name: str
    version: str = "1.0.0"
    platforms: list[str] = []
    specs: SpecsConfig | None = None
    generation: GenerationTargets | None = None
    plugins: list[PluginConfig] = []

    def generation_for(self, kind: str) -> GenerationConfig | None:
        if self.generation is None:
            return None
        return getattr(self.generation, GENERATION_KEYS[kind])

    def source_for(self, kind: str) -> str | None:
        generation = self.generation_for(kind)
        return generation.source if generation else None

    @property
    def theme_name(self) -> str:
        """Project name as a type name (``my-app`` -> ``MyApp``), ``AppTheme`` when unusable."""
        return sanitize_type_name(to_pascal_case(self.name)) or "AppTheme"


def new_config(name: str, platforms: list[str], specs_repo: str | None = None) -> CuppaConfig:
    """The manifest written by ``cuppa init``."""
    return CuppaConfig(
        name=name,
        version="1.0.0",
        platforms=platforms,
        specs=SpecsConfig(local=DEFAULT_SPECS_DIR, repository=specs_repo),
        generation=GenerationTargets(**{
            key: GenerationConfig(enabled=True, source=source) for key, source in DEFAULT_SOURCES.items()
        }),
        plugins=[],
    )


def load_config(directory: Path) -> CuppaConfig:
    """Load ``cuppa.config.json`` from ``directory``.

    Raises:
        SpecError: The file is missing, is not valid JSON, or has the wrong shape.
    """
    path = directory / CONFIG_FILE
    if not path.exists():
        raise SpecError(f"{CONFIG_FILE} not found. Run `cuppa init` first.")
    try:
        return CuppaConfig.model_validate(read_json(path))
    except json.JSONDecodeError as e:
        raise SpecError(f"Could not parse {CONFIG_FILE}: {e.msg} (line {e.lineno})") from e
    except ValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"]) or "<root>"
        raise SpecError(f"Invalid {CONFIG_FILE}: {location}: {first['msg']}") from e


def save_config(config: CuppaConfig, directory: Path) -> Path:
    return write_json(directory / CONFIG_FILE, config.model_dump(exclude_none=True))


def determine_platforms(requested: str | None, config: CuppaConfig) -> list[str]:
    """``--platform`` value to a platform list; ``all`` or nothing means the configured platforms."""
    if requested and requested.lower() != "all":
        return [requested.lower()]
    return [platform.lower() for platform in config.platforms]


def output_dir(
    kind: str,
    platform: str,
    base: Path,
    requested: str | None = None,
    config: CuppaConfig | None = None,
) -> Path:
    """Where a generated file goes: ``--output``, then the config's per-platform output, then the default layout."""
    if requested:
        return (base / requested).resolve()

    generation = config.generation_for(kind) if config else None
    if generation and generation.output and platform in generation.output:
        return (base / generation.output[platform]).resolve()

    layout = OUTPUT_DIRS[kind].get(platform)
    if layout:
        return base.joinpath(*layout)
    subdir = _GENERATED_SUBDIRS[kind]
    return base / "generated" / platform / subdir if subdir else base / "generated" / platform


def component_output_dir(platform: str, category: str, base: Path, requested: str | None = None) -> Path:
    if requested:
        return (base / requested).resolve()
    if platform == typemap.IOS:
        return base / "iOS" / "Sources" / "CuppaUI" / "Generated" / capitalize(category)
    if platform == typemap.ANDROID:
        return base / "Android" / "src" / "main" / "kotlin" / "ui" / "components" / category
    if platform == typemap.WEB:
        return base / "Web" / "src" / "components" / category
    return base / "generated" / "components" / category


def plugin_output_dir(platform: str, plugin_name: str, base: Path, requested: str | None = None) -> Path:
    if requested:
        return (base / requested).resolve()
    folder = "iOS" if platform == typemap.IOS else platform
    return base / "Plugins" / folder / plugin_name
