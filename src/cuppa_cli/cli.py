"""CLI entry point for cuppa."""

import functools
import json
from pathlib import Path

import click
import yaml

from cuppa_cli import __version__, typemap
from cuppa_cli.config import (
    GENERATION_KEYS,
    CuppaConfig,
    component_output_dir,
    determine_platforms,
    load_config,
    output_dir,
    plugin_output_dir,
)
from cuppa_cli.errors import CuppaError, SpecError
from cuppa_cli.files import file_exists, write_file
from cuppa_cli.generator.registry import get_generator, registry
from cuppa_cli.parser.component import basic_component_spec, parse_component_spec
from cuppa_cli.parser.json_schema import parse_json_schema
from cuppa_cli.parser.loader import find_schema_files, load_document
from cuppa_cli.parser.openapi import parse_openapi
from cuppa_cli.parser.plugin import PLUGIN_TEMPLATES, parse_plugin_spec, plugin_template
from cuppa_cli.parser.tokens import parse_design_tokens
from cuppa_cli.reporter import Reporter
from cuppa_cli.scaffold import scaffold_project

# Dry runs of API clients and themes only show the beginning of the file.
PREVIEW_CHARS = 500

COMMAND_ERRORS = (CuppaError, OSError, yaml.YAMLError, json.JSONDecodeError)


def reports_errors(prefix: str | None = None):
    """Turn expected failures into a single ``✗`` line and exit status 1."""

    def decorator(f):
        @functools.wraps(f)
        def wrapper(reporter: Reporter, *args, **kwargs):
            try:
                return f(reporter, *args, **kwargs)
            except COMMAND_ERRORS as e:
                reporter.error(f"{prefix}: {e}" if prefix else str(e))
                raise SystemExit(1)

        return wrapper

    return decorator


def _supported_platforms(kind: str, platforms: list[str], reporter: Reporter) -> list[str]:
    """Drop platforms without a generator for ``kind``, warning for each one."""
    if not platforms:
        raise SpecError("No target platforms. Pass --platform or list platforms in cuppa.config.json")

    supported = []
    for platform in platforms:
        if registry.supports(kind, platform):
            supported.append(platform)
        else:
            reporter.warn(f"Skipping unsupported platform: {platform}")
    if not supported:
        raise CuppaError(f"No {kind} generator for platform(s): {', '.join(platforms)}")
    return supported


def _resolve_source(kind: str, from_path: str | None, config: CuppaConfig, cwd: Path) -> Path:
    if from_path:
        return cwd / from_path
    configured = config.source_for(kind)
    if configured:
        return cwd / configured
    raise SpecError(
        f"No source file specified. Use --from option or configure "
        f"generation.{GENERATION_KEYS[kind]}.source in cuppa.config.json"
    )


def _emit(
    kind: str,
    representation,
    source_file: Path,
    platforms: list[str],
    options: dict,
    config: CuppaConfig,
    reporter: Reporter,
    preview_chars: int | None = None,
) -> int:
    """Generate ``representation`` for each platform and write (or preview) it; return files written."""
    written = 0
    for platform in platforms:
        generator = get_generator(kind, platform)
        code = generator.generate(representation, source_file.name)
        file_name = generator.file_name(representation)
        target = output_dir(kind, platform, Path.cwd(), options["output"], config) / file_name

        if file_exists(target) and not options["overwrite"]:
            reporter.warn(f"  {platform}: {file_name} already exists (use --overwrite to replace)")
            continue

        if options["dry_run"]:
            reporter.info(f"  {platform}: Would write {file_name}")
            preview = code if preview_chars is None else f"{code[:preview_chars]}..."
            reporter.log(f"\n{preview}\n")
        else:
            write_file(target, code)
            reporter.success(f"  {platform}: {target}")
            written += 1
    return written


@click.group()
@click.version_option(__version__, prog_name="cuppa")
@click.pass_context
def main(ctx: click.Context):
    """CLI tool for scaffolding and managing Cuppa projects."""
    ctx.obj = Reporter()


# -- init ---------------------------------------------------------------------


@main.command()
@click.argument("project_name", required=False)
@click.option("-p", "--platforms", default=None, help="Platforms to support (ios,android,web).")
@click.option("-t", "--template", default="default", type=click.Choice(["default", "minimal"]), help="Template to use.")
@click.option("--specs-repo", default=None, help="Custom cuppa-specs repository URL.")
@click.option("--git/--no-git", default=True, help="Initialize a git repository.")
@click.option("--package-manager", default="npm", type=click.Choice(["npm", "yarn", "pnpm"]), help="Package manager.")
@click.pass_obj
@reports_errors()
def init(
    reporter: Reporter,
    project_name: str | None,
    platforms: str | None,
    template: str,
    specs_repo: str | None,
    git: bool,
    package_manager: str,
):
    """Initialize a new Cuppa project."""
    if not project_name:
        project_name = click.prompt("Project name", default="my-cuppa-app")
    if not platforms:
        platforms = click.prompt("Platforms (comma-separated)", default="ios,web")

    selected = [p.strip().lower() for p in platforms.split(",") if p.strip()]
    unknown = [p for p in selected if p not in typemap.PLATFORMS]
    if unknown or not selected:
        raise SpecError(f"Unknown platform(s): {', '.join(unknown) or platforms}. Choose from {', '.join(typemap.PLATFORMS)}")

    reporter.log()
    reporter.info(f"Creating Cuppa project: {project_name}")
    reporter.info(f"Platforms: {', '.join(selected)}")
    reporter.info(f"Template: {template}")
    reporter.log()

    scaffold_project(
        Path.cwd() / project_name,
        project_name,
        selected,
        reporter,
        specs_repo=specs_repo,
        git=git,
        package_manager=package_manager,
    )

    reporter.log()
    reporter.success(f"Successfully created {project_name}!")
    reporter.log()
    reporter.info("Next steps:")
    reporter.log(f"  cd {project_name}")
    reporter.log("  cuppa generate model User --from cuppa-specs/models/User.schema.json")
    reporter.log()


# -- generate -----------------------------------------------------------------


def generate_options(f):
    f = click.option("--dry-run", is_flag=True, help="Preview changes without writing.")(f)
    f = click.option("--overwrite", is_flag=True, help="Overwrite existing files.")(f)
    f = click.option("--output", default=None, help="Output directory.")(f)
    f = click.option("--platform", default=None, help="Target platform (ios, android, web, all).")(f)
    f = click.option("--from", "from_path", default=None, help="Source specification file.")(f)
    return f


@main.group()
def generate():
    """Generate code from specifications."""


@generate.command("model")
@click.argument("name", required=False)
@generate_options
@click.pass_obj
@reports_errors("Generation failed")
def generate_model(reporter: Reporter, name: str | None, from_path: str | None, **options):
    """Generate data models from JSON Schema files."""
    cwd = Path.cwd()
    config = load_config(cwd)
    source = _resolve_source("model", from_path, config, cwd)
    if not source.exists():
        raise SpecError(f"Specification file not found: {source}")

    schema_files = find_schema_files(source, name)
    if not schema_files:
        raise SpecError(f"No JSON schema files found in {source}")

    platforms = _supported_platforms("model", determine_platforms(options["platform"], config), reporter)

    written = 0
    with reporter.spinner("Generating models..."):
        for schema_file in schema_files:
            model = parse_json_schema(load_document(schema_file))
            reporter.log(f"\nGenerating {model.name}...")
            written += _emit("model", model, schema_file, platforms, options, config, reporter)

    if options["dry_run"]:
        reporter.success(f"Preview complete for {len(schema_files)} model(s)")
    else:
        reporter.success(f"Generated {written} file(s) from {len(schema_files)} model(s)")


@generate.command("api-client")
@generate_options
@click.pass_obj
@reports_errors("Generation failed")
def generate_api_client(reporter: Reporter, from_path: str | None, **options):
    """Generate API clients from an OpenAPI document (JSON or YAML)."""
    cwd = Path.cwd()
    config = load_config(cwd)
    source = _resolve_source("api-client", from_path, config, cwd)
    if not source.exists():
        raise SpecError(f"OpenAPI spec file not found: {source}")

    api = parse_openapi(load_document(source))
    platforms = _supported_platforms("api-client", determine_platforms(options["platform"], config), reporter)

    reporter.log(f"\nGenerating API client for {api.name} v{api.version}...")
    with reporter.spinner("Generating API client..."):
        written = _emit("api-client", api, source, platforms, options, config, reporter, PREVIEW_CHARS)

    if options["dry_run"]:
        reporter.success(f"Preview complete for {api.name} API client")
    else:
        reporter.success(f"Generated {written} API client file(s)")


@generate.command("theme")
@generate_options
@click.pass_obj
@reports_errors("Generation failed")
def generate_theme(reporter: Reporter, from_path: str | None, **options):
    """Generate theme constants from design tokens."""
    cwd = Path.cwd()
    config = load_config(cwd)
    source = _resolve_source("theme", from_path, config, cwd)
    if not source.exists():
        raise SpecError(f"Design tokens file not found: {source}")

    theme = parse_design_tokens(load_document(source), config.theme_name)
    platforms = _supported_platforms("theme", determine_platforms(options["platform"], config), reporter)

    reporter.log(f"\nGenerating theme {theme.name}...")
    with reporter.spinner("Generating theme..."):
        written = _emit("theme", theme, source, platforms, options, config, reporter, PREVIEW_CHARS)

    if options["dry_run"]:
        reporter.success(f"Preview complete for {theme.name} theme")
    else:
        reporter.success(f"Generated {written} theme file(s)")


# -- component / plugin -------------------------------------------------------


@main.command()
@click.argument("name", required=False)
@click.option("--from", "from_path", default=None, help="Component specification file (JSON).")
@click.option("--platform", default=typemap.IOS, help="Target platform (ios, android, web).")
@click.option("--output", default=None, help="Output directory.")
@click.option("--category", default=None, help="Component category (buttons, forms, lists, etc.).")
@click.pass_obj
@reports_errors("Component generation failed")
def component(
    reporter: Reporter,
    name: str | None,
    from_path: str | None,
    platform: str,
    output: str | None,
    category: str | None,
):
    """Generate a UI component from a specification."""
    cwd = Path.cwd()
    if from_path:
        source = cwd / from_path
        if not source.exists():
            raise SpecError(f"Component specification file not found: {source}")
        document = load_document(source)
        source_label = source.name
    elif name:
        document = basic_component_spec(name, category or "components")
        source_label = "inline"
    else:
        raise SpecError("Either provide a component name or use --from option")

    platform = platform.lower()
    parsed = parse_component_spec(document)
    generator = get_generator("component", platform)

    reporter.log(f"\nGenerating component: {parsed.name}")
    reporter.log(f"  Category: {parsed.category}")
    reporter.log(f"  Platform: {platform}")
    reporter.log()

    with reporter.spinner("Generating component..."):
        code = generator.generate(parsed, source_label)
        target = component_output_dir(platform, parsed.category, cwd, output) / generator.file_name(parsed)
        write_file(target, code)

    reporter.success(f"Component generated: {parsed.name}")
    reporter.log()
    reporter.success(f"File created: {target}")
    reporter.log()
    reporter.info("Next steps:")
    reporter.log("  1. Review the generated component")
    reporter.log("  2. Add it to your Xcode project or Package.swift")
    reporter.log("  3. Use it in your SwiftUI views")
    reporter.log()


@main.command()
@click.argument("name")
@click.option("--platform", default=typemap.IOS, help="Target platform (ios, android, web).")
@click.option("--output", default=None, help="Output directory.")
@click.option("--template", default="basic", type=click.Choice(PLUGIN_TEMPLATES), help="Plugin template type.")
@click.pass_obj
@reports_errors("Plugin generation failed")
def plugin(reporter: Reporter, name: str, platform: str, output: str | None, template: str):
    """Generate plugin scaffolding."""
    platform = platform.lower()
    parsed = parse_plugin_spec(plugin_template(name, template))
    generator = get_generator("plugin", platform)

    reporter.log(f"\nGenerating plugin: {parsed.name}")
    reporter.log(f"  Platform: {platform}")
    reporter.log(f"  Template: {template}")
    reporter.log()

    target_dir = plugin_output_dir(platform, parsed.name, Path.cwd(), output)
    with reporter.spinner(f"Generating {name} plugin..."):
        files = generator.generate_plugin(parsed)
        for file_name, content in files.items():
            write_file(target_dir / file_name, content)
            reporter.success(f"  {file_name}")

    reporter.success(f"Generated {len(files)} files for {parsed.name}")
    reporter.log()
    reporter.info(f"Plugin created at: {target_dir}")
    reporter.log()
    reporter.info("Next steps:")
    reporter.log("  1. Implement the TODO methods in the generated files")
    reporter.log("  2. Add tests for your plugin")
    reporter.log("  3. Register the plugin in your app")
    reporter.log()


# -- not yet implemented --------------------------------------------------------


@main.command()
@click.argument("project_name")
@click.option("-p", "--platforms", default=None, help="Platforms (ios,android,web).")
@click.option("-t", "--template", default="default", help="Template (default, minimal, full).")
@click.option("-f", "--features", default=None, help="Features to include (auth,analytics,theme).")
@click.option("--plugins", default=None, help="Plugins to install.")
@click.option("--api-spec", default=None, help="OpenAPI spec for API client generation.")
@click.option("--examples/--no-examples", default=True, help="Include example screens.")
@click.pass_obj
def create(reporter: Reporter, project_name: str, platforms: str | None, features: str | None, plugins: str | None, **_):
    """Create a new Cuppa project with full scaffolding."""
    reporter.warn("`cuppa create` is not yet implemented")
    reporter.info("Use `cuppa init` for now, then add features with `cuppa add`")
    reporter.log()
    reporter.info("Equivalent commands:")
    reporter.log(f"  cuppa init {project_name} --platforms {platforms or 'ios,web'}")
    if features:
        reporter.log(f"  cuppa add feature {features}")
    if plugins:
        reporter.log(f"  cuppa add plugin {plugins}")


@main.command()
@click.argument("item_type", metavar="TYPE")
@click.argument("name")
@click.option("--platform", default=None, help="Target platform.")
@click.option("--config", "config_json", default=None, help="Configuration JSON.")
@click.option("--version", "item_version", default=None, help="Specific version.")
@click.pass_obj
def add(reporter: Reporter, item_type: str, name: str, **_):
    """Add features, plugins, or modules."""
    reporter.warn(f"`cuppa add {item_type}` is not yet implemented")
    reporter.info("This feature will be available in a later release")


@main.command()
@click.argument("path", required=False)
@click.option("--type", "spec_type", default=None, help="Spec type (model, api, design, feature).")
@click.option("--schema", default=None, help="Custom JSON Schema.")
@click.option("--strict", is_flag=True, help="Enable strict validation.")
@click.option("--fix", is_flag=True, help="Auto-fix common issues.")
@click.pass_obj
def validate(reporter: Reporter, **_):
    """Validate specification files."""
    reporter.warn("`cuppa validate` is not yet implemented")
    reporter.info("This feature will be available in a later release")


if __name__ == "__main__":
    main()
