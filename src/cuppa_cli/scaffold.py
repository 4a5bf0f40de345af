"""Project scaffolding for ``cuppa init``."""

import subprocess
from pathlib import Path

from cuppa_cli import typemap
from cuppa_cli.config import new_config, save_config
from cuppa_cli.errors import CuppaError
from cuppa_cli.files import ensure_dir, is_empty_dir, write_file
from cuppa_cli.reporter import Reporter

SPEC_DIRS = (
    "cuppa-specs/models",
    "cuppa-specs/api",
    "cuppa-specs/design",
    "cuppa-specs/architecture",
    "scripts",
)

GITIGNORE = """\
# Dependencies
node_modules/
.pnpm-store/

# Build outputs
dist/
build/
.next/

# Platform-specific
platforms/ios/.build/
platforms/ios/DerivedData/
platforms/android/build/
platforms/android/.gradle/

# IDE
.vscode/
.idea/
*.swp
*.swo

# OS
.DS_Store
Thumbs.db

# Environment
.env
.env.local
"""

_TREE_ENTRIES = {
    typemap.IOS: "ios/               # iOS project",
    typemap.ANDROID: "android/           # Android project",
    typemap.WEB: "web/               # Web project",
}


def project_directories(platforms: list[str]) -> list[str]:
    return list(SPEC_DIRS) + [f"platforms/{platform}" for platform in typemap.PLATFORMS if platform in platforms]


def create_directory_structure(root: Path, platforms: list[str]):
    for directory in project_directories(platforms):
        ensure_dir(root / directory)


def init_git(root: Path) -> bool:
    """Run ``git init`` in ``root``; return False when git is missing or fails."""
    try:
        subprocess.run(["git", "init"], cwd=root, check=True, capture_output=True)
    except (OSError, subprocess.CalledProcessError):
        return False
    return True


def readme_content(name: str, platforms: list[str], package_manager: str = "npm") -> str:
    prerequisites = ["- Node.js 18+", f"- {package_manager}"]
    if typemap.IOS in platforms:
        prerequisites.append("- Xcode 15+")
    if typemap.ANDROID in platforms:
        prerequisites.append("- Android Studio")

    tree = [platform for platform in typemap.PLATFORMS if platform in platforms]
    tree_lines = [
        f"│   {'└' if i == len(tree) - 1 else '├'}── {_TREE_ENTRIES[platform]}"
        for i, platform in enumerate(tree)
    ]

    lines = [
        f"# {name}",
        "",
        "Cuppa cross-platform application",
        "",
        "## Platforms",
        "",
        *[f"- {platform.upper()}" for platform in platforms],
        "",
        "## Getting Started",
        "",
        "### Prerequisites",
        "",
        *prerequisites,
        "",
        "### Development",
        "",
        "```bash",
        "# Generate models from specs",
        "cuppa generate model User --from cuppa-specs/models/User.schema.json",
        "",
        "# Generate API client",
        "cuppa generate api-client --from cuppa-specs/api/v1/openapi.yaml",
        "",
        "# Generate the theme from design tokens",
        "cuppa generate theme --from cuppa-specs/design/tokens.json",
        "```",
        "",
        "## Project Structure",
        "",
        "```",
        f"{name}/",
        "├── cuppa.config.json       # Cuppa configuration",
        "├── cuppa-specs/            # Specifications",
        "│   ├── models/            # Data models (JSON Schema)",
        "│   ├── api/               # API specs (OpenAPI)",
        "│   └── design/            # Design tokens",
        "├── platforms/",
        *tree_lines,
        "```",
        "",
        "## License",
        "",
        "MIT",
        "",
    ]
    return "\n".join(lines)


def scaffold_project(
    root: Path,
    name: str,
    platforms: list[str],
    reporter: Reporter,
    specs_repo: str | None = None,
    git: bool = True,
    package_manager: str = "npm",
) -> Path:
    """Create a new project at ``root``.

    Raises:
        CuppaError: ``root`` exists and is not an empty directory.
    """
    if root.exists() and not is_empty_dir(root):
        raise CuppaError(f"Directory {root.name} already exists and is not empty")

    with reporter.spinner("Creating project directory..."):
        ensure_dir(root)
    reporter.success("Project directory created")

    with reporter.spinner("Setting up project structure..."):
        create_directory_structure(root, platforms)
    reporter.success("Project structure created")

    with reporter.spinner("Creating cuppa.config.json..."):
        save_config(new_config(name, platforms, specs_repo), root)
    reporter.success("Configuration file created")

    if git:
        with reporter.spinner("Initializing git repository..."):
            initialized = init_git(root)
        if initialized:
            write_file(root / ".gitignore", GITIGNORE)
            reporter.success("Git repository initialized")
        else:
            reporter.warn("Failed to initialize git")

    with reporter.spinner("Creating README.md..."):
        write_file(root / "README.md", readme_content(name, platforms, package_manager))
    reporter.success("README created")

    return root
