import json
import subprocess
from unittest.mock import patch

import pytest

from cuppa_cli.errors import CuppaError
from cuppa_cli.reporter import Reporter
from cuppa_cli.scaffold import init_git, project_directories, readme_content, scaffold_project


class TestProjectLayout:
    def test_platform_dirs_follow_canonical_order(self):
        dirs = project_directories(["web", "ios"])
        assert dirs[:2] == ["cuppa-specs/models", "cuppa-specs/api"]
        assert dirs[-2:] == ["platforms/ios", "platforms/web"]

    def test_readme(self):
        readme = readme_content("demo", ["ios", "web"], "pnpm")
        assert readme.startswith("# demo\n")
        assert "- pnpm" in readme
        assert "- Xcode 15+" in readme
        assert "Android Studio" not in readme
        assert "│   ├── ios/" in readme
        assert "│   └── web/" in readme


class TestInitGit:
    @patch("cuppa_cli.scaffold.subprocess.run")
    def test_success(self, mock_run, tmp_path):
        assert init_git(tmp_path) is True
        mock_run.assert_called_once_with(["git", "init"], cwd=tmp_path, check=True, capture_output=True)

    @patch("cuppa_cli.scaffold.subprocess.run", side_effect=FileNotFoundError("git"))
    def test_git_missing(self, mock_run, tmp_path):
        assert init_git(tmp_path) is False

    @patch("cuppa_cli.scaffold.subprocess.run", side_effect=subprocess.CalledProcessError(128, ["git", "init"]))
    def test_git_fails(self, mock_run, tmp_path):
        assert init_git(tmp_path) is False


class TestScaffoldProject:
    @patch("cuppa_cli.scaffold.subprocess.run")
    def test_creates_project(self, mock_run, tmp_path):
        root = scaffold_project(tmp_path / "demo", "demo", ["ios", "android"], Reporter())

        assert (root / "cuppa-specs" / "design").is_dir()
        assert (root / "platforms" / "android").is_dir()
        assert not (root / "platforms" / "web").exists()
        assert (root / ".gitignore").read_text().startswith("# Dependencies")
        assert (root / "README.md").exists()

        config = json.loads((root / "cuppa.config.json").read_text())
        assert config["name"] == "demo"
        assert config["platforms"] == ["ios", "android"]
        assert config["specs"]["local"] == "./cuppa-specs"

    @patch("cuppa_cli.scaffold.subprocess.run", side_effect=FileNotFoundError("git"))
    def test_git_failure_is_a_warning(self, mock_run, tmp_path, capsys):
        root = scaffold_project(tmp_path / "demo", "demo", ["web"], Reporter())
        assert not (root / ".gitignore").exists()
        assert (root / "cuppa.config.json").exists()
        assert "Failed to initialize git" in capsys.readouterr().out

    @patch("cuppa_cli.scaffold.subprocess.run")
    def test_without_git(self, mock_run, tmp_path):
        scaffold_project(tmp_path / "demo", "demo", ["web"], Reporter(), git=False)
        mock_run.assert_not_called()

    def test_non_empty_directory(self, tmp_path):
        root = tmp_path / "demo"
        root.mkdir()
        (root / "keep.txt").write_text("x")
        with pytest.raises(CuppaError, match="Directory demo already exists and is not empty"):
            scaffold_project(root, "demo", ["ios"], Reporter(), git=False)

    def test_empty_directory_is_reused(self, tmp_path):
        root = tmp_path / "demo"
        root.mkdir()
        scaffold_project(root, "demo", ["ios"], Reporter(), git=False)
        assert (root / "cuppa.config.json").exists()
