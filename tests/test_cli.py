"""Tests for Project Launcher CLI."""

import json
from functools import partial
from pathlib import Path

import pytest
from click.testing import CliRunner

from project_launcher.catalog_file import CatalogStore
from project_launcher.cli import cli
from project_launcher.launcher import launch, open_link
from project_launcher.models import Record


@pytest.fixture
def runner(home: Path) -> CliRunner:
    """Create a CLI test runner with an isolated home directory."""
    return CliRunner()


@pytest.fixture
def invoke(runner: CliRunner, home: Path, catalog_path: Path):
    """Invoke the CLI against the temp catalog."""

    def _invoke(*args: str, **kwargs):
        return runner.invoke(cli, ["--catalog", str(catalog_path), *args], **kwargs)

    return _invoke


@pytest.fixture
def seeded(store: CatalogStore, scenario_records: list[Record]) -> CatalogStore:
    store.save(scenario_records)
    return store


class TestCLI:
    """Tests for the main CLI."""

    def test_cli_version(self, runner: CliRunner) -> None:
        """Test CLI version option."""
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_cli_help(self, runner: CliRunner) -> None:
        """Test CLI help output."""
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Project Launcher" in result.output
        assert "projects" in result.output
        assert "launch" in result.output

    def test_trogon_command(self, runner: CliRunner) -> None:
        """Test the command explorer is registered."""
        result = runner.invoke(cli, ["tui", "--help"])
        assert result.exit_code == 0

    def test_dashboard_help(self, runner: CliRunner) -> None:
        """Test dashboard help lists the keyboard shortcuts."""
        result = runner.invoke(cli, ["dashboard", "--help"])
        assert result.exit_code == 0
        assert "interactive TUI dashboard" in result.output
        assert "Keyboard shortcuts" in result.output
        assert "Quit" in result.output

    def test_catalog_option_not_persisted(self, invoke, home: Path, catalog_path: Path) -> None:
        """Test --catalog is used for the run without touching config."""
        result = invoke("projects", "add", "api", "-p", "/home/x/api", "-c", "make")
        assert result.exit_code == 0
        assert catalog_path.exists()
        assert not (home / ".project-launcher" / "config.json").exists()

    def test_configured_catalog_path(self, runner: CliRunner, home: Path, tmp_path: Path) -> None:
        """Test the catalog path can come from config.json."""
        catalog = tmp_path / "elsewhere.json"
        config_path = home / ".project-launcher" / "config.json"
        config_path.parent.mkdir(parents=True)
        config_path.write_text(json.dumps({"catalog_path": str(catalog)}))

        result = runner.invoke(cli, ["projects", "add", "x", "-p", "/x", "-c", "y"])
        assert result.exit_code == 0
        assert json.loads(catalog.read_text())[0]["name"] == "x"


class TestProjectsCommand:
    """Tests for the projects command group."""

    def test_projects_help(self, runner: CliRunner) -> None:
        """Test projects command group help."""
        result = runner.invoke(cli, ["projects", "--help"])
        assert result.exit_code == 0
        for name in ("list", "add", "remove", "show"):
            assert name in result.output

    def test_projects_list_empty(self, invoke) -> None:
        """Test listing an empty catalog."""
        result = invoke("projects", "list")
        assert result.exit_code == 0
        assert "No projects configured." in result.output

    def test_projects_list_grouped(self, invoke, seeded: CatalogStore) -> None:
        """Test listing groups projects by category with N/A last."""
        result = invoke("projects", "list")
        assert result.exit_code == 0
        output = result.output
        assert output.index("📂 Web") < output.index("Alpha") < output.index("Zeta")
        assert output.index("Zeta") < output.index("📂 N/A") < output.index("Beta")
        assert "Total: 3 projects" in output

    def test_projects_list_verbose(self, invoke, seeded: CatalogStore) -> None:
        """Test verbose listing shows paths and commands."""
        result = invoke("projects", "list", "-v")
        assert "Path: /home/x/alpha" in result.output
        assert "Command: python main.py" in result.output

    def test_projects_add(self, invoke, store: CatalogStore) -> None:
        """Test adding a new project."""
        result = invoke(
            "projects", "add", "api", "-p", "/home/x/api", "-c", "python main.py",
            "-l", "http://localhost:8000", "-g", "Web",
        )
        assert result.exit_code == 0
        assert "Added project: api" in result.output
        assert store.load() == [
            Record(
                name="api",
                path="/home/x/api",
                command="python main.py",
                link="http://localhost:8000",
                category="Web",
            )
        ]

    def test_projects_add_duplicate(self, invoke, seeded: CatalogStore) -> None:
        """Test adding a duplicate project fails."""
        result = invoke("projects", "add", "Alpha", "-p", "/x", "-c", "y")
        assert result.exit_code == 1
        assert "already exists" in result.output
        assert len(seeded.load()) == 3

    def test_projects_add_unwritable(self, runner: CliRunner, home: Path, tmp_path: Path) -> None:
        """Test a catalog that cannot be written exits with an error."""
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        result = runner.invoke(
            cli, ["--catalog", str(blocker / "c.json"), "projects", "add", "a", "-p", "/a", "-c", "b"]
        )
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_projects_remove(self, invoke, seeded: CatalogStore) -> None:
        """Test removing a project with confirmation skipped."""
        result = invoke("projects", "remove", "Zeta", "-y")
        assert result.exit_code == 0
        assert "Removed project: Zeta" in result.output
        assert [r.name for r in seeded.load()] == ["Alpha", "Beta"]

    def test_projects_remove_confirm(self, invoke, seeded: CatalogStore) -> None:
        """Test declining the confirmation keeps the project."""
        result = invoke("projects", "remove", "Zeta", input="n\n")
        assert result.exit_code == 1
        assert len(seeded.load()) == 3

    def test_projects_remove_missing(self, invoke) -> None:
        """Test removing an unknown project fails."""
        result = invoke("projects", "remove", "ghost", "-y")
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_projects_show(self, invoke, seeded: CatalogStore) -> None:
        """Test showing project details."""
        result = invoke("projects", "show", "Beta")
        assert result.exit_code == 0
        assert "Category: N/A" in result.output
        assert "Command:  make run" in result.output


class TestLaunchCommand:
    """Tests for launch and open."""

    def test_launch(self, invoke, seeded: CatalogStore, fake_spawn, monkeypatch) -> None:
        """Test launching a project by name."""
        monkeypatch.setattr("project_launcher.cli.launch", partial(launch, spawn=fake_spawn))
        result = invoke("launch", "Alpha")
        assert result.exit_code == 0
        assert "🚀 Launched Alpha" in result.output
        assert fake_spawn.argv == ["bash", "-c", "cd /home/x/alpha && python main.py"]

    def test_launch_failure(self, invoke, seeded: CatalogStore, failing_spawn, monkeypatch) -> None:
        """Test a failed spawn exits non-zero."""
        monkeypatch.setattr("project_launcher.cli.launch", partial(launch, spawn=failing_spawn))
        result = invoke("launch", "Alpha")
        assert result.exit_code == 1
        assert "Failed to launch Alpha" in result.output

    def test_launch_missing(self, invoke) -> None:
        """Test launching an unknown project fails."""
        result = invoke("launch", "ghost")
        assert result.exit_code == 1
        assert "Project 'ghost' not found." in result.output

    def test_open_without_link(self, invoke, seeded: CatalogStore, fake_spawn, monkeypatch) -> None:
        """Test opening a project with no link."""
        monkeypatch.setattr("project_launcher.cli.open_link", partial(open_link, spawn=fake_spawn))
        result = invoke("open", "Alpha")
        assert result.exit_code == 0
        assert "No Link Associated" in result.output
        assert fake_spawn.calls == []

    def test_open(self, invoke, store: CatalogStore, fake_spawn, monkeypatch) -> None:
        """Test opening a project link."""
        store.save([Record(name="api", link="http://localhost:8000")])
        monkeypatch.setattr("project_launcher.cli.open_link", partial(open_link, spawn=fake_spawn))
        result = invoke("open", "api")
        assert result.exit_code == 0
        assert fake_spawn.argv[-1] == "http://localhost:8000"


class TestExportCommand:
    """Tests for export."""

    def test_export_yaml_stdout(self, invoke, seeded: CatalogStore) -> None:
        """Test YAML export to stdout."""
        result = invoke("export")
        assert result.exit_code == 0
        assert "categories:" in result.output
        assert "Web:" in result.output

    def test_export_json_file(self, invoke, seeded: CatalogStore, tmp_path: Path) -> None:
        """Test JSON export to a file."""
        output = tmp_path / "out.json"
        result = invoke("export", "-f", "json", "-o", str(output))
        assert result.exit_code == 0
        assert "Exported 3 projects" in result.output
        assert len(json.loads(output.read_text())) == 3

    def test_export_unwritable_output(self, invoke, seeded: CatalogStore, tmp_path: Path) -> None:
        """Test an output path that cannot be written is an error, not a traceback."""
        blocker = tmp_path / "blocker"
        blocker.write_text("")
        result = invoke("export", "-o", str(blocker / "out.yaml"))
        assert result.exit_code == 1
        assert "Error: Could not write" in result.output
        assert not isinstance(result.exception, OSError)

    def test_export_bad_format(self, invoke) -> None:
        """Test unsupported formats are rejected by click."""
        result = invoke("export", "-f", "xml")
        assert result.exit_code == 2
