"""Shared fixtures for Project Launcher tests."""

from pathlib import Path

import pytest

from project_launcher.catalog_file import CatalogStore
from project_launcher.models import Record


class FakeSpawn:
    """Stands in for subprocess.Popen and records every call."""

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.calls: list[tuple[list[str], dict]] = []

    def __call__(self, argv, **kwargs):
        self.calls.append((list(argv), kwargs))
        if self.error is not None:
            raise self.error
        return object()

    @property
    def argv(self) -> list[str]:
        return self.calls[-1][0]

    @property
    def kwargs(self) -> dict:
        return self.calls[-1][1]


@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the home directory at a temp dir so config never touches ~."""
    home_dir = tmp_path / "home"
    home_dir.mkdir()
    monkeypatch.setenv("HOME", str(home_dir))
    return home_dir


@pytest.fixture
def catalog_path(tmp_path: Path) -> Path:
    return tmp_path / "catalog" / "project-launcher.json"


@pytest.fixture
def store(catalog_path: Path) -> CatalogStore:
    return CatalogStore(catalog_path)


@pytest.fixture
def fake_spawn() -> FakeSpawn:
    return FakeSpawn()


@pytest.fixture
def failing_spawn() -> FakeSpawn:
    """A spawner whose executable is missing."""
    return FakeSpawn(error=FileNotFoundError(2, "No such file or directory"))


@pytest.fixture
def scenario_records() -> list[Record]:
    """Two Web projects out of name order plus one uncategorized."""
    return [
        Record(name="Zeta", path="/home/x/zeta", command="npm start", category="Web"),
        Record(name="Alpha", path="/home/x/alpha", command="python main.py", category="Web"),
        Record(name="Beta", path="/home/x/beta", command="make run", category=""),
    ]
