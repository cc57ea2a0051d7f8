"""Pytest configuration and fixtures for ArchBoard CLI tests."""

import shutil
import tempfile
from pathlib import Path
from typing import Generator, List, Tuple

import pytest

from archboard_cli.emitter import BoardAdapter
from archboard_cli.models import BoardRef


class FakeAdapter(BoardAdapter):
    """Adapter double that logs every call and hands out predictable ids."""

    def __init__(self):
        self.calls: List[Tuple[str, object]] = []
        self.issued_node_ids: List[str] = []

    def create_board(self, name, description):
        self.calls.append(("board", (name, description)))
        return BoardRef(board_id="b1", view_url="https://miro.example/b1")

    def create_node(self, board_id, command):
        assert board_id == "b1"
        node_id = f"n{len(self.issued_node_ids) + 1}"
        self.issued_node_ids.append(node_id)
        self.calls.append(("node", command))
        return node_id

    def create_connector(self, board_id, command):
        assert board_id == "b1"
        # Endpoints must already exist when the connector is issued.
        assert command.from_node_id in self.issued_node_ids
        assert command.to_node_id in self.issued_node_ids
        self.calls.append(("connector", command))
        return f"c{sum(1 for kind, _ in self.calls if kind == 'connector')}"

    def kinds(self) -> List[str]:
        return [kind for kind, _ in self.calls]


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path, monkeypatch):
    """Keep every test away from the real ~/.archboard and environment."""
    home = tmp_path / "archboard_home"
    monkeypatch.setattr("archboard_cli.config.BASE_DIR", home)
    monkeypatch.setattr("archboard_cli.config.CONFIG_FILE", home / "config.toml")
    monkeypatch.setattr("archboard_cli.config.MIRO_API_TOKEN", "")
    monkeypatch.setattr("archboard_cli.config.GITHUB_URL", "")
    monkeypatch.setattr("archboard_cli.config.COLOR_OVERRIDES", {})
    monkeypatch.delenv("GITHUB_OUTPUT", raising=False)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    tmp = Path(tempfile.mkdtemp())
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def sample_project_path() -> Path:
    """Get path to the sample TypeScript service."""
    return Path(__file__).parent / "fixtures" / "sample_project" / "src"


@pytest.fixture
def fake_adapter() -> FakeAdapter:
    return FakeAdapter()


@pytest.fixture
def write_sources(temp_dir: Path):
    """Write ``{file_name: text}`` into the temp dir and return the dir."""

    def _write(files):
        for name, text in files.items():
            (temp_dir / name).write_text(text, encoding="utf-8")
        return temp_dir

    return _write
