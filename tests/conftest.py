import json
import shutil
import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

from models import Configuration
from notifier import ChangeNotifier
from store import DocumentStore


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for testing"""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path)


@pytest.fixture
def launch_path(temp_dir: Path) -> Path:
    return temp_dir / ".vscode" / "launch.json"


@pytest.fixture
def store(launch_path: Path) -> DocumentStore:
    return DocumentStore(launch_path, ChangeNotifier())


@pytest.fixture
def node_config() -> Configuration:
    return Configuration(name="A", type="node", request="launch")


@pytest.fixture
def sample_document_data() -> dict:
    """Launch document as VS Code would write it, with extra fields"""
    return {
        "version": "0.2.0",
        "configurations": [
            {
                "name": "Server",
                "type": "node",
                "request": "launch",
                "program": "${workspaceFolder}/server.js",
                "env": {"PORT": "8080"},
            },
            {
                "name": "Attach",
                "type": "python",
                "request": "attach",
                "connect": {"host": "localhost", "port": 5678},
            },
        ],
        "compounds": [
            {"name": "Full Stack", "configurations": ["Server", "Attach"], "stopAll": True}
        ],
        "inputs": [{"id": "port", "type": "promptString"}],
    }


@pytest.fixture
def populated_store(
    store: DocumentStore, launch_path: Path, sample_document_data: dict
) -> DocumentStore:
    launch_path.parent.mkdir(parents=True)
    launch_path.write_text(json.dumps(sample_document_data, indent=2))
    return store
