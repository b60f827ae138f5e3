import sys
from pathlib import Path

import pytest


def pytest_configure() -> None:
    # Ensure `import pastebin...` works without installing the package.
    repo_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(repo_root))


@pytest.fixture
def cfg(tmp_path: Path):
    from pastebin.config import AppConfig

    return AppConfig(port=":0", storage_root=tmp_path / "pastes", id_length=8)
