"""Common test fixtures."""

from pathlib import Path
from typing import List

import pytest
from loguru import logger

from basic_vfs.config import reset_config_cache
from basic_vfs.models import File, Folder


@pytest.fixture
def config_home(tmp_path, monkeypatch) -> Path:
    """Isolate HOME and the config directory for a test."""
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("BASIC_VFS_CONFIG_DIR", str(tmp_path / ".basic-vfs"))
    reset_config_cache()
    yield tmp_path
    reset_config_cache()


@pytest.fixture
def notices() -> List[str]:
    """Deletion notices collected by the `reporter` fixture."""
    return []


@pytest.fixture
def reporter(notices):
    return notices.append


@pytest.fixture
def log_messages():
    """Capture loguru messages emitted during a test."""
    messages: List[str] = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def sample_root() -> Folder:
    # /
    # ├── file1          (2)
    # ├── folder2/       (3)
    # │   └── file2      (4)
    # └── folder3/       (6)
    #     └── file3      (5)
    root = Folder("/", 1)
    root.add(File("file1", 2))

    folder2 = Folder("folder2/", 3)
    folder2.add(File("file2", 4))
    root.add(folder2)

    folder3 = Folder("folder3/", 6)
    folder3.add(File("file3", 5))
    root.add(folder3)
    return root
