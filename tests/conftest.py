# File: tests/conftest.py

import pytest
import os
import sys
import logging
from pathlib import Path

# 1. Add project root to path
sys.path.append(os.getcwd())

# 2. Import Settings
from filehandles.core.config.settings import settings
from filehandles.features.interception.service.interceptor import FileInterceptor, file_interceptor
from filehandles.features.storage.data.local_fs import LocalFileSystem
from filehandles.features.locations.service.folder import Folder


@pytest.fixture(scope="session", autouse=True)
def global_setup():
    """
    Runs once per test session.
    Surfaces the library's debug traces in failing test output.
    """
    logging.getLogger("filehandles").setLevel(logging.DEBUG)
    yield


@pytest.fixture(scope="function", autouse=True)
def clean_shared_interceptor():
    """
    Runs around EVERY test.
    The default interceptor is process wide, so nothing may leak between tests.
    """
    file_interceptor.clear_interceptors()
    yield
    file_interceptor.clear_interceptors()


@pytest.fixture
def debug_mode(monkeypatch):
    """Turns on interception and the fixture path bypass for one test."""
    monkeypatch.setattr(settings, "DEBUG", True)
    yield


@pytest.fixture
def interceptor():
    """A private interceptor so tests never share registry state."""
    return FileInterceptor()


@pytest.fixture
def local_fs():
    return LocalFileSystem()


@pytest.fixture
def workspace(tmp_path, interceptor) -> Folder:
    """
    A Folder handle on an empty temp directory, wired to a private interceptor.
    """
    return Folder(str(tmp_path), interceptor=interceptor)


@pytest.fixture
def sample_tree(tmp_path) -> Path:
    """
    Creates:
    /A
      b.txt
      .gitignore
      /C
        d.txt
      /E
        /F
          g.txt
    """
    root = tmp_path / "A"
    (root / "C").mkdir(parents=True)
    (root / "E" / "F").mkdir(parents=True)
    (root / "b.txt").write_text("b")
    (root / ".gitignore").write_text("*.pyc")
    (root / "C" / "d.txt").write_text("d")
    (root / "E" / "F" / "g.txt").write_text("g")
    return root
