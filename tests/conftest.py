"""Shared test fixtures for glctl tests."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from glctl.client import GitLabClient

# Constants for use in tests - pytest makes conftest.py fixtures available,
# but these constants need to be imported directly from tests
MOCK_GITLAB_URL = "https://gitlab.example.com"
MOCK_API_URL = f"{MOCK_GITLAB_URL}/api/v4"


@pytest.fixture(autouse=True)
def reset_logging():
    """Remove handlers that main() attached to the glctl logger."""
    yield
    logger = logging.getLogger("glctl")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)


@pytest.fixture
def mock_client():
    """GitLabClient pointing at mock server."""
    return GitLabClient(MOCK_GITLAB_URL, "test-token", dry_run=False)


@pytest.fixture
def dry_run_client():
    """GitLabClient in dry-run mode."""
    return GitLabClient(MOCK_GITLAB_URL, "test-token", dry_run=True)


@pytest.fixture
def sample_project() -> dict[str, Any]:
    """Sample project API response."""
    return {
        "id": 123,
        "name": "demo",
        "path_with_namespace": "myorg/demo",
        "web_url": f"{MOCK_GITLAB_URL}/myorg/demo",
        "default_branch": "main",
    }


@pytest.fixture
def sample_group() -> dict[str, Any]:
    """Sample group API response."""
    return {
        "id": 456,
        "name": "myorg",
        "full_path": "myorg",
        "web_url": f"{MOCK_GITLAB_URL}/myorg",
    }


def make_entries(count: int, start: int = 0) -> list[dict[str, Any]]:
    """Tree entries as returned by the repository tree endpoint."""
    return [
        {
            "id": f"{i:040x}",
            "name": f"file{i}.txt",
            "type": "blob",
            "path": f"src/file{i}.txt",
            "mode": "100644",
        }
        for i in range(start, start + count)
    ]


def make_args(**kwargs) -> argparse.Namespace:
    """Helper to create argparse.Namespace with default values."""
    defaults = {
        "dry_run": False,
        "json_output": False,
        "verbose": False,
        "gitlab_url": None,
        "page": 1,
        "per_page": 50,
        "all": False,
        "sort": None,
        "output": "simple",
    }
    defaults.update(kwargs)
    return argparse.Namespace(**defaults)


def make_file_args(**kwargs) -> argparse.Namespace:
    """Namespace with the defaults of ``get files``."""
    defaults = {"project": "demo", "ref": "", "path": None, "recursive": True, "raw": False}
    defaults.update(kwargs)
    return make_args(**defaults)
