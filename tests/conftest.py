"""Shared pytest fixtures for pagestack tests.

Fixtures are organized by category:
- Site fixtures: sample site copies and scratch site layouts
- Configuration fixtures: config dictionaries for various scenarios
"""

import shutil
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from pagestack.models import SiteLayout
from tests.fixtures import SAMPLE_SITE_PATH

# =============================================================================
# Site Fixtures
# =============================================================================


@pytest.fixture
def sample_site(tmp_path: Path) -> Path:
    """Copy the sample site into a temporary directory.

    Builds write into the copy's www/ directory, never into the fixtures.
    """
    site_root = tmp_path / "site"
    shutil.copytree(SAMPLE_SITE_PATH, site_root)
    return site_root


@pytest.fixture
def sample_layout(sample_site: Path) -> SiteLayout:
    """Return the layout of the copied sample site."""
    return SiteLayout.from_root(sample_site)


@pytest.fixture
def layout(tmp_path: Path) -> SiteLayout:
    """Create an empty site layout with all role directories present."""
    site = SiteLayout.from_root(tmp_path)
    for directory in (site.pages_dir, site.templates_dir, site.sections_dir):
        directory.mkdir(parents=True)
    return site


@pytest.fixture
def write_file() -> Callable[[Path, str | bytes], Path]:
    """Return a helper that writes text or bytes, creating parent dirs."""

    def _write(path: Path, content: str | bytes) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        return path

    return _write


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def minimal_config() -> dict[str, Any]:
    """Return a minimal valid pagestack configuration."""
    return {
        "site": {
            "output_dir": "public",
        }
    }


@pytest.fixture
def full_config() -> dict[str, Any]:
    """Return a complete pagestack configuration with all options."""
    return {
        "site": {
            "pages_dir": "content",
            "templates_dir": "layouts",
            "sections_dir": "partials",
            "output_dir": "public",
        },
        "markdown": {
            "extensions": ["extra", "toc"],
        },
        "render": {
            "strict_variables": True,
        },
        "server": {
            "host": "0.0.0.0",
            "port": 9000,
        },
    }
