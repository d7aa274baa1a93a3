"""Pytest configuration for resource discovery tests."""

import zipfile
from pathlib import Path

import pytest

from resource_discovery.environment import DiscoveryEnvironment


@pytest.fixture
def empty_environment() -> DiscoveryEnvironment:
    """Environment with no loaders, no class path and no properties."""
    return DiscoveryEnvironment(context_loader=None, class_path="", properties={})


@pytest.fixture
def make_archive():
    """Factory writing a zip archive with the given entry names."""

    def _make(path: Path, entries: list[str]) -> Path:
        with zipfile.ZipFile(path, "w") as zf:
            for name in entries:
                if name.endswith("/"):
                    zf.writestr(name, "")
                else:
                    zf.writestr(name, f"content of {name}")
        return path

    return _make
