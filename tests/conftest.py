"""Pytest configuration and shared fixtures for MirrorConf tests."""

import tempfile
from pathlib import Path
from typing import Dict, Iterator, Optional

import pytest
from mirrorconf import AdapterRegistry, SourceStore
from mirrorconf.store import parse_lines


@pytest.fixture
def temp_dir() -> Iterator[Path]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def environ() -> Dict[str, str]:
    """Create an empty environment lookup, isolated from os.environ."""
    return {}


@pytest.fixture
def registry() -> AdapterRegistry:
    """Create an empty adapter registry, isolated from the process-wide one."""
    return AdapterRegistry()


def write_env_file(file_path: Path, content: str) -> Path:
    """Write a configuration file.

    Args:
        file_path: Path to write file
        content: Raw file content

    Returns:
        The written path
    """
    file_path.write_text(content, encoding="utf-8")
    return file_path


def make_store(
    content: str = "", environ: Optional[Dict[str, str]] = None, allow_environment_fallback: bool = True
) -> SourceStore:
    """Build a source store from raw file content without touching the filesystem."""
    entries = dict(parse_lines(content.splitlines()))
    return SourceStore(entries, allow_environment_fallback, {} if environ is None else environ)
