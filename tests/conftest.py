"""Shared test fixtures."""

from pathlib import Path

import pytest
from siteredirect.config import AppConfig, RunConfig


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    """Create a small documentation project.

    Layout:
        docs/README.md            -> /
        docs/guide/README.md      -> /guide/
        docs/guide/setup.md       -> /guide/setup.html
    """
    source = tmp_path / "docs"
    guide = source / "guide"
    guide.mkdir(parents=True)
    (source / "README.md").write_text("# Home\n\nWelcome.", encoding="utf-8")
    (guide / "README.md").write_text("# Guide\n\nOverview.", encoding="utf-8")
    (guide / "setup.md").write_text("# Setup\n\nSteps.", encoding="utf-8")
    return source


@pytest.fixture
def app_config(source_dir: Path) -> AppConfig:
    """Create an app config with conventional directories under source_dir."""
    return AppConfig.for_source(source_dir)


@pytest.fixture
def run_config(tmp_path: Path) -> RunConfig:
    """Create run options writing into tmp_path/out."""
    return RunConfig(
        hostname="https://new.example.com/",
        output_folder=tmp_path / "out",
        base="/",
    )
