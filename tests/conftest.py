"""Shared pytest fixtures for the create-tauri-ui test suite.

Provides reusable fixtures for:
- A templates root with ``vite``, ``next`` and ``sveltekit`` trees plus the
  ``.shared`` overlay
- The packaged ``next.zip`` archive used in archive mode
- ``Settings`` instances pointing at those fixtures
"""

from __future__ import annotations

import json
import zipfile
from pathlib import Path

import pytest

from create_tauri_ui.config import Settings

from tests.template_data import (
    CARGO_TOML,
    GITIGNORE,
    PACKAGE_JSON,
    RELEASE_YML,
    TAURI_CONF,
)


# ---------------------------------------------------------------------------
# Template trees
# ---------------------------------------------------------------------------


def _write(path: Path, content: str | dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, dict):
        content = json.dumps(content, indent=2) + "\n"
    path.write_text(content, encoding="utf-8")


def _framework_files(entry: str) -> dict[str, str | dict]:
    return {
        "package.json": PACKAGE_JSON,
        "index.html": "<!doctype html><div id='root'></div>\n",
        f"src/{entry}": "console.log('hello')\n",
        "src/components/_gitignore": "*.tmp\n",
        "_gitignore": GITIGNORE,
        "src-tauri/tauri.conf.json": TAURI_CONF,
    }


def _shared_files() -> dict[str, str | dict]:
    return {
        "src-tauri/Cargo.toml": CARGO_TOML,
        "src-tauri/src/main.rs": "fn main() {}\n",
        ".github/workflows/release.yml": RELEASE_YML,
    }


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def templates_root(tmp_path: Path) -> Path:
    """A templates root with three framework trees, the overlay and the archive."""
    root = tmp_path / "templates"

    for name, files in {
        "vite": _framework_files("main.tsx"),
        "next": _framework_files("app/page.tsx"),
    }.items():
        for rel, content in files.items():
            _write(root / name / rel, content)

    # SvelteKit ships without the overlay, so it carries its own native files.
    for rel, content in {**_framework_files("routes/+page.svelte"), **_shared_files()}.items():
        _write(root / "sveltekit" / rel, content)

    # Empty directory in the overlay is materialized too.
    (root / ".shared" / "src-tauri" / "icons").mkdir(parents=True)
    for rel, content in _shared_files().items():
        _write(root / ".shared" / rel, content)

    with zipfile.ZipFile(root / "next.zip", "w") as archive:
        for rel, content in {**_framework_files("app/page.tsx"), **_shared_files()}.items():
            if isinstance(content, dict):
                content = json.dumps(content, indent=2) + "\n"
            archive.writestr(rel, content)

    return root


@pytest.fixture
def settings(templates_root: Path) -> Settings:
    """Directory-copy mode settings."""
    return Settings(templates_dir=templates_root)


@pytest.fixture
def archive_settings(templates_root: Path) -> Settings:
    """Archive-extraction mode settings."""
    return Settings(templates_dir=templates_root, use_archive=True)


@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    """Working directory that relative target paths resolve against."""
    path = tmp_path / "work"
    path.mkdir()
    return path
