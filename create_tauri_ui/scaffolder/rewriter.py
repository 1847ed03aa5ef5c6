"""Configuration rewriting for a materialized project.

Two editors cover the four files that carry the project's identity:

* ``JsonDocumentEditor`` -- parses JSON into ordered dicts, edits keys and
  writes the whole tree back, so unknown fields and nesting survive.
* ``TextPatternEditor`` -- applies one anchored regex substitution to an
  opaque text file.  A pattern that does not match leaves the text as is.

Each rewrite reads from a *source* file (the template, or the file already in
the target) and writes to its fixed location under the target.  A missing
source is recorded as ``ConfigWriteSkipped`` and logged; it never stops the
remaining rewrites.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Sequence

from create_tauri_ui.config import PLATFORMS, PlatformSpec
from create_tauri_ui.scaffolder.materializer import (
    APP_DESCRIPTOR,
    NATIVE_MANIFEST,
    PACKAGE_MANIFEST,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Target locations
# ---------------------------------------------------------------------------

NATIVE_DIR = "src-tauri"
WORKFLOW_DIR = Path(".github") / "workflows"
WORKFLOW_FILE = "release.yml"

PACKAGE_MANIFEST_PATH = Path(PACKAGE_MANIFEST)
APP_DESCRIPTOR_PATH = Path(NATIVE_DIR) / APP_DESCRIPTOR
NATIVE_MANIFEST_PATH = Path(NATIVE_DIR) / NATIVE_MANIFEST
WORKFLOW_PATH = WORKFLOW_DIR / WORKFLOW_FILE

# The matrix line shipped in the release workflow template.
PLATFORM_MATRIX_LINE = "platform: [macos-latest, ubuntu-latest, windows-latest]"

# First ``name = "..."`` assignment at the start of a line, i.e. the
# ``[package]`` name in a freshly generated Cargo.toml.
_CARGO_NAME_RE = re.compile(r'^name\s*=\s*"[^"\n]*"', re.MULTILINE)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ConfigWriteSkipped:
    """A config file that could not be rewritten because its source was absent."""

    file: Path
    reason: str


@dataclass
class RewriteReport:
    """Outcome of ``ConfigRewriter.rewrite_all``."""

    written: list[Path] = field(default_factory=list)
    skipped: list[ConfigWriteSkipped] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """``True`` when every file was rewritten."""
        return not self.skipped


# ---------------------------------------------------------------------------
# Editors
# ---------------------------------------------------------------------------


class JsonDocumentEditor:
    """Load a JSON object, mutate it in memory, write it back.

    Key order and nested structures are kept exactly as parsed; only the keys
    set through the editor change.
    """

    def __init__(self, data: dict[str, Any]) -> None:
        self.data = data

    @classmethod
    def load(cls, path: str | Path) -> "JsonDocumentEditor":
        raw = Path(path).read_text(encoding="utf-8")
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError(f"{path} does not contain a JSON object")
        return cls(data)

    def set(self, key: str, value: Any) -> None:
        self.data[key] = value

    def set_if_present(self, key: str, value: Any) -> bool:
        """Set a top-level key only when it already exists."""
        if key not in self.data:
            return False
        self.data[key] = value
        return True

    def dumps(self) -> str:
        return json.dumps(self.data, indent=2, ensure_ascii=False) + "\n"

    def save(self, path: str | Path) -> Path:
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(self.dumps(), encoding="utf-8")
        return out


class TextPatternEditor:
    """Apply a regex substitution to a text file."""

    def __init__(self, text: str) -> None:
        self.text = text

    @classmethod
    def load(cls, path: str | Path) -> "TextPatternEditor":
        return cls(Path(path).read_text(encoding="utf-8"))

    def substitute(
        self, pattern: str | re.Pattern[str], replacement: str, count: int = 0
    ) -> int:
        """Replace matches of *pattern* with the literal *replacement*.

        Returns:
            The number of substitutions made.
        """
        compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
        self.text, made = compiled.subn(lambda _m: replacement, self.text, count=count)
        return made

    def save(self, path: str | Path) -> Path:
        out = Path(path)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(self.text, encoding="utf-8")
        return out


# ---------------------------------------------------------------------------
# Individual rewrites
# ---------------------------------------------------------------------------


def rewrite_package_manifest(source: Path, dest: Path, package_name: str) -> Path:
    """Set the top-level ``name`` of ``package.json``."""
    editor = JsonDocumentEditor.load(source)
    editor.set("name", package_name)
    return editor.save(dest)


def rewrite_app_descriptor(source: Path, dest: Path, package_name: str) -> Path:
    """Set ``productName`` and the first window's ``title`` in ``tauri.conf.json``.

    Each field is only touched when it already exists.
    """
    editor = JsonDocumentEditor.load(source)
    editor.set_if_present("productName", package_name)

    app = editor.data.get("app")
    if isinstance(app, dict):
        windows = app.get("windows")
        if isinstance(windows, list) and windows and isinstance(windows[0], dict):
            windows[0]["title"] = package_name

    return editor.save(dest)


def rewrite_native_manifest(source: Path, dest: Path, package_name: str) -> Path:
    """Replace the first ``name = "..."`` line of ``Cargo.toml``."""
    editor = TextPatternEditor.load(source)
    if not editor.substitute(_CARGO_NAME_RE, f'name = "{package_name}"', count=1):
        logger.debug("No package name assignment found in %s", source)
    return editor.save(dest)


def build_platform_matrix(platforms: Sequence[PlatformSpec]) -> str:
    """Render the CI ``platform:`` line for the selected release targets.

    When only some platforms are selected, a trailing comment names the
    runners that were left out.

    Example::

        platform: [windows-latest, ubuntu-latest] # macos-latest
    """
    selected = [p.runner for p in platforms]
    line = f"platform: [{', '.join(selected)}]"
    excluded = [p.runner for p in PLATFORMS.values() if p.runner not in selected]
    if selected and excluded:
        line += f" # {', '.join(excluded)}"
    return line


def rewrite_release_workflow(
    source: Path, dest: Path, platforms: Sequence[PlatformSpec]
) -> Path:
    """Replace the three-platform build matrix in ``release.yml``."""
    editor = TextPatternEditor.load(source)
    if not editor.substitute(re.escape(PLATFORM_MATRIX_LINE), build_platform_matrix(platforms)):
        logger.debug("No platform matrix found in %s", source)
    return editor.save(dest)


# ---------------------------------------------------------------------------
# ConfigRewriter
# ---------------------------------------------------------------------------


class ConfigRewriter:
    """Rewrites the identity-bearing config files of a materialized project.

    Sources are looked up in ``search_dirs`` in order (typically the target
    itself, then the framework template, then the shared overlay); results are
    always written under ``target_dir``.
    """

    def __init__(
        self,
        target_dir: str | Path,
        package_name: str,
        platforms: Sequence[PlatformSpec],
        search_dirs: Sequence[str | Path] = (),
    ) -> None:
        self.target_dir = Path(target_dir)
        self.package_name = package_name
        self.platforms = list(platforms)
        self.search_dirs = [self.target_dir, *(Path(d) for d in search_dirs)]

    def find_source(self, relative: Path) -> Path | None:
        """Return the first existing ``<dir>/<relative>`` among ``search_dirs``."""
        for directory in self.search_dirs:
            candidate = directory / relative
            if candidate.is_file():
                return candidate
        return None

    def rewrite_all(self) -> RewriteReport:
        """Run all four rewrites, collecting written and skipped files."""
        report = RewriteReport()
        steps: list[tuple[Path, Callable[[Path, Path], Path]]] = [
            (
                PACKAGE_MANIFEST_PATH,
                lambda s, d: rewrite_package_manifest(s, d, self.package_name),
            ),
            (
                APP_DESCRIPTOR_PATH,
                lambda s, d: rewrite_app_descriptor(s, d, self.package_name),
            ),
            (
                NATIVE_MANIFEST_PATH,
                lambda s, d: rewrite_native_manifest(s, d, self.package_name),
            ),
            (
                WORKFLOW_PATH,
                lambda s, d: rewrite_release_workflow(s, d, self.platforms),
            ),
        ]

        for relative, rewrite in steps:
            source = self.find_source(relative)
            if source is None:
                skipped = ConfigWriteSkipped(relative, "source file not found")
                logger.warning("Skipped %s: %s", relative.as_posix(), skipped.reason)
                report.skipped.append(skipped)
                continue
            written = rewrite(source, self.target_dir / relative)
            logger.debug("Rewrote %s", relative.as_posix())
            report.written.append(written)

        return report
