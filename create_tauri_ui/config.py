"""create-tauri-ui configuration.

Static registries for the supported frameworks and release platforms, plus
the typed ``Settings`` that locate the bundled templates.  All models use
Pydantic v2 so they are validated at construction time and can be built from
environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from create_tauri_ui.errors import ProjectValidationError


# ---------------------------------------------------------------------------
# Registries
# ---------------------------------------------------------------------------


class FrameworkSpec(BaseModel):
    """A frontend stack offered as a scaffolding choice."""

    id: str
    label: str
    template: str = Field(description="Directory name under the templates root")
    uses_shared: bool = Field(
        default=True, description="Whether the shared overlay is layered on top"
    )


class PlatformSpec(BaseModel):
    """A release target and the CI runner that builds it."""

    id: str
    label: str
    runner: str


FRAMEWORKS: dict[str, FrameworkSpec] = {
    "vite": FrameworkSpec(id="vite", label="Vite + React", template="vite"),
    "next": FrameworkSpec(id="next", label="Next.js", template="next"),
    "sveltekit": FrameworkSpec(
        id="sveltekit", label="SvelteKit", template="sveltekit", uses_shared=False
    ),
}

PLATFORMS: dict[str, PlatformSpec] = {
    "windows": PlatformSpec(id="windows", label="Windows", runner="windows-latest"),
    "macos": PlatformSpec(id="macos", label="macOS", runner="macos-latest"),
    "linux": PlatformSpec(id="linux", label="Linux", runner="ubuntu-latest"),
}


def get_framework(identifier: str) -> FrameworkSpec:
    """Return the registered framework for *identifier*.

    Raises:
        ProjectValidationError: If the identifier is not registered.
    """
    try:
        return FRAMEWORKS[identifier]
    except KeyError:
        raise ProjectValidationError(
            "framework", identifier, f"expected one of {', '.join(FRAMEWORKS)}"
        ) from None


def get_platform(identifier: str) -> PlatformSpec:
    """Return the registered release platform for *identifier*."""
    try:
        return PLATFORMS[identifier]
    except KeyError:
        raise ProjectValidationError(
            "release platform", identifier, f"expected one of {', '.join(PLATFORMS)}"
        ) from None


class PackageManager(str, Enum):
    """Node package managers the follow-up instructions are written for."""

    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


class Settings(BaseModel):
    """Where templates live and how they are packaged.

    Instances are typically created once by the CLI (``Settings.from_env()``)
    and handed to ``ProjectGenerator``.
    """

    templates_dir: Path = Field(default=_DEFAULT_TEMPLATES_DIR)
    shared_dir_name: str = Field(default=".shared")
    archive_name: str = Field(default="next.zip")
    use_archive: bool = Field(
        default=False,
        description="Extract the single packaged archive instead of copying template trees",
    )

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def shared_dir(self) -> Path:
        """The overlay layered on top of every framework except SvelteKit."""
        return self.templates_dir / self.shared_dir_name

    @property
    def archive_path(self) -> Path:
        """The packaged template used in archive mode."""
        return self.templates_dir / self.archive_name

    def framework_dir(self, framework: FrameworkSpec) -> Path:
        """Template tree for *framework*."""
        return self.templates_dir / framework.template

    @classmethod
    def from_env(cls) -> "Settings":
        """Build ``Settings`` from environment variables.

        Recognised variables (all optional):
            CREATE_TAURI_UI_TEMPLATES, CREATE_TAURI_UI_ARCHIVE.
        """
        kwargs: dict[str, object] = {}
        if os.environ.get("CREATE_TAURI_UI_TEMPLATES"):
            kwargs["templates_dir"] = Path(os.environ["CREATE_TAURI_UI_TEMPLATES"])
        archive = os.environ.get("CREATE_TAURI_UI_ARCHIVE", "").strip().lower()
        if archive in {"1", "true", "yes", "on"}:
            kwargs["use_archive"] = True
        return cls(**kwargs)
