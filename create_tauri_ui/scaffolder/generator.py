"""Main scaffolding orchestrator.

Takes a ``ProjectConfig`` and materializes a Tauri project in four linear
stages::

    VALIDATED -> DIRECTORY_READY -> TEMPLATES_COPIED -> CONFIGS_REWRITTEN -> DONE

The first failure moves the generator to ``FAILED`` and is re-raised; stages
that already ran are not rolled back.  Re-running with ``overwrite=True``
converges to a clean result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from create_tauri_ui.config import (
    FRAMEWORKS,
    PLATFORMS,
    FrameworkSpec,
    PackageManager,
    PlatformSpec,
    Settings,
    get_framework,
    get_platform,
)
from create_tauri_ui.errors import ProjectValidationError

from .directory import prepare_target_directory
from .materializer import TemplateMaterializer
from .names import format_target_directory, is_valid_package_name, to_valid_package_name
from .rewriter import ConfigRewriter, RewriteReport
from .templates import NextSteps, TemplateRenderer, build_next_steps

logger = logging.getLogger(__name__)

DEFAULT_TARGET_DIR = "tauri-ui"


# ---------------------------------------------------------------------------
# Configuration model
# ---------------------------------------------------------------------------


class ProjectConfig(BaseModel):
    """Pydantic model describing the project to scaffold.

    Constructing an instance validates every name and identifier, so nothing
    invalid can reach the filesystem stages.
    """

    project_name: str = Field(..., description="Display name entered by the user")
    package_name: str = Field(..., description="npm package name written to package.json")
    framework: Optional[str] = Field(
        default=None, description="Framework identifier; unused in archive mode"
    )
    release_os: list[str] = Field(
        default_factory=lambda: list(PLATFORMS),
        description="Platforms the release workflow builds for",
    )
    overwrite: bool = Field(default=False, description="Allow clearing a non-empty target")
    target_dir: Path = Field(default=Path(DEFAULT_TARGET_DIR))
    package_manager: PackageManager = Field(default=PackageManager.NPM)

    @field_validator("framework")
    @classmethod
    def _known_framework(cls, value: Optional[str]) -> Optional[str]:
        if value is not None:
            get_framework(value)
        return value

    @field_validator("release_os")
    @classmethod
    def _known_platforms(cls, value: list[str]) -> list[str]:
        unique: list[str] = []
        for identifier in value:
            get_platform(identifier)
            if identifier not in unique:
                unique.append(identifier)
        if not unique:
            logger.info("No release platform selected; building for all platforms")
            unique = list(PLATFORMS)
        return unique

    @model_validator(mode="after")
    def _valid_names(self) -> "ProjectConfig":
        if not self.project_name.strip():
            raise ProjectValidationError("project name", self.project_name, "must not be empty")
        if not self.package_name:
            raise ProjectValidationError("package name", self.package_name, "must not be empty")
        if not is_valid_package_name(self.package_name):
            raise ProjectValidationError(
                "package name", self.package_name, "not a valid npm package name"
            )
        return self

    @classmethod
    def from_inputs(
        cls,
        project_name: str,
        *,
        package_name: str | None = None,
        framework: str | None = None,
        release_os: list[str] | None = None,
        target_dir: str | None = None,
        overwrite: bool = False,
        package_manager: PackageManager = PackageManager.NPM,
    ) -> "ProjectConfig":
        """Build a config from raw user input, deriving what was not supplied.

        * ``package_name`` defaults to ``to_valid_package_name(project_name)``.
        * ``target_dir`` defaults to the formatted project name, then to
          ``tauri-ui``.
        """
        project_name = (project_name or "").strip()
        if not project_name:
            raise ProjectValidationError("project name", project_name, "must not be empty")

        directory = format_target_directory(target_dir) or format_target_directory(
            project_name
        )
        return cls(
            project_name=project_name,
            package_name=package_name or to_valid_package_name(project_name),
            framework=framework,
            release_os=release_os or [],
            target_dir=Path(directory or DEFAULT_TARGET_DIR),
            overwrite=overwrite,
            package_manager=package_manager,
        )

    @property
    def framework_spec(self) -> FrameworkSpec | None:
        return FRAMEWORKS[self.framework] if self.framework else None

    @property
    def platforms(self) -> list[PlatformSpec]:
        return [PLATFORMS[identifier] for identifier in self.release_os]


# ---------------------------------------------------------------------------
# Stages and results
# ---------------------------------------------------------------------------


class Stage(str, Enum):
    START = "start"
    VALIDATED = "validated"
    DIRECTORY_READY = "directory_ready"
    TEMPLATES_COPIED = "templates_copied"
    CONFIGS_REWRITTEN = "configs_rewritten"
    DONE = "done"
    FAILED = "failed"


@dataclass
class GenerationResult:
    """What a successful ``ProjectGenerator.generate`` produced."""

    config: ProjectConfig
    files: list[Path] = field(default_factory=list)
    rewrites: RewriteReport = field(default_factory=RewriteReport)
    next_steps: NextSteps | None = None

    @property
    def target_dir(self) -> Path:
        return self.config.target_dir


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Sequences directory preparation, template copy and config rewriting.

    Attributes:
        settings: Template locations and archive mode.
        stage: The last stage reached by the most recent ``generate`` call.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.renderer = renderer or TemplateRenderer()
        self.stage = Stage.START

    # -- Public API --------------------------------------------------------

    def generate(
        self, config: ProjectConfig, cwd: str | Path | None = None
    ) -> GenerationResult:
        """Materialize the project described by *config*.

        Args:
            config: Validated project configuration.
            cwd: Base for a relative ``target_dir``.  Defaults to the
                process's working directory.

        Returns:
            The result, whose ``config.target_dir`` is absolute.

        Raises:
            ScaffoldError: The first failure of any stage.
            OSError: Unexpected I/O errors, unwrapped.
        """
        self.stage = Stage.START
        try:
            framework = self._resolve_framework(config)
            self.stage = Stage.VALIDATED

            resolved = prepare_target_directory(config.target_dir, config.overwrite, cwd=cwd)
            config = config.model_copy(update={"target_dir": resolved})
            self.stage = Stage.DIRECTORY_READY

            files = self._materialize(config, framework)
            self.stage = Stage.TEMPLATES_COPIED

            rewrites = self._rewriter_for(config, framework).rewrite_all()
            self.stage = Stage.CONFIGS_REWRITTEN
        except Exception:
            logger.debug("Scaffolding failed after stage %s", self.stage.value)
            self.stage = Stage.FAILED
            raise

        next_steps = build_next_steps(resolved, config.package_manager, cwd=cwd)
        self.stage = Stage.DONE
        logger.info("Scaffolded %s in %s", config.package_name, resolved)
        return GenerationResult(
            config=config, files=files, rewrites=rewrites, next_steps=next_steps
        )

    def render_next_steps(self, result: GenerationResult) -> str:
        """Render the follow-up instructions for a finished run."""
        if result.next_steps is None:
            return ""
        return result.next_steps.render(self.renderer)

    # -- Stages ------------------------------------------------------------

    def _resolve_framework(self, config: ProjectConfig) -> FrameworkSpec | None:
        """Return the framework to copy, or ``None`` in archive mode."""
        if self.settings.use_archive:
            return None
        framework = config.framework_spec
        if framework is None:
            raise ProjectValidationError(
                "framework", config.framework, f"expected one of {', '.join(FRAMEWORKS)}"
            )
        return framework

    def _materialize(
        self, config: ProjectConfig, framework: FrameworkSpec | None
    ) -> list[Path]:
        materializer = TemplateMaterializer(config.target_dir)
        if framework is None:
            return materializer.extract_archive(self.settings.archive_path)

        shared = self.settings.shared_dir if framework.uses_shared else None
        return materializer.copy_tree(self.settings.framework_dir(framework), shared)

    def _rewriter_for(
        self, config: ProjectConfig, framework: FrameworkSpec | None
    ) -> ConfigRewriter:
        search_dirs: list[Path] = []
        if framework is not None:
            search_dirs.append(self.settings.framework_dir(framework))
            if framework.uses_shared:
                search_dirs.append(self.settings.shared_dir)
        return ConfigRewriter(
            config.target_dir,
            config.package_name,
            config.platforms,
            search_dirs=search_dirs,
        )
