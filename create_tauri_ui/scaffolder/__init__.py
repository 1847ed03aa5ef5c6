"""create-tauri-ui scaffolder -- materializes a Tauri desktop project.

Validates the requested names, prepares the target directory, copies (or
extracts) the chosen framework template and rewrites the files that carry the
project's identity: ``package.json``, ``src-tauri/tauri.conf.json``,
``src-tauri/Cargo.toml`` and ``.github/workflows/release.yml``.

Quick usage::

    from create_tauri_ui.scaffolder import ProjectConfig, ProjectGenerator

    config = ProjectConfig.from_inputs(
        "My App",
        framework="vite",
        release_os=["windows", "linux"],
    )
    result = ProjectGenerator().generate(config)
"""

from create_tauri_ui.scaffolder.generator import (
    GenerationResult,
    ProjectConfig,
    ProjectGenerator,
    Stage,
)
from create_tauri_ui.scaffolder.rewriter import ConfigRewriter, ConfigWriteSkipped
from create_tauri_ui.scaffolder.templates import TemplateRenderer

__all__ = [
    "ConfigRewriter",
    "ConfigWriteSkipped",
    "GenerationResult",
    "ProjectConfig",
    "ProjectGenerator",
    "Stage",
    "TemplateRenderer",
]
