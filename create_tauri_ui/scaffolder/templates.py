"""Jinja2 rendering of the follow-up instructions shown after scaffolding.

The framework templates themselves are copied verbatim; only the short
"next steps" text is rendered, from ``.j2`` files under
``create_tauri_ui/scaffolder/templates/``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape
from pydantic import BaseModel, Field

from create_tauri_ui.config import PackageManager


_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

INSTALL_COMMANDS: dict[PackageManager, str] = {
    PackageManager.NPM: "npm install",
    PackageManager.YARN: "yarn",
    PackageManager.PNPM: "pnpm install",
}

DEV_COMMANDS: dict[PackageManager, str] = {
    PackageManager.NPM: "npm run tauri dev",
    PackageManager.YARN: "yarn tauri dev",
    PackageManager.PNPM: "pnpm tauri dev",
}


class TemplateRenderer:
    """Renders Jinja2 templates with a plain context dictionary."""

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render *template_path* (relative to the template directory)."""
        template = self.env.get_template(template_path)
        return template.render(**context)


class NextSteps(BaseModel):
    """Commands a user runs after the project has been created."""

    package_manager: PackageManager = PackageManager.NPM
    cd_path: str = Field(default="", description="Empty when already in the target")
    install_command: str
    dev_command: str

    @property
    def commands(self) -> list[str]:
        steps = [f"cd {self.cd_path}"] if self.cd_path else []
        return [*steps, self.install_command, self.dev_command]

    def render(self, renderer: TemplateRenderer | None = None) -> str:
        """Render the instructions as newline-separated commands."""
        renderer = renderer or TemplateRenderer()
        return renderer.render("next_steps.txt.j2", self.model_dump(mode="json"))


def build_next_steps(
    target_dir: str | Path,
    package_manager: PackageManager = PackageManager.NPM,
    cwd: str | Path | None = None,
) -> NextSteps:
    """Assemble the follow-up commands for *target_dir*.

    The ``cd`` path is relative when the target lies under *cwd*, and quoted
    when it contains spaces.
    """
    target = Path(target_dir)
    base = Path(cwd) if cwd is not None else Path.cwd()

    if target.resolve() == base.resolve():
        cd_path = ""
    else:
        try:
            cd_path = target.resolve().relative_to(base.resolve()).as_posix()
        except ValueError:
            cd_path = str(target)
        if " " in cd_path:
            cd_path = f'"{cd_path}"'

    return NextSteps(
        package_manager=package_manager,
        cd_path=cd_path,
        install_command=INSTALL_COMMANDS[package_manager],
        dev_command=DEV_COMMANDS[package_manager],
    )
