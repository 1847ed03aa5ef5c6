"""create-tauri-ui command-line entry point.

Usage::

    create-tauri-ui "My App" --framework vite
    create-tauri-ui "My App" -f next --release-os windows linux -d ./apps/my-app
    python -m create_tauri_ui --list
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from rich.panel import Panel
from rich.table import Table

from create_tauri_ui import __version__
from create_tauri_ui.config import FRAMEWORKS, PLATFORMS, PackageManager, Settings
from create_tauri_ui.errors import ScaffoldError
from create_tauri_ui.scaffolder import ProjectConfig, ProjectGenerator
from create_tauri_ui.utils import (
    configure_logging,
    console,
    detect_package_manager,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="create-tauri-ui",
        description="Create a Tauri desktop app from a Vite, Next.js or SvelteKit template",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            '  create-tauri-ui "My App" --framework vite\n'
            "  create-tauri-ui my-app -f sveltekit --release-os windows linux\n"
            "  create-tauri-ui my-app -f next --overwrite\n"
        ),
    )

    parser.add_argument("project_name", nargs="?", help="Project display name")
    parser.add_argument(
        "--framework", "-f",
        choices=list(FRAMEWORKS),
        default=None,
        help="Frontend framework template",
    )
    parser.add_argument(
        "--package-name",
        default=None,
        help="npm package name (derived from the project name if omitted)",
    )
    parser.add_argument(
        "--directory", "-d",
        default=None,
        help="Target directory (default: the project name)",
    )
    parser.add_argument(
        "--release-os",
        nargs="+",
        choices=list(PLATFORMS),
        default=None,
        help="Platforms built by the release workflow (default: all)",
    )
    parser.add_argument(
        "--package-manager",
        choices=[pm.value for pm in PackageManager],
        default=None,
        help="Package manager used in the printed instructions (default: detected)",
    )
    parser.add_argument(
        "--templates",
        default=None,
        help="Templates root directory (overrides CREATE_TAURI_UI_TEMPLATES)",
    )
    parser.add_argument(
        "--archive",
        action="store_true",
        help="Extract the packaged Next.js archive instead of copying a template tree",
    )
    parser.add_argument(
        "--overwrite",
        action="store_true",
        help="Remove existing files in the target directory",
    )
    parser.add_argument("--list", action="store_true", help="List frameworks and platforms")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log every file operation")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def print_registries() -> None:
    """Print the supported frameworks and release platforms."""
    table = Table(title="Frameworks", show_header=True, header_style="bold cyan")
    table.add_column("Id", no_wrap=True)
    table.add_column("Name")
    table.add_column("Shared overlay")
    for spec in FRAMEWORKS.values():
        table.add_row(spec.id, spec.label, "yes" if spec.uses_shared else "no")
    console.print(table)

    print_summary_table(
        {spec.id: spec.runner for spec in PLATFORMS.values()},
        title="Release platforms",
    )


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``create-tauri-ui``.

    Returns:
        The process exit status (also passed to ``sys.exit`` when run as a
        script).
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.list:
        print_registries()
        return 0

    if not args.project_name:
        parser.error("the project name is required")

    settings = Settings.from_env()
    updates: dict[str, object] = {}
    if args.templates:
        updates["templates_dir"] = Path(args.templates)
    if args.archive:
        updates["use_archive"] = True
    if updates:
        settings = settings.model_copy(update=updates)

    if args.package_manager:
        package_manager = PackageManager(args.package_manager)
    else:
        package_manager = detect_package_manager(os.environ.get("npm_config_user_agent"))

    generator = ProjectGenerator(settings)
    try:
        config = ProjectConfig.from_inputs(
            args.project_name,
            package_name=args.package_name,
            framework=args.framework,
            release_os=args.release_os,
            target_dir=args.directory,
            overwrite=args.overwrite,
            package_manager=package_manager,
        )
        result = generator.generate(config)
    except ScaffoldError as exc:
        print_error(f"Error: {exc}")
        return 1

    print_summary_table(
        {
            "Project": result.config.project_name,
            "Package": result.config.package_name,
            "Framework": result.config.framework or "next (archive)",
            "Directory": str(result.target_dir),
            "Release platforms": ", ".join(result.config.release_os),
            "Files": str(len(result.files)),
            "Configs rewritten": str(len(result.rewrites.written)),
            "Configs skipped": str(len(result.rewrites.skipped)),
        },
        title="Project created",
    )
    for skipped in result.rewrites.skipped:
        print_warning(f"Skipped {skipped.file.as_posix()}: {skipped.reason}")
    console.print(
        Panel(
            generator.render_next_steps(result).rstrip(),
            title="[bold]Next steps[/bold]",
            border_style="bright_cyan",
        )
    )
    print_success("Done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
