"""Tests for the scaffolding orchestrator.

Covers:
- ProjectConfig validation (names, framework, release platforms)
- ProjectConfig.from_inputs derivation of package name and target directory
- ProjectGenerator.generate in copy mode and archive mode
- Stage tracking and failure propagation
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from create_tauri_ui.config import PLATFORMS, PackageManager, Settings
from create_tauri_ui.errors import (
    ProjectValidationError,
    TargetNotEmptyError,
    TemplateNotFoundError,
)
from create_tauri_ui.scaffolder.generator import (
    DEFAULT_TARGET_DIR,
    ProjectConfig,
    ProjectGenerator,
    Stage,
)

pytestmark = pytest.mark.unit


def _config(**overrides) -> ProjectConfig:
    values = {
        "project_name": "Demo App",
        "package_name": "demo-app",
        "framework": "vite",
        "release_os": ["windows", "linux"],
        "target_dir": Path("demo-app"),
    }
    values.update(overrides)
    return ProjectConfig(**values)


# ---------------------------------------------------------------------------
# ProjectConfig
# ---------------------------------------------------------------------------


class TestProjectConfig:
    def test_defaults(self):
        config = ProjectConfig(project_name="x", package_name="x")
        assert config.framework is None
        assert config.release_os == list(PLATFORMS)
        assert config.overwrite is False
        assert config.target_dir == Path(DEFAULT_TARGET_DIR)
        assert config.package_manager is PackageManager.NPM

    def test_empty_project_name(self):
        with pytest.raises(ProjectValidationError) as exc_info:
            _config(project_name="   ")
        assert exc_info.value.field == "project name"

    def test_empty_package_name(self):
        with pytest.raises(ProjectValidationError):
            _config(package_name="")

    def test_invalid_package_name(self):
        with pytest.raises(ProjectValidationError) as exc_info:
            _config(package_name="Demo App")
        assert exc_info.value.value == "Demo App"

    def test_package_name_with_trailing_newline_rejected(self):
        with pytest.raises(ProjectValidationError) as exc_info:
            _config(package_name="demo-app\n")
        assert exc_info.value.field == "package name"

    def test_unknown_framework(self):
        with pytest.raises(ProjectValidationError) as exc_info:
            _config(framework="angular")
        assert "angular" in str(exc_info.value)

    def test_unknown_platform(self):
        with pytest.raises(ProjectValidationError):
            _config(release_os=["windows", "beos"])

    def test_duplicate_platforms_removed(self):
        config = _config(release_os=["linux", "windows", "linux"])
        assert config.release_os == ["linux", "windows"]

    def test_empty_platforms_backfilled(self):
        assert _config(release_os=[]).release_os == ["windows", "macos", "linux"]

    def test_wrong_type_is_pydantic_error(self):
        with pytest.raises(ValidationError):
            _config(overwrite="definitely")

    def test_platforms_property(self):
        runners = [p.runner for p in _config().platforms]
        assert runners == ["windows-latest", "ubuntu-latest"]

    def test_framework_spec(self):
        assert _config(framework="sveltekit").framework_spec.uses_shared is False


class TestFromInputs:
    def test_derives_package_name_and_directory(self):
        config = ProjectConfig.from_inputs("  My Tauri App ", framework="vite")
        assert config.project_name == "My Tauri App"
        assert config.package_name == "my-tauri-app"
        assert config.target_dir == Path("My Tauri App")

    def test_explicit_values_win(self):
        config = ProjectConfig.from_inputs(
            "My App",
            package_name="@acme/desktop",
            target_dir="  out/app// ",
            release_os=["macos"],
            overwrite=True,
            package_manager=PackageManager.PNPM,
        )
        assert config.package_name == "@acme/desktop"
        assert config.target_dir == Path("out/app")
        assert config.release_os == ["macos"]
        assert config.overwrite is True
        assert config.package_manager is PackageManager.PNPM

    def test_empty_name_rejected(self):
        with pytest.raises(ProjectValidationError):
            ProjectConfig.from_inputs("   ")

    def test_underivable_package_name_rejected(self):
        with pytest.raises(ProjectValidationError):
            ProjectConfig.from_inputs("App", package_name="Not Valid")

    def test_slash_only_name_falls_back_to_default_directory(self):
        config = ProjectConfig.from_inputs("///")
        assert config.target_dir == Path(DEFAULT_TARGET_DIR)


# ---------------------------------------------------------------------------
# ProjectGenerator
# ---------------------------------------------------------------------------


class TestGenerateCopyMode:
    def test_resolves_target_and_reaches_done(self, settings, workdir):
        generator = ProjectGenerator(settings)
        result = generator.generate(_config(), cwd=workdir)
        assert generator.stage is Stage.DONE
        assert result.target_dir == (workdir / "demo-app").resolve()
        assert result.target_dir.is_absolute()

    def test_original_config_not_mutated(self, settings, workdir):
        config = _config()
        ProjectGenerator(settings).generate(config, cwd=workdir)
        assert config.target_dir == Path("demo-app")

    def test_writes_all_configs(self, settings, workdir):
        result = ProjectGenerator(settings).generate(_config(), cwd=workdir)
        root = result.target_dir
        assert result.rewrites.ok
        assert json.loads((root / "package.json").read_text())["name"] == "demo-app"
        conf = json.loads((root / "src-tauri" / "tauri.conf.json").read_text())
        assert conf["productName"] == "demo-app"
        assert conf["app"]["windows"][0]["title"] == "demo-app"
        assert 'name = "demo-app"' in (root / "src-tauri" / "Cargo.toml").read_text()
        workflow = (root / ".github" / "workflows" / "release.yml").read_text()
        assert "platform: [windows-latest, ubuntu-latest] # macos-latest" in workflow

    def test_sveltekit_skips_overlay(self, settings, workdir):
        result = ProjectGenerator(settings).generate(
            _config(framework="sveltekit"), cwd=workdir
        )
        root = result.target_dir
        assert not (root / "src-tauri" / "icons").exists()
        # Native files come from the SvelteKit tree itself.
        assert 'name = "demo-app"' in (root / "src-tauri" / "Cargo.toml").read_text()
        assert (root / ".github" / "workflows" / "release.yml").is_file()

    def test_next_steps(self, settings, workdir):
        result = ProjectGenerator(settings).generate(
            _config(package_manager=PackageManager.YARN), cwd=workdir
        )
        assert result.next_steps.commands == ["cd demo-app", "yarn", "yarn tauri dev"]

    def test_render_next_steps(self, settings, workdir):
        generator = ProjectGenerator(settings)
        result = generator.generate(_config(), cwd=workdir)
        assert generator.render_next_steps(result).startswith("cd demo-app\n")

    def test_missing_framework_rejected_before_writing(self, settings, workdir):
        generator = ProjectGenerator(settings)
        with pytest.raises(ProjectValidationError):
            generator.generate(_config(framework=None), cwd=workdir)
        assert generator.stage is Stage.FAILED
        assert not (workdir / "demo-app").exists()

    def test_missing_template_fails(self, tmp_path, workdir):
        generator = ProjectGenerator(Settings(templates_dir=tmp_path / "none"))
        with pytest.raises(TemplateNotFoundError):
            generator.generate(_config(), cwd=workdir)
        assert generator.stage is Stage.FAILED

    def test_non_empty_target_fails(self, settings, workdir):
        (workdir / "demo-app").mkdir()
        (workdir / "demo-app" / "keep.txt").write_text("mine")
        generator = ProjectGenerator(settings)
        with pytest.raises(TargetNotEmptyError):
            generator.generate(_config(), cwd=workdir)
        assert (workdir / "demo-app" / "keep.txt").read_text() == "mine"
        assert generator.stage is Stage.FAILED

    def test_overwrite_replaces_content(self, settings, workdir):
        (workdir / "demo-app").mkdir()
        (workdir / "demo-app" / "stale.txt").write_text("old")
        result = ProjectGenerator(settings).generate(_config(overwrite=True), cwd=workdir)
        assert not (result.target_dir / "stale.txt").exists()
        assert (result.target_dir / "package.json").is_file()


class TestGenerateArchiveMode:
    def test_extracts_and_rewrites(self, archive_settings, workdir):
        result = ProjectGenerator(archive_settings).generate(
            _config(framework=None), cwd=workdir
        )
        root = result.target_dir
        assert (root / ".gitignore").is_file()
        assert json.loads((root / "package.json").read_text())["name"] == "demo-app"
        assert 'name = "demo-app"' in (root / "src-tauri" / "Cargo.toml").read_text()
        assert result.rewrites.ok

    def test_framework_ignored(self, archive_settings, workdir):
        generator = ProjectGenerator(archive_settings)
        result = generator.generate(_config(framework="sveltekit"), cwd=workdir)
        assert generator.stage is Stage.DONE
        assert (result.target_dir / "src" / "app" / "page.tsx").is_file()
        assert not (result.target_dir / "src" / "routes").exists()

    def test_missing_archive(self, tmp_path, workdir):
        settings = Settings(templates_dir=tmp_path, use_archive=True)
        with pytest.raises(TemplateNotFoundError):
            ProjectGenerator(settings).generate(_config(), cwd=workdir)
