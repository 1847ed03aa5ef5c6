"""Template materialization.

Populates a prepared target directory from one of two template sources:

* a framework template tree, optionally followed by the shared overlay
  (``copy_tree``), or
* a single packaged zip archive (``extract_archive``).

Files that ``ConfigRewriter`` writes itself are never copied here, and a
small rename table restores names that cannot be shipped verbatim (npm strips
``.gitignore`` from published packages, so templates ship ``_gitignore``).
"""

from __future__ import annotations

import logging
import shutil
import zipfile
from pathlib import Path

from create_tauri_ui.errors import TemplateExtractionError, TemplateNotFoundError

logger = logging.getLogger(__name__)


RENAME_FILES: dict[str, str] = {
    "_gitignore": ".gitignore",
}

PACKAGE_MANIFEST = "package.json"
APP_DESCRIPTOR = "tauri.conf.json"
NATIVE_MANIFEST = "Cargo.toml"

# Rewritten by ConfigRewriter instead of being copied.
DEFERRED_FILES: frozenset[str] = frozenset(
    {PACKAGE_MANIFEST, APP_DESCRIPTOR, NATIVE_MANIFEST}
)


def renamed(relative: Path) -> Path:
    """Apply the rename table to the final component of *relative*."""
    new_name = RENAME_FILES.get(relative.name)
    if new_name is None:
        return relative
    return relative.with_name(new_name)


def apply_renames(root: str | Path) -> list[Path]:
    """Rename every file under *root* whose name appears in ``RENAME_FILES``.

    Returns the new paths.  An existing file at the destination is replaced.
    """
    root = Path(root)
    result: list[Path] = []
    for old_name, new_name in RENAME_FILES.items():
        for match in sorted(root.rglob(old_name)):
            if not match.is_file():
                continue
            destination = match.with_name(new_name)
            match.replace(destination)
            logger.debug("Renamed %s -> %s", match, destination.name)
            result.append(destination)
    return result


class TemplateMaterializer:
    """Copies or extracts template files into a target directory.

    Attributes:
        target_dir: Absolute, existing directory to populate.
    """

    def __init__(self, target_dir: str | Path) -> None:
        self.target_dir = Path(target_dir)

    # -- Directory-tree mode -----------------------------------------------

    def copy_tree(
        self,
        template_dir: str | Path,
        shared_dir: str | Path | None = None,
    ) -> list[Path]:
        """Copy a framework template and, if given, the shared overlay.

        Args:
            template_dir: Framework template root.
            shared_dir: Overlay copied after the framework files.  ``None``
                skips the overlay; a missing overlay directory is ignored.

        Returns:
            Every file written, in copy order.

        Raises:
            TemplateNotFoundError: If *template_dir* does not exist.
        """
        template_dir = Path(template_dir)
        if not template_dir.is_dir():
            raise TemplateNotFoundError(template_dir)

        written: list[Path] = []
        for source in sorted(template_dir.rglob("*")):
            if not source.is_file() or source.name in DEFERRED_FILES:
                continue
            relative = renamed(source.relative_to(template_dir))
            written.append(self._copy_file(source, relative))

        if shared_dir is not None:
            written.extend(self.copy_overlay(shared_dir))

        logger.info("Copied %d template file(s) into %s", len(written), self.target_dir)
        return written

    def copy_overlay(self, shared_dir: str | Path) -> list[Path]:
        """Copy every entry of the shared overlay, creating directories as found."""
        shared_dir = Path(shared_dir)
        if not shared_dir.is_dir():
            logger.debug("No shared overlay at %s", shared_dir)
            return []

        written: list[Path] = []
        for source in sorted(shared_dir.rglob("*")):
            relative = source.relative_to(shared_dir)
            if source.is_dir():
                (self.target_dir / relative).mkdir(parents=True, exist_ok=True)
            else:
                written.append(self._copy_file(source, relative))
        return written

    def _copy_file(self, source: Path, relative: Path) -> Path:
        destination = self.target_dir / relative
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source, destination)
        logger.debug("Copied %s", relative.as_posix())
        return destination

    # -- Archive mode ------------------------------------------------------

    def extract_archive(self, archive_path: str | Path) -> list[Path]:
        """Extract a zip template into the target, then apply the rename table.

        A failed extraction may leave a partially populated target; rerunning
        with overwrite clears it.

        Returns:
            Every extracted file, after renaming.

        Raises:
            TemplateNotFoundError: If the archive does not exist.
            TemplateExtractionError: If the archive is corrupt or cannot be
                written out.
        """
        archive_path = Path(archive_path)
        if not archive_path.is_file():
            raise TemplateNotFoundError(archive_path)

        try:
            with zipfile.ZipFile(archive_path) as archive:
                names = [info.filename for info in archive.infolist() if not info.is_dir()]
                archive.extractall(self.target_dir)
        except (zipfile.BadZipFile, OSError) as exc:
            raise TemplateExtractionError(archive_path, str(exc)) from exc

        apply_renames(self.target_dir)
        written = [self.target_dir / renamed(Path(name)) for name in sorted(names)]
        logger.info(
            "Extracted %d file(s) from %s into %s",
            len(written),
            archive_path.name,
            self.target_dir,
        )
        return written
