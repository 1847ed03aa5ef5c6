"""Target directory preparation.

Guarantees that the directory a project is scaffolded into exists and holds
nothing but (optionally) a ``.git`` directory before templates are copied.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from create_tauri_ui.errors import TargetNotEmptyError

logger = logging.getLogger(__name__)

VCS_DIR = ".git"


def is_directory_empty(path: str | Path) -> bool:
    """Return ``True`` if *path* has no entries, or only a ``.git`` entry.

    Hidden files other than ``.git`` count as content.
    """
    entries = [entry.name for entry in Path(path).iterdir()]
    return not entries or entries == [VCS_DIR]


def empty_directory(path: str | Path) -> None:
    """Delete every entry under *path* except ``.git``.

    The directory itself is left in place.
    """
    for entry in Path(path).iterdir():
        if entry.name == VCS_DIR:
            continue
        if entry.is_dir() and not entry.is_symlink():
            shutil.rmtree(entry)
        else:
            entry.unlink()
        logger.debug("Removed %s", entry)


def prepare_target_directory(
    path: str | Path,
    overwrite: bool = False,
    cwd: str | Path | None = None,
) -> Path:
    """Make *path* an existing directory that templates may populate.

    Args:
        path: Target directory, absolute or relative to *cwd*.
        overwrite: Permission to clear existing content.
        cwd: Base for relative paths.  Defaults to the process's working
            directory.

    Returns:
        The resolved absolute directory.

    Raises:
        TargetNotEmptyError: If the directory has content and *overwrite* is
            ``False``.  Nothing is modified in that case.
    """
    base = Path(cwd) if cwd is not None else Path.cwd()
    target = (base / Path(path)).resolve()

    if not target.exists():
        target.mkdir(parents=True)
        logger.info("Created %s", target)
        return target

    if is_directory_empty(target):
        return target

    if not overwrite:
        raise TargetNotEmptyError(target)

    logger.info("Clearing existing content in %s", target)
    empty_directory(target)
    return target
