"""Exceptions raised by the scaffolding pipeline.

Every fatal error derives from :class:`ScaffoldError` so the CLI can report
the first failure with a single ``except`` clause.  Lower-level ``OSError``
instances raised while copying or rewriting files are *not* wrapped.
"""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for all scaffolding failures."""


class ProjectValidationError(ScaffoldError):
    """Raised when a project name, package name or identifier is rejected.

    Always raised before the filesystem is touched.
    """

    def __init__(self, field: str, value: object, message: str) -> None:
        self.field = field
        self.value = value
        super().__init__(f"Invalid {field} {value!r}: {message}")


class TargetNotEmptyError(ScaffoldError):
    """Raised when the target directory has content and overwrite was not granted."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(
            f"Target directory {path} is not empty. "
            "Remove existing files or pass --overwrite."
        )


class TemplateNotFoundError(ScaffoldError):
    """Raised when a framework template directory or archive is missing."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Template not found: {path}")


class TemplateExtractionError(ScaffoldError):
    """Raised when the template archive cannot be extracted.

    The underlying exception is chained as ``__cause__``.
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Failed to extract template archive {path}: {reason}")
