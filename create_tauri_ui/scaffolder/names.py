"""Project and package name helpers.

Pure functions with no side effects: invalid input yields ``False`` or a
best-effort value and the caller decides whether to reject or re-prompt.

Examples::

    is_valid_package_name("@acme/my-app")       -> True
    to_valid_package_name("My Awesome App!!")   -> "my-awesome-app-"
    format_target_directory("  my-app/// ")     -> "my-app"
"""

from __future__ import annotations

import re

_PACKAGE_NAME_RE = re.compile(
    r"(?:@[a-z0-9\-*~][a-z0-9\-._~]*/)?[a-z0-9\-~][a-z0-9\-._~]*"
)


def is_valid_package_name(name: str) -> bool:
    """Return ``True`` if *name* is an acceptable npm package name.

    An optional ``@scope/`` prefix is allowed.  Uppercase letters and a
    leading dot or underscore on the final segment are rejected.
    """
    return _PACKAGE_NAME_RE.fullmatch(name) is not None


def to_valid_package_name(name: str) -> str:
    """Normalise a display name into a candidate package name.

    * Trims and lowercases the input.
    * Replaces whitespace runs with a single hyphen.
    * Drops one leading ``.`` or ``_``.
    * Collapses runs of characters outside ``[a-z0-9-~]`` into one hyphen.

    The result is not guaranteed to be valid; re-check it with
    :func:`is_valid_package_name`.
    """
    result = re.sub(r"\s+", "-", name.strip().lower())
    result = re.sub(r"^[._]", "", result)
    return re.sub(r"[^a-z0-9\-~]+", "-", result)


def format_target_directory(path: str | None) -> str:
    """Trim whitespace and trailing slashes from a user-entered directory.

    An empty string tells the caller to substitute its default.
    """
    if not path:
        return ""
    return path.strip().rstrip("/")
