"""Locating and validating external executables.

Resolution order:
1) the explicitly configured path, validated as-is (no fallback);
2) otherwise the first executable match in the process's `PATH`.

Also holds the working-directory contract every façade applies before use.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from core.domain.errors import BinaryNotFound, NotExecutable
from core.domain.models import BinaryDescriptor
from core.domain.semver import SemVer

logger = logging.getLogger(__name__)


def check_binary(path: Path, *, name: str | None = None) -> Path:
    """Confirm `path` is an existing, regular, executable file.

    Returns the absolute path. A directory raises `NotExecutable`, a missing
    path raises `BinaryNotFound`.
    """

    label = name or path.name
    if not path.exists():
        raise BinaryNotFound(f"{label} binary file not found: {path}", path=str(path))
    if not path.is_file():
        raise NotExecutable(f"{label} binary path is not a regular file: {path}", path=str(path))
    if not os.access(path, os.X_OK):
        raise NotExecutable(f"{label} binary file is not executable: {path}", path=str(path))
    return path.absolute()


def search_path(name: str, *, path_env: str | None = None) -> Path:
    """Find `name` in the executable search path, first match wins."""

    if not name or not name.strip():
        raise BinaryNotFound("Binary name must not be empty")

    raw = path_env if path_env is not None else os.environ.get("PATH", "")
    for directory in raw.split(os.pathsep):
        if not directory:
            continue
        candidate = Path(directory) / name
        if candidate.is_file() and os.access(candidate, os.X_OK):
            logger.debug("Found %s in PATH at %s", name, candidate)
            return candidate.absolute()

    raise BinaryNotFound(f"{name} not found in PATH", path=name)


def resolve_binary(
    name: str,
    explicit_path: Path | str | None = None,
    *,
    path_env: str | None = None,
) -> Path:
    if not name or not name.strip():
        raise BinaryNotFound("Binary name must not be empty")
    if explicit_path is not None and str(explicit_path).strip():
        return check_binary(Path(explicit_path).expanduser(), name=name)
    return search_path(name, path_env=path_env)


def describe_binary(
    name: str,
    minimum_version: str,
    explicit_path: Path | str | None = None,
    *,
    path_env: str | None = None,
) -> BinaryDescriptor:
    """Resolve `name` and wrap it into an immutable `BinaryDescriptor`."""

    resolved = resolve_binary(name, explicit_path, path_env=path_env)
    return BinaryDescriptor(
        name=name,
        minimum_version=SemVer.parse(minimum_version),
        resolved_path=resolved,
    )


def ensure_working_directory(path: Path | str) -> Path:
    """Create `path` (with parents) if it does not exist yet.

    Raises `OSError` (e.g. `NotADirectoryError`, `PermissionError`) when the
    directory cannot be created or an existing entry is not a directory.
    """

    directory = Path(path).expanduser()
    if directory.is_dir():
        return directory.absolute()
    if directory.exists():
        raise NotADirectoryError(f"Working directory is not a directory: {directory}")
    directory.mkdir(parents=True, exist_ok=True)
    logger.info("Created working directory %s", directory)
    return directory.absolute()
