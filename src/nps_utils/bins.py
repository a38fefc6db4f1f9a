"""Locate executables declared by installed node packages."""

# Standard library imports
import json
import os
from pathlib import Path
from typing import List, Optional

# Local imports
from .config import ScriptContext, get_context
from .core.exceptions import BinaryNotFoundError, PackageNotFoundError
from .utils.logger import get_logger

logger = get_logger(__name__)


def _candidate_descriptors(package_name: str, start: Path) -> List[Path]:
    """List ``node_modules/<package>/package.json`` paths in lookup order."""
    start = start.resolve()
    return [
        directory / "node_modules" / package_name / "package.json"
        for directory in (start, *start.parents)
        if directory.name != "node_modules"
    ]


def _resolve_descriptor(package_name: str, start: Path) -> Path:
    """Resolve a package's ``package.json`` the way node's require does.

    Raises:
        PackageNotFoundError: If no ancestor ``node_modules`` holds the package
    """
    candidates = _candidate_descriptors(package_name, start)
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    raise PackageNotFoundError(
        package_name, search_paths=[str(c.parent.parent) for c in candidates]
    )


def get_bin(
    package_name: str,
    bin_name: Optional[str] = None,
    context: Optional[ScriptContext] = None,
) -> str:
    """Get the path to one of the bin scripts exported by a package.

    Args:
        package_name: Name of the npm package
        bin_name: Name of the script; defaults to ``package_name``. Ignored
            when the package declares a single binary
        context: Context supplying the working directory

    Returns:
        str: Path to the script, relative to the working directory

    Raises:
        PackageNotFoundError: If the package is not installed
        BinaryNotFoundError: If the package does not declare ``bin_name``
    """
    context = context or get_context()
    bin_name = bin_name or package_name
    cwd = context.working_dir

    descriptor = _resolve_descriptor(package_name, cwd)
    try:
        with open(descriptor, "r", encoding="utf-8") as f:
            metadata = json.load(f)
    except json.JSONDecodeError as e:
        raise PackageNotFoundError(
            package_name, search_paths=[str(descriptor.parent)]
        ) from e

    bin_relative = metadata.get("bin") if isinstance(metadata, dict) else None
    if isinstance(bin_relative, dict):
        available = bin_relative.keys()
        bin_relative = bin_relative.get(bin_name)
        if not bin_relative:
            raise BinaryNotFoundError(package_name, bin_name, available)
    if not bin_relative or not isinstance(bin_relative, str):
        raise BinaryNotFoundError(package_name, bin_name)

    full_bin_path = os.path.normpath(os.path.join(descriptor.parent, bin_relative))
    relative = os.path.relpath(full_bin_path, cwd.resolve())
    logger.debug("Resolved binary %s/%s to %s", package_name, bin_name, relative)
    return relative


def run_bin(
    package_name: str,
    bin_name: Optional[str] = None,
    context: Optional[ScriptContext] = None,
) -> str:
    """Return a command running a package binary through the interpreter."""
    context = context or get_context()
    return f"{context.interpreter} {get_bin(package_name, bin_name, context)}"
