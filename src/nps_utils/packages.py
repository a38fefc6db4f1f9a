"""
Include the scripts of a sub-package (yarn workspaces or lerna style repos).

Every task of the sub-package is rewritten into a command that changes into
the sub-package directory, runs the task there through the package's own
runner and changes back.
"""

# Standard library imports
import importlib.util
import json
import os
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Union

# Local imports
from .compose import series
from .config import ScriptContext, get_context
from .core.exceptions import ScriptFileError
from .utils.logger import get_logger

logger = get_logger(__name__)

ScriptLoader = Callable[[str], Mapping[str, Any]]

DEFAULT_SCRIPTS_PATH = "./packages/{name}/package-scripts.js"
LOADABLE_SUFFIXES = (".json", ".py")


def load_scripts_file(path: str) -> Mapping[str, Any]:
    """Load a package-scripts file.

    JSON files are parsed as-is. Python files are imported and their public
    module attributes returned, so a module-level ``scripts`` mapping ends up
    under the ``scripts`` key.

    Args:
        path: Path of the file to load

    Returns:
        Mapping holding a ``scripts`` entry

    Raises:
        ScriptFileError: If the file type is not supported
    """
    suffix = Path(path).suffix.lower()

    if suffix == ".json":
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)

    if suffix == ".py":
        if not Path(path).is_file():
            raise FileNotFoundError(path)
        module_name = f"_nps_scripts_{abs(hash(os.path.abspath(path)))}"
        spec = importlib.util.spec_from_file_location(module_name, path)
        if spec is None or spec.loader is None:
            raise ScriptFileError(f"Cannot import scripts from {path}", path=path)
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        return {
            name: value
            for name, value in vars(module).items()
            if not name.startswith("_")
        }

    raise ScriptFileError(
        f"Unsupported package-scripts file type '{suffix or path}'; "
        "pass a load_scripts callable to load it",
        path=path,
    )


def find_scripts_file(
    package_name: str, context: Optional[ScriptContext] = None
) -> str:
    """Return the scripts file of a sub-package that the default loader can read.

    Looks for a ``package-scripts.json`` or ``package-scripts.py`` beside the
    conventional ``package-scripts.js`` and falls back to the ``.js`` path.
    """
    context = context or get_context()
    default_path = DEFAULT_SCRIPTS_PATH.format(name=package_name)
    stem, _ = os.path.splitext(default_path)
    for suffix in LOADABLE_SUFFIXES:
        candidate = f"{stem}{suffix}"
        if os.path.isfile(os.path.join(context.working_dir, candidate)):
            return candidate
    return default_path


def _to_posix(path: str) -> str:
    return path.replace("\\", "/")


def include_package(
    package_name_or_options: Union[str, Mapping[str, str]],
    load_scripts: Optional[ScriptLoader] = None,
    context: Optional[ScriptContext] = None,
) -> Dict[str, Any]:
    """Include the scripts from a sub-package.

    Args:
        package_name_or_options: Either the sub-package name, resolved to
            ``./packages/<name>/package-scripts.js``, or a mapping with a
            ``path`` entry pointing at the scripts file
        load_scripts: Callable loading a scripts file; defaults to
            :func:`load_scripts_file`
        context: Context supplying the working directory and package runner

    Returns:
        Dict of rewritten scripts, shaped like the sub-package's own

    Raises:
        ScriptFileError: If the loaded definitions have no ``scripts`` entry
    """
    context = context or get_context()
    load_scripts = load_scripts or load_scripts_file

    if isinstance(package_name_or_options, str):
        scripts_path = DEFAULT_SCRIPTS_PATH.format(name=package_name_or_options)
    else:
        scripts_path = package_name_or_options["path"]

    starting_dir = str(context.working_dir)
    package_dir = os.path.dirname(os.path.join(starting_dir, scripts_path))
    relative_dir = _to_posix(os.path.relpath(package_dir, starting_dir))
    relative_return = _to_posix(os.path.relpath(starting_dir, package_dir))

    load_path = os.path.join(starting_dir, scripts_path)
    definitions = load_scripts(load_path)
    logger.debug("Loaded package scripts from %s", load_path)

    if not isinstance(definitions, Mapping) or "scripts" not in definitions:
        raise ScriptFileError(
            f"No scripts defined in {scripts_path}", path=scripts_path
        )

    def run_in_package(task_path: str) -> str:
        return series(
            f"cd {relative_dir}",
            f"{context.package_runner} {task_path}",
            f'cd "{relative_return}"',
        )

    def replace(scripts: Mapping[str, Any], prefix: str) -> Dict[str, Any]:
        rewritten: Dict[str, Any] = {}
        dot = "." if prefix else ""
        for key, value in scripts.items():
            if key == "description":
                rewritten[key] = value
            elif key == "script":
                rewritten[key] = run_in_package(prefix)
            elif isinstance(value, str):
                rewritten[key] = run_in_package(f"{prefix}{dot}{key}")
            elif isinstance(value, Mapping):
                rewritten[key] = replace(value, f"{prefix}{dot}{key}")
            else:
                rewritten[key] = value
        return rewritten

    return replace(definitions["scripts"], "")
