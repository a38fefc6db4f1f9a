"""
nps-utils - Utilities for composing package-script commands.

Every helper returns a command string for the task runner to execute; nothing
here runs a process itself. Package metadata is read from the installed
distribution when available, otherwise the defaults below are kept.
"""

from importlib import metadata as importlib_metadata

# Local/package imports
from .bins import get_bin, run_bin
from .compose import (
    concurrent,
    concurrent_by_name,
    copy,
    copy_directory,
    copy_files,
    cross_env,
    get_default_context,
    if_ci,
    if_not_ci,
    if_not_windows,
    if_windows,
    make_directories,
    mkdirp,
    ncp,
    open_url,
    remove_recursively,
    rimraf,
    run_in_new_window,
    run_in_new_window_by_name,
    series,
    series_by_name,
    set_colors,
    with_env,
)
from .config import DEFAULT_COLORS, ScriptContext
from .core.exceptions import (
    BinaryNotFoundError,
    ConfigurationError,
    NpsUtilsError,
    PackageNotFoundError,
    ScriptFileError,
)
from .environment import ci_vendor, is_ci, is_windows
from .packages import include_package, load_scripts_file
from .shell import one_line, quote_script, shell_escape
from .utils.logger import get_logger

# Configure package-level logger
package_logger = get_logger(__name__)

__version__ = "0.0.0"
__title__ = "nps-utils"


def get_metadata():
    """Extract version and title from the package distribution when available."""

    global __version__, __title__

    try:
        _meta = importlib_metadata.metadata("nps-utils")
    except importlib_metadata.PackageNotFoundError:
        return

    __version__ = _meta.get("Version", __version__)
    __title__ = _meta.get("Name", __title__)


get_metadata()

__all__ = [
    "__version__",
    "__title__",
    # composition
    "series",
    "series_by_name",
    "concurrent",
    "concurrent_by_name",
    "run_in_new_window",
    "run_in_new_window_by_name",
    "if_windows",
    "if_not_windows",
    "if_ci",
    "if_not_ci",
    "rimraf",
    "copy",
    "ncp",
    "mkdirp",
    "open_url",
    "cross_env",
    "remove_recursively",
    "copy_files",
    "copy_directory",
    "make_directories",
    "with_env",
    "set_colors",
    "get_default_context",
    "include_package",
    "load_scripts_file",
    # helpers
    "shell_escape",
    "quote_script",
    "one_line",
    "get_bin",
    "run_bin",
    "is_windows",
    "is_ci",
    "ci_vendor",
    # configuration
    "ScriptContext",
    "DEFAULT_COLORS",
    # errors
    "NpsUtilsError",
    "PackageNotFoundError",
    "BinaryNotFoundError",
    "ScriptFileError",
    "ConfigurationError",
]
