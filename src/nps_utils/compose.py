"""
Command composers for package scripts.

Every function here returns a command string and never raises for falsy
input: ``None``, ``False`` and empty strings are treated as absent tasks so
callers can switch tasks off inline.
"""

# Standard library imports
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

# Local imports
from .bins import run_bin
from .config import ScriptContext, get_context
from .environment import is_ci, is_windows
from .shell import one_line, quote_script, shell_escape
from .utils.logger import get_logger

logger = get_logger(__name__)

Task = Union[str, Mapping[str, Any], None, bool]


def get_default_context() -> ScriptContext:
    """Return the context used by composers called without one."""
    return get_context()


def set_colors(colors: Sequence[str]) -> None:
    """Set the colors used by concurrent scripts.

    Replaces the palette of the default context for every later call. Meant
    to be called once from a configuration script before composing.

    Example:
        set_colors(["white.bgBlue.bold", "black.bgYellow.dim", "white.bgGreen"])
    """
    get_context().set_colors(list(colors))


def series(*scripts: Optional[str]) -> str:
    """Join the truthy scripts with ``&&``.

    Example:
        >>> series("eslint", None, "jest")
        'eslint && jest'
    """
    return " && ".join(script for script in scripts if script)


def series_by_name(
    *script_names: Optional[str], context: Optional[ScriptContext] = None
) -> str:
    """Run the named tasks one after another through the task runner.

    Example:
        >>> series_by_name("lint", "test --coverage")
        'nps lint && nps "test --coverage"'
    """
    context = context or get_context()
    names = (name.strip() for name in script_names if name)
    return series(
        *(f"{context.runner} {quote_script(name)}" for name in names if name)
    )


def concurrent(
    scripts: Mapping[str, Task], context: Optional[ScriptContext] = None
) -> str:
    """Build a ``concurrently`` command running the given scripts in parallel.

    Each task is labelled with its key and colored either with its own
    ``color`` or with the palette entry at its position. Skipped tasks still
    take up their palette slot.

    Args:
        scripts: Mapping of label to a command string or to a mapping with a
            ``script`` and an optional ``color``
        context: Context supplying the palette and the interpreter

    Returns:
        str: The command to run
    """
    context = context or get_context()
    names: List[str] = []
    colors: List[str] = []
    commands: List[str] = []

    for index, (name, task) in enumerate(scripts.items()):
        if not task:
            continue
        if isinstance(task, str):
            task = {"script": task}
        elif not isinstance(task, Mapping):
            continue
        script = task.get("script")
        if not script:
            continue
        names.append(name)
        colors.append(task.get("color") or context.default_color(index))
        commands.append(script)

    flags = [
        "--kill-others-on-fail",
        f'--prefix-colors "{",".join(colors)}"',
        '--prefix "[{name}]"',
        f'--names "{",".join(names)}"',
        shell_escape(commands),
    ]
    command = f"{run_bin('concurrently', context=context)} {' '.join(flags)}"
    logger.debug("Composed concurrent command for %s", names)
    return command


def concurrent_by_name(
    *script_names: Union[str, Mapping[str, Any], None, bool],
    context: Optional[ScriptContext] = None,
) -> str:
    """Run the named tasks in parallel through the task runner.

    Entries may be names or mappings with a ``script`` name and an optional
    ``color``. Tasks are labelled with the first word of their name; a later
    task with the same label replaces the earlier one.
    """
    context = context or get_context()
    tasks: Dict[str, Dict[str, Any]] = {}

    for index, entry in enumerate(script_names):
        if not entry:
            continue
        color = context.colors[index] if index < len(context.colors) else None
        if isinstance(entry, str):
            entry = {"script": entry, "color": color}
        elif isinstance(entry, Mapping):
            entry = {"color": color, **entry}
        else:
            continue

        script = entry.get("script")
        if not script:
            continue
        name = script.split(" ")[0]
        tasks[name] = {
            "script": f"{context.runner} {quote_script(script.strip())}",
            "color": entry.get("color"),
        }

    return concurrent(tasks, context=context)


def run_in_new_window(command: str, context: Optional[ScriptContext] = None) -> str:
    """Return a command running ``command`` in a new terminal window or tab.

    Experimental: supports Windows cmd (new window) and Terminal.app
    (new tab) only.
    """
    context = context or get_context()
    cwd = context.working_dir
    if is_windows():
        return f'start cmd /k "cd {cwd} && {command}"'
    return one_line(
        f"""
        osascript
        -e 'tell application "Terminal"'
        -e 'tell application "System Events"
        to keystroke "t" using {{command down}}'
        -e 'do script "cd {cwd} && {command}" in front window'
        -e 'end tell'
        """
    )


def run_in_new_window_by_name(
    script_name: str, context: Optional[ScriptContext] = None
) -> str:
    """Open a new window running the named task through the local runner."""
    context = context or get_context()
    escaped = quote_script(script_name, escaped=True)
    return run_in_new_window(
        f"{context.interpreter} node_modules/.bin/{context.runner} {escaped}",
        context=context,
    )


def if_windows(script: str, alt_script: str) -> str:
    """Return ``script`` on Windows and ``alt_script`` elsewhere."""
    return script if is_windows() else alt_script


def if_not_windows(script: str, alt_script: str) -> str:
    """Return ``script`` off Windows and ``alt_script`` on Windows."""
    return if_windows(alt_script, script)


def if_ci(script: str, alt_script: str) -> str:
    """Return ``script`` on a CI server and ``alt_script`` elsewhere."""
    return script if is_ci() else alt_script


def if_not_ci(script: str, alt_script: str) -> str:
    """Return ``script`` off CI and ``alt_script`` on a CI server."""
    return if_ci(alt_script, script)


# Wrappers around binaries shipped as dependencies of the script package


def rimraf(args: str, context: Optional[ScriptContext] = None) -> str:
    """Remove files and directories recursively (http://npm.im/rimraf)."""
    return f"{run_bin('rimraf', context=context)} {args}"


def copy(args: str, context: Optional[ScriptContext] = None) -> str:
    """Copy files matching globs (http://npm.im/cpy-cli)."""
    return f"{run_bin('cpy-cli', 'cpy', context=context)} {args}"


def ncp(args: str, context: Optional[ScriptContext] = None) -> str:
    """Copy a directory tree (http://npm.im/ncp)."""
    return f"{run_bin('ncp', context=context)} {args}"


def mkdirp(args: str, context: Optional[ScriptContext] = None) -> str:
    """Create directories with their parents (http://npm.im/mkdirp)."""
    return f"{run_bin('mkdirp', context=context)} {args}"


def open_url(args: str, context: Optional[ScriptContext] = None) -> str:
    """Open a URL or file in the default app (http://npm.im/opn-cli)."""
    return f"{run_bin('opn-cli', 'opn', context=context)} {args}"


def cross_env(args: str, context: Optional[ScriptContext] = None) -> str:
    """Set environment variables portably (http://npm.im/cross-env)."""
    return f"{run_bin('cross-env', context=context)} {args}"


remove_recursively = rimraf
copy_files = copy
copy_directory = ncp
make_directories = mkdirp
with_env = cross_env
