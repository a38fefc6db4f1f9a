"""Shell quoting helpers.

Uses ``mslex`` on Windows for cmd.exe-compatible quoting and ``shlex``
elsewhere; both expose the same ``quote`` function.
"""

# Standard library imports
import shlex
from types import ModuleType
from typing import Sequence, Union

# Third-party imports
import mslex

# Local imports
from .environment import is_windows


def _lex() -> ModuleType:
    """Return the quoting module for the current platform."""
    return mslex if is_windows() else shlex


def shell_escape(arg: Union[str, Sequence[str]]) -> str:
    """Escape a string so the shell expands it to the original.

    Args:
        arg: A single argument, or a sequence of arguments which the shell
            will expand into that many separate words

    Returns:
        str: Text ready to be embedded in a command line
    """
    lex = _lex()
    if isinstance(arg, str):
        return lex.quote(arg)
    return " ".join(lex.quote(member) for member in arg)


def quote_script(script: str, escaped: bool = False) -> str:
    """Wrap a task name in double quotes if it contains a space."""
    quote = '\\"' if escaped else '"'
    if " " in script:
        return f"{quote}{script}{quote}"
    return script


def one_line(text: str) -> str:
    """Collapse a multi-line template into a single line.

    Every line is stripped of surrounding whitespace and blank lines are
    dropped before the rest is joined with single spaces.
    """
    return " ".join(line.strip() for line in text.splitlines() if line.strip())
