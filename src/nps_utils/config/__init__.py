# nps_utils/config/__init__.py
"""Configuration management."""

# Local imports
from .base import DEFAULT_COLORS, ScriptContext
from .factory import clear_context, get_context

__all__ = [
    "DEFAULT_COLORS",
    "ScriptContext",
    "get_context",
    "clear_context",
]
