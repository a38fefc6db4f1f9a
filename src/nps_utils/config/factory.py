"""Default context management."""

# Standard library imports
from typing import Optional

# Local imports
from .base import ScriptContext


class ContextFactory:
    """Creates and caches the context used when a composer receives none."""

    _default: Optional[ScriptContext] = None

    @classmethod
    def get_context(cls, force_refresh: bool = False) -> ScriptContext:
        """
        Get the default context, building it on first use.

        Args:
            force_refresh: Whether to force creation of a new instance.

        Returns:
            ScriptContext instance.
        """
        if force_refresh or cls._default is None:
            cls._default = ScriptContext()
        return cls._default

    @classmethod
    def clear_cache(cls) -> None:
        """Drop the cached default context."""
        cls._default = None


def get_context(force_refresh: bool = False) -> ScriptContext:
    """Get the default context used when a composer receives none.

    Args:
        force_refresh: If True, create a new context even if one exists

    Returns:
        ScriptContext instance
    """
    return ContextFactory.get_context(force_refresh=force_refresh)


def clear_context() -> None:
    """Clear the default context instance."""
    ContextFactory.clear_cache()
