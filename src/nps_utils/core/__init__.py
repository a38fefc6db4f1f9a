"""Core types shared across nps-utils."""

from .exceptions import (
    BinaryNotFoundError,
    ConfigurationError,
    NpsUtilsError,
    PackageNotFoundError,
    ScriptFileError,
)

__all__ = [
    "NpsUtilsError",
    "PackageNotFoundError",
    "BinaryNotFoundError",
    "ScriptFileError",
    "ConfigurationError",
]
