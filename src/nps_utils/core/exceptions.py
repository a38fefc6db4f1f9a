"""
Custom exceptions for nps-utils.

Base Exceptions:
- NpsUtilsError: Base exception for all nps-utils errors
  - PackageNotFoundError: A package descriptor could not be resolved
  - BinaryNotFoundError: A package resolved but does not expose the binary
  - ScriptFileError: A package-scripts file cannot be loaded
  - ConfigurationError: Invalid configuration values

Composition functions never raise; only lookups against the filesystem do.
"""

from typing import Any, Dict, Iterable, Optional


class NpsUtilsError(Exception):
    """Base exception for all nps-utils errors."""

    def __init__(
        self,
        message: str,
        *args: Any,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code or "NPS_UTILS_ERROR"
        self.context = context or {}
        super().__init__(message, *args)

    def __str__(self) -> str:
        error_msg = f"[{self.error_code}] {self.message}"
        if self.context:
            error_msg += f"\nContext: {self.context}"
        return error_msg


class PackageNotFoundError(NpsUtilsError):
    """Raised when an installed package cannot be resolved."""

    def __init__(self, package_name: str, search_paths: Iterable[str] = ()):
        self.package_name = package_name
        self.search_paths = list(search_paths)
        super().__init__(
            f"Cannot find module '{package_name}/package.json'",
            error_code="PACKAGE_NOT_FOUND",
            context={"package_name": package_name, "search_paths": self.search_paths},
        )


class BinaryNotFoundError(NpsUtilsError):
    """Raised when a package does not declare the requested binary."""

    def __init__(
        self, package_name: str, bin_name: str, available: Iterable[str] = ()
    ):
        self.package_name = package_name
        self.bin_name = bin_name
        self.available = sorted(available)
        super().__init__(
            f"Package '{package_name}' has no binary named '{bin_name}'",
            error_code="BINARY_NOT_FOUND",
            context={
                "package_name": package_name,
                "bin_name": bin_name,
                "available": self.available,
            },
        )


class ScriptFileError(NpsUtilsError):
    """Raised when a package-scripts file cannot be loaded."""

    def __init__(self, message: str, path: str):
        self.path = path
        super().__init__(
            message, error_code="SCRIPT_FILE_ERROR", context={"path": path}
        )


class ConfigurationError(NpsUtilsError):
    """Raised when there's an error in the configuration."""

    def __init__(self, message: str, *args: Any, field: Optional[str] = None):
        self.field = field
        super().__init__(
            message,
            *args,
            error_code="CONFIG_ERROR",
            context={"field": field} if field else None,
        )
