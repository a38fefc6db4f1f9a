"""Script composition context."""

# Standard library imports
import os
from dataclasses import MISSING, Field, dataclass, field
from pathlib import Path
from typing import List, Optional

# Local imports
from ..core.exceptions import ConfigurationError

DEFAULT_COLORS: List[str] = [
    "bgBlue.bold",
    "bgMagenta.bold",
    "bgGreen.bold",
    "bgBlack.bold",
    "bgCyan.bold",
    "bgRed.bold",
    "bgWhite.bold",
    "bgYellow.bold",
]

ENV_PREFIX = "NPS_UTILS_"


@dataclass
class ScriptContext:
    """Settings threaded through every composition call.

    Attributes:
        colors: Palette cycled through for tasks without an explicit color
        runner: Command that invokes a named task (``nps <name>``)
        package_runner: Command that invokes a task inside a sub-package
        interpreter: Program used to run located package binaries
        cwd: Directory commands are made relative to; the process working
            directory when unset
    """

    colors: List[str] = field(default_factory=lambda: list(DEFAULT_COLORS))
    runner: str = field(default="nps")
    package_runner: str = field(default="npm start")
    interpreter: str = field(default="node")
    cwd: Optional[Path] = field(default=None)

    def __post_init__(self):
        self._load_from_env()
        self._validate()

    @property
    def working_dir(self) -> Path:
        return Path(self.cwd) if self.cwd else Path.cwd()

    def _is_default(self, field_value: Field) -> bool:
        """Return True if the caller left the field at its default."""
        if field_value.default_factory is not MISSING:
            default = field_value.default_factory()
        else:
            default = field_value.default
        return getattr(self, field_value.name) == default

    def _load_from_env(self) -> None:
        """Load ``NPS_UTILS_*`` environment variables into fields left unset.

        Values passed to the constructor take precedence over the environment.
        """
        for field_name, field_value in self.__class__.__dataclass_fields__.items():
            env_key = f"{ENV_PREFIX}{field_name.upper()}"
            env_value = os.getenv(env_key)
            if env_value is None or not self._is_default(field_value):
                continue

            env_value = env_value.strip()
            if field_value.type == List[str]:
                value = [s.strip() for s in env_value.split(",") if s.strip()]
            elif field_value.type == Optional[Path]:
                value = Path(os.path.expanduser(env_value)) if env_value else None
            else:
                value = env_value
            setattr(self, field_name, value)

    def _validate(self) -> None:
        if not self.colors:
            raise ConfigurationError("Color palette must not be empty", field="colors")
        if not all(isinstance(color, str) and color for color in self.colors):
            raise ConfigurationError(
                "Colors must be non-empty strings", field="colors"
            )
        for name in ("runner", "package_runner", "interpreter"):
            if not getattr(self, name):
                raise ConfigurationError(f"{name} must not be empty", field=name)

    def default_color(self, index: int) -> str:
        """Return the palette entry for ``index``, cycling through the palette."""
        return self.colors[index % len(self.colors)]

    def set_colors(self, colors: List[str]) -> None:
        """Replace the palette wholesale."""
        previous = self.colors
        self.colors = list(colors)
        try:
            self._validate()
        except ConfigurationError:
            self.colors = previous
            raise
