"""
Service configuration.

Configuration in settings.yaml:

```yaml
sheet_access:
  register_auto_login: false
  bcrypt_rounds: 12
  host: "127.0.0.1"
  port: 3000
  log_level: "INFO"
  log_json: false
```

Environment variables (SHEET_ACCESS_*) override file values.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

from .exceptions import ValidationError

logger = logging.getLogger(__name__)

CONFIG_SECTION = "sheet_access"
DEFAULT_CONFIG_PATH = Path.home() / ".sheet_access" / "settings.yaml"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

_ENV_OVERRIDES = {
    "SHEET_ACCESS_AUTO_LOGIN": "register_auto_login",
    "SHEET_ACCESS_BCRYPT_ROUNDS": "bcrypt_rounds",
    "SHEET_ACCESS_HOST": "host",
    "SHEET_ACCESS_PORT": "port",
    "SHEET_ACCESS_LOG_LEVEL": "log_level",
    "SHEET_ACCESS_LOG_JSON": "log_json",
}


def _parse_bool(name: str, value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValidationError(name, "must be a boolean", value)


def _coerce(name: str, type_name: str, value: Any) -> Any:
    """Convert a raw file or environment value to the field's declared type."""
    if type_name == "bool":
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return _parse_bool(name, value)
        raise ValidationError(name, "must be a boolean", str(value))

    if type_name == "int":
        # bool is an int subclass; "port: true" is a mistake, not 1
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                raise ValidationError(name, "must be an integer", value) from None
        raise ValidationError(name, "must be an integer", str(value))

    if not isinstance(value, str):
        raise ValidationError(name, "must be a string", str(value))
    return value


@dataclass(frozen=True)
class AccessConfig:
    """Configuration for the sheet access service.

    Attributes:
        register_auto_login: Log new accounts in as part of registration
        bcrypt_rounds: Cost factor passed to bcrypt.gensalt
        host: Interface the HTTP transport binds to
        port: Port the HTTP transport listens on
        log_level: Root log level name
        log_json: Emit single-line JSON log records
    """

    register_auto_login: bool = False
    bcrypt_rounds: int = 12
    host: str = "127.0.0.1"
    port: int = 3000
    log_level: str = "INFO"
    log_json: bool = False

    def __post_init__(self) -> None:
        if not isinstance(self.log_level, str):
            raise ValidationError("log_level", "must be a level name", str(self.log_level))
        if not 4 <= self.bcrypt_rounds <= 31:
            raise ValidationError("bcrypt_rounds", "must be between 4 and 31", str(self.bcrypt_rounds))
        if not 1 <= self.port <= 65535:
            raise ValidationError("port", "must be between 1 and 65535", str(self.port))
        if logging.getLevelName(self.log_level.upper()) == f"Level {self.log_level.upper()}":
            raise ValidationError("log_level", "unknown log level", self.log_level)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AccessConfig:
        """Build a config from a mapping, ignoring unknown keys.

        Values are converted to each field's declared type, so quoted
        YAML scalars such as ``"false"`` or ``"8080"`` load correctly.

        Raises:
            ValidationError: If a value cannot be converted
        """
        types = {f.name: f.type for f in fields(cls)}
        unknown = set(data) - set(types)
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {sorted(unknown)}")
        return cls(
            **{k: _coerce(k, types[k], v) for k, v in data.items() if k in types}
        )

    @classmethod
    def from_file(cls, path: Path | None = None) -> AccessConfig:
        """Load configuration from the sheet_access section of a YAML file.

        A missing file yields the defaults.
        """
        config_path = path or DEFAULT_CONFIG_PATH
        if not config_path.exists():
            return cls()

        try:
            content = yaml.safe_load(config_path.read_text()) or {}
        except yaml.YAMLError as e:
            raise ValidationError("config", f"invalid YAML: {e}", str(config_path)) from e
        if not isinstance(content, dict):
            raise ValidationError("config", "top level must be a mapping", str(config_path))
        section = content.get(CONFIG_SECTION) or {}
        if not isinstance(section, dict):
            raise ValidationError(CONFIG_SECTION, "section must be a mapping", str(config_path))
        return cls.from_dict(section)

    @classmethod
    def from_environment(cls, base: AccessConfig | None = None) -> AccessConfig:
        """Apply SHEET_ACCESS_* environment overrides on top of ``base``.

        Empty variables are treated as unset.
        """
        config = base or cls()
        types = {f.name: f.type for f in fields(cls)}
        overrides: dict[str, Any] = {}

        for env_name, field_name in _ENV_OVERRIDES.items():
            raw = os.environ.get(env_name)
            if raw:
                overrides[field_name] = _coerce(field_name, types[field_name], raw)

        return replace(config, **overrides)

    @classmethod
    def load(cls, path: Path | None = None) -> AccessConfig:
        """Load the file config, then apply environment overrides."""
        return cls.from_environment(cls.from_file(path))
