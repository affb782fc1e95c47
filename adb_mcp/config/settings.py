"""
Unified configuration management for adb-mcp.

Supports loading from:
- Environment variables (.env is loaded by the entry point)
- YAML config files (adb-mcp.yaml)

Priority (highest to lowest):
1. Environment variables
2. YAML config files
3. Default values

Usage:
    from adb_mcp.config import settings

    settings.adb.adb_path
    settings.log.level

    # Reload from environment and files
    settings.reload()
"""

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional

import yaml

from adb_mcp.logging import LogConfig, LogLevel


# =============================================================================
# Configuration Dataclasses
# =============================================================================

@dataclass
class AdbSettings:
    """adb invocation configuration."""
    adb_path: str = "adb"
    max_output_bytes: int = 10 * 1024 * 1024
    timeout: Optional[float] = None
    encoding: str = "utf-8"
    temp_prefix: str = "adb-mcp"


@dataclass
class LogSettings:
    """Logging configuration."""
    level: str = "INFO"
    json_format: bool = False

    def to_log_config(self) -> LogConfig:
        """Build the LogConfig handed to configure_logging()."""
        return LogConfig(level=LogLevel.parse(self.level), json_format=self.json_format)


@dataclass
class ServerSettings:
    """MCP server identity."""
    name: str = "ADB MCP Server"
    version: str = "0.1.0"


def _as_bool(value: str) -> bool:
    return value.lower() in ("true", "1", "yes")


def _env_number(name: str, convert: Callable[[str], Any]) -> Any:
    """Read a numeric env var. A malformed value is reported and ignored."""
    val = os.getenv(name)
    if not val:
        return None
    try:
        return convert(val)
    except ValueError:
        # Logging is not configured yet; stdout belongs to the protocol
        print(f"Warning: Ignoring invalid {name}={val!r}", file=sys.stderr)
        return None


@dataclass
class Settings:
    """
    Main settings container.

    Provides unified access to all configuration.
    """
    adb: AdbSettings = field(default_factory=AdbSettings)
    log: LogSettings = field(default_factory=LogSettings)
    server: ServerSettings = field(default_factory=ServerSettings)

    # Internal state
    _config_file: Optional[Path] = None
    _env_prefix: str = "ADB_MCP_"

    def __post_init__(self):
        """Load configuration after initialization."""
        self._load_from_yaml()
        self._load_from_env()

    def _load_from_env(self):
        """Load settings from environment variables."""
        prefix = self._env_prefix

        # adb settings
        if val := os.getenv(f"{prefix}ADB_PATH"):
            self.adb.adb_path = val
        if (val := _env_number(f"{prefix}MAX_OUTPUT_BYTES", int)) is not None:
            self.adb.max_output_bytes = val
        if (val := _env_number(f"{prefix}TIMEOUT", float)) is not None:
            self.adb.timeout = val
        if val := os.getenv(f"{prefix}ENCODING"):
            self.adb.encoding = val
        if val := os.getenv(f"{prefix}TEMP_PREFIX"):
            self.adb.temp_prefix = val

        # Log settings; bare LOG_LEVEL kept for existing client configs
        if val := os.getenv("LOG_LEVEL"):
            self.log.level = val.upper()
        if val := os.getenv(f"{prefix}LOG_LEVEL"):
            self.log.level = val.upper()
        if val := os.getenv(f"{prefix}LOG_JSON"):
            self.log.json_format = _as_bool(val)

        # Server settings
        if val := os.getenv(f"{prefix}SERVER_NAME"):
            self.server.name = val

    def _load_from_yaml(self):
        """Load settings from the first YAML config file found."""
        search_paths = [
            Path.cwd() / "adb-mcp.yaml",
            Path.cwd() / "adb-mcp.yml",
            Path.home() / ".adb-mcp" / "config.yaml",
        ]

        for config_path in search_paths:
            if config_path.exists():
                self._config_file = config_path
                self._apply_yaml_config(config_path)
                break

    def _apply_yaml_config(self, path: Path):
        """Apply config from YAML file."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            # Logging is not configured yet; stdout belongs to the protocol
            print(f"Warning: Failed to load config from {path}: {e}", file=sys.stderr)
            return

        for section_name in ("adb", "log", "server"):
            section = data.get(section_name)
            if not isinstance(section, dict):
                continue
            target = getattr(self, section_name)
            for key, val in section.items():
                if hasattr(target, key):
                    setattr(target, key, val)

    def reload(self):
        """Reload configuration from all sources."""
        self.adb = AdbSettings()
        self.log = LogSettings()
        self.server = ServerSettings()

        self._load_from_yaml()
        self._load_from_env()

    def to_dict(self) -> dict[str, Any]:
        """Convert settings to dictionary."""
        return {
            "adb": {
                "adb_path": self.adb.adb_path,
                "max_output_bytes": self.adb.max_output_bytes,
                "timeout": self.adb.timeout,
                "encoding": self.adb.encoding,
                "temp_prefix": self.adb.temp_prefix,
            },
            "log": {
                "level": self.log.level,
                "json_format": self.log.json_format,
            },
            "server": {
                "name": self.server.name,
                "version": self.server.version,
            },
        }

    def __repr__(self) -> str:
        return f"Settings(config_file={self._config_file})"


# =============================================================================
# Global Settings Instance
# =============================================================================

settings = Settings()


def get_settings() -> Settings:
    """Get the global settings instance."""
    return settings
