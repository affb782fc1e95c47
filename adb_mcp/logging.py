"""
Structured logging for adb-mcp.

All log output goes to stderr. stdout is reserved for the MCP protocol
stream, so anything printed there would corrupt the client connection.

Usage:
    from adb_mcp.logging import configure_logging, get_logger, LogConfig, LogLevel

    configure_logging(LogConfig(level=LogLevel.DEBUG))
    logger = get_logger("runner")
    logger.info("Executing command", command="adb devices")
"""

import json
import sys
import time
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Optional, TextIO


class LogLevel(Enum):
    """Log severity levels."""
    ERROR = "ERROR"
    WARN = "WARN"
    INFO = "INFO"
    DEBUG = "DEBUG"

    @classmethod
    def parse(cls, value: str | int | None, default: "LogLevel | None" = None) -> "LogLevel":
        """
        Parse a level from a name or a numeric tier.

        Numeric tiers follow the LOG_LEVEL convention: 0=ERROR, 1=WARN,
        2=INFO, 3=DEBUG. Unknown values fall back to ``default`` (INFO).
        """
        fallback = default or cls.INFO
        if value is None:
            return fallback
        text = str(value).strip().upper()
        if text.isdigit():
            tiers = [cls.ERROR, cls.WARN, cls.INFO, cls.DEBUG]
            index = int(text)
            return tiers[index] if index < len(tiers) else fallback
        if text == "WARNING":
            return cls.WARN
        try:
            return cls(text)
        except ValueError:
            return fallback


_LEVEL_ORDER = {
    LogLevel.DEBUG: 0,
    LogLevel.INFO: 1,
    LogLevel.WARN: 2,
    LogLevel.ERROR: 3,
}


@dataclass
class LogConfig:
    """Process-wide logging configuration, applied once at startup."""
    level: LogLevel = LogLevel.INFO
    json_format: bool = False


@dataclass
class LogEntry:
    """Structured log entry."""
    ts: float           # Unix timestamp
    module: str         # Module name
    level: str          # Log level
    msg: str            # Message
    details: Optional[dict] = None  # Additional data

    def to_json(self) -> str:
        """Convert to JSON string, omitting None fields."""
        data = {k: v for k, v in asdict(self).items() if v is not None}
        return json.dumps(data, ensure_ascii=False, default=str)

    def to_console(self) -> str:
        """Format as a single human-readable line."""
        timestamp = time.strftime("%H:%M:%S", time.localtime(self.ts))
        line = f"[{timestamp}] [{self.level}] [{self.module}] {self.msg}"
        if self.details:
            extras = " ".join(f"{k}={v}" for k, v in self.details.items())
            line = f"{line} {extras}"
        return line


class StructuredLogger:
    """
    Structured logger writing to stderr.

    Args:
        module: Module name for identification
        config: Logging configuration shared by all loggers
        stream: Output stream (default: sys.stderr at write time)
    """

    def __init__(
        self,
        module: str,
        config: LogConfig,
        stream: Optional[TextIO] = None,
    ):
        self.module = module
        self.config = config
        self.stream = stream

    def _should_log(self, level: LogLevel) -> bool:
        """Check if level meets minimum threshold."""
        return _LEVEL_ORDER[level] >= _LEVEL_ORDER[self.config.level]

    def log(self, level: LogLevel, msg: str, **extra: Any) -> None:
        """
        Log a message with optional extra fields.

        Args:
            level: Log level
            msg: Log message
            **extra: Additional fields to include
        """
        if not self._should_log(level):
            return

        entry = LogEntry(
            ts=time.time(),
            module=self.module,
            level=level.value,
            msg=msg,
            details=extra if extra else None,
        )
        line = entry.to_json() if self.config.json_format else entry.to_console()

        stream = self.stream or sys.stderr
        try:
            stream.write(line + "\n")
            stream.flush()
        except (OSError, ValueError):
            # stderr closed by the host; logging must never break a tool call
            pass

    # ========== Standard Levels ==========

    def debug(self, msg: str, **extra: Any) -> None:
        """Log debug message."""
        self.log(LogLevel.DEBUG, msg, **extra)

    def info(self, msg: str, **extra: Any) -> None:
        """Log info message."""
        self.log(LogLevel.INFO, msg, **extra)

    def warn(self, msg: str, **extra: Any) -> None:
        """Log warning message."""
        self.log(LogLevel.WARN, msg, **extra)

    def error(self, msg: str, **extra: Any) -> None:
        """Log error message."""
        self.log(LogLevel.ERROR, msg, **extra)


# ========== Logger Factory ==========

class _LoggerRegistry:
    """Holds the active LogConfig and the loggers that share it."""

    def __init__(self) -> None:
        self.config = LogConfig()
        self.loggers: dict[str, StructuredLogger] = {}

    def get(self, module: str) -> StructuredLogger:
        if module not in self.loggers:
            self.loggers[module] = StructuredLogger(module, self.config)
        return self.loggers[module]

    def configure(self, config: LogConfig) -> None:
        self.config = config
        for logger in self.loggers.values():
            logger.config = config


_registry = _LoggerRegistry()


def configure_logging(config: LogConfig) -> None:
    """
    Apply a logging configuration to every logger, existing and future.

    Called once by the server entry point after settings are loaded.
    """
    _registry.configure(config)


def get_log_config() -> LogConfig:
    """Get the active logging configuration."""
    return _registry.config


def get_logger(module: str) -> StructuredLogger:
    """
    Get or create a logger for the given module.

    Args:
        module: Module name

    Returns:
        StructuredLogger instance
    """
    return _registry.get(module)
