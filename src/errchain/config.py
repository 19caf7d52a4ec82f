"""Configuration management for errchain using Pydantic models."""

import json
import logging
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from .enums import Classification, DataLayer, Severity

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".errchain.json"


class ReportFormat(str, Enum):
    """Report format types."""
    TEXT = "text"
    JSON = "json"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"
    TRACE = "trace"


class DefaultsConfig(BaseModel):
    """Baseline values used when a node is built without explicit axes."""
    classification: Classification = Classification.DEFAULT
    data_layer: DataLayer = Field(alias="dataLayer", default=DataLayer.DEFAULT)
    severity: Severity = Severity.ERROR

    model_config = ConfigDict(populate_by_name=True)


class LocationConfig(BaseModel):
    """Caller-location capture section."""
    enabled: bool = True
    full_path: bool = Field(alias="fullPath", default=True)

    model_config = ConfigDict(populate_by_name=True)


class ReportConfig(BaseModel):
    """Trace rendering section."""
    format: ReportFormat = ReportFormat.TEXT
    include_baggage: bool = Field(alias="includeBaggage", default=True)

    model_config = ConfigDict(populate_by_name=True)


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.INFO

    model_config = ConfigDict(use_enum_values=True)

    @property
    def numeric_level(self) -> int:
        """Stdlib logging level for the configured name."""
        # Defaults skip validation and keep the enum member
        level = LogLevel(self.level)
        # trace has no stdlib counterpart
        if level in (LogLevel.TRACE, LogLevel.DEBUG):
            return logging.DEBUG
        if level is LogLevel.WARN:
            return logging.WARNING
        return getattr(logging, level.value.upper())


class ErrchainConfig(BaseModel):
    """Complete errchain configuration model."""
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    location: LocationConfig = Field(default_factory=LocationConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")


def load_config(config_path: str | Path | None = None) -> ErrchainConfig:
    """Load configuration from file with fallback to defaults.

    Args:
        config_path: Optional path to configuration file. If None, searches
                    current directory and parents for .errchain.json

    Returns:
        ErrchainConfig: Loaded and validated configuration

    Raises:
        ValueError: If configuration is invalid
    """
    if config_path is None:
        config_path = find_config_file()
    else:
        config_path = Path(config_path)

    if config_path and config_path.exists():
        logger.debug(f"Loading configuration from {config_path}")
        try:
            with open(config_path, encoding="utf-8") as f:
                config_data = json.load(f)
            return ErrchainConfig(**config_data)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in config file {config_path}: {e}") from e
        except Exception as e:
            raise ValueError(f"Failed to load config from {config_path}: {e}") from e

    return create_default_config()


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find .errchain.json configuration file by searching up directory tree.

    Args:
        start_dir: Directory to start search from (default: current directory)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = Path(start_dir).resolve()

    while True:
        config_file = current / CONFIG_FILENAME
        if config_file.exists():
            return config_file

        parent = current.parent
        if parent == current:  # Reached root directory
            break
        current = parent

    return None


def create_default_config() -> ErrchainConfig:
    """Create default configuration with sensible defaults."""
    return ErrchainConfig()


_active_config = create_default_config()


def get_config() -> ErrchainConfig:
    """Return the configuration consulted when nodes are built."""
    return _active_config


def set_config(config: ErrchainConfig | None) -> ErrchainConfig:
    """Replace the active configuration; ``None`` restores defaults.

    Not synchronized. Callers that reconfigure at runtime must serialize
    against concurrent node construction themselves.
    """
    global _active_config
    _active_config = config if config is not None else create_default_config()
    logger.debug("Active errchain configuration replaced")
    return _active_config
