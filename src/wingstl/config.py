"""Configuration management for wingstl.

Defaults for a run come from environment variables (``WINGSTL_*``), an optional
YAML file, and finally command-line overrides applied by the CLI.
"""

from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import InputFormatError, ResourceError

MIN_CHORD_POINTS = 20
MAX_CHORD_POINTS = 200
MIN_SPANWISE_STATIONS = 2
MAX_SPANWISE_STATIONS = 1000

VALID_UNITS = ("m", "cm", "mm", "ft", "in")

# Command-line flag that overrides each configurable field
FIELD_FLAGS = {
    "num_chordwise_points": "-p",
    "num_spanwise_stations": "-n",
    "units": "-u",
    "path": "-o",
}


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="WINGSTL_LOG_")

    level: str = "WARNING"
    format: str = (
        "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
        "<cyan>{extra[component]}</cyan> - <level>{message}</level>"
    )
    file_path: Optional[Path] = None
    max_file_size: str = "10 MB"
    retention: str = "30 days"

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v.upper()


class MeshConfig(BaseSettings):
    """Mesh resolution and shape defaults."""

    model_config = SettingsConfigDict(env_prefix="WINGSTL_MESH_")

    num_chordwise_points: int = Field(default=100, ge=MIN_CHORD_POINTS, le=MAX_CHORD_POINTS)
    num_spanwise_stations: int = Field(default=2, ge=MIN_SPANWISE_STATIONS, le=MAX_SPANWISE_STATIONS)
    cosine_spacing: bool = True
    closed_trailing_edge: bool = True


class OutputConfig(BaseSettings):
    """Output file defaults."""

    model_config = SettingsConfigDict(env_prefix="WINGSTL_OUTPUT_")

    path: Path = Path("wing.stl")
    units: str = "m"

    @field_validator("units")
    def validate_units(cls, v: str) -> str:
        if v not in VALID_UNITS:
            raise ValueError(f"Units must be one of {list(VALID_UNITS)}")
        return v


class WingstlConfig(BaseSettings):
    """Main wingstl configuration combining all sections."""

    model_config = SettingsConfigDict(
        env_prefix="WINGSTL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    mesh: MeshConfig = Field(default_factory=MeshConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    verbose: bool = False

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> "WingstlConfig":
        """Load configuration from a YAML file."""
        try:
            with open(yaml_path, "r", encoding="utf-8") as f:
                config_dict = yaml.safe_load(f)
        except OSError as e:
            raise _open_error("Unable to open configuration file for reading", yaml_path, e) from e
        except yaml.YAMLError as e:
            raise InputFormatError(
                f"Configuration file is not valid YAML: {yaml_path}",
                details={"reason": str(e).splitlines()[0]},
            ) from e

        if config_dict is None:
            config_dict = {}
        if not isinstance(config_dict, dict):
            raise InputFormatError(
                f"Configuration file must contain a mapping: {yaml_path}",
                details={"found": type(config_dict).__name__},
            )

        return cls.create(**config_dict)

    @classmethod
    def create(cls, **data: Any) -> "WingstlConfig":
        """Build a configuration, reporting bad values as InputFormatError."""
        try:
            return cls(**data)
        except ValidationError as e:
            err = e.errors()[0]
            loc = [str(p) for p in err["loc"]]
            details = {"parameter": ".".join(loc), "value": err.get("input"), "expected": err["msg"]}
            if loc and loc[-1] in FIELD_FLAGS:
                details["flag"] = FIELD_FLAGS[loc[-1]]
            raise InputFormatError("Invalid configuration value", details=details) from e

    def to_yaml(self, yaml_path: Union[str, Path]) -> None:
        """Save configuration to a YAML file."""
        try:
            with open(yaml_path, "w", encoding="utf-8") as f:
                yaml.safe_dump(self.model_dump(mode="json"), f, default_flow_style=False, sort_keys=False)
        except OSError as e:
            raise _open_error("Unable to open configuration file for writing", yaml_path, e) from e


def _open_error(message: str, path: Union[str, Path], error: OSError) -> ResourceError:
    return ResourceError(message, details={"file": str(path), "reason": error.strerror or type(error).__name__})


# Global configuration instance, built on first use
config: Optional[WingstlConfig] = None


def get_config() -> WingstlConfig:
    """Get the global configuration instance."""
    global config
    if config is None:
        config = WingstlConfig.create()
    return config


def reload_config(**overrides: Any) -> WingstlConfig:
    """Reload configuration with overrides."""
    global config
    config = WingstlConfig.create(**overrides)
    return config
