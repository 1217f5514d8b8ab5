"""Configuration loading and validation using Pydantic."""

import os
from datetime import datetime
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

DEFAULT_GEOLOCATION_URL = "http://ip-api.com/json/"


class SunlightOptions(BaseModel):
    """Options bundle for a single sunlight evaluation.

    All fields are optional. Coordinates are not range-checked; missing
    coordinates fall back to the Equator/Prime-Meridian origin.
    """

    model_config = ConfigDict(frozen=True)

    latitude: float | None = Field(None, description="Latitude in degrees")
    longitude: float | None = Field(None, description="Longitude in degrees")
    use_geolocation: bool = Field(
        False, description="Ask the geolocation capability for the current position"
    )
    reference_time: datetime | None = Field(
        None, description="Instant to evaluate (defaults to now, local time)"
    )


class LocationConfig(BaseModel):
    """Location configuration for sun calculation."""

    name: str | None = Field(None, description="Optional location label")
    latitude: float | None = Field(None, description="Latitude in degrees")
    longitude: float | None = Field(None, description="Longitude in degrees")
    use_geolocation: bool = Field(False, description="Resolve position via geolocation")


class WatchConfig(BaseModel):
    """Polling configuration for the sunlight watcher."""

    interval_seconds: int = Field(1, ge=1, le=86400, description="Polling interval (seconds)")


class GeolocationConfig(BaseModel):
    """IP geolocation lookup configuration."""

    api_url: str = Field(DEFAULT_GEOLOCATION_URL, description="Geolocation endpoint URL")
    timeout_seconds: float = Field(5.0, gt=0, le=60, description="Request timeout in seconds")

    @field_validator("api_url")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        """Validate geolocation URL scheme."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("Geolocation URL must start with http:// or https://")
        return v


class Config(BaseModel):
    """Root configuration model."""

    location: LocationConfig = Field(default_factory=LocationConfig)
    watch: WatchConfig = Field(default_factory=WatchConfig)
    geolocation: GeolocationConfig = Field(default_factory=GeolocationConfig)

    def to_options(self, reference_time: datetime | None = None) -> SunlightOptions:
        """Build the options bundle for an evaluation from this configuration."""
        return SunlightOptions(
            latitude=self.location.latitude,
            longitude=self.location.longitude,
            use_geolocation=self.location.use_geolocation,
            reference_time=reference_time,
        )


def format_validation_errors(error: ValidationError) -> str:
    """Format Pydantic validation errors into user-friendly messages.

    Args:
        error: Pydantic ValidationError instance

    Returns:
        Formatted error message string
    """
    lines = ["Configuration validation failed:"]
    for err in error.errors():
        field_path = " -> ".join(str(loc) for loc in err["loc"])
        error_msg = err.get("msg", "")

        if field_path:
            lines.append(f"  • {field_path}: {error_msg}")
        else:
            lines.append(f"  • {error_msg}")

        # Add context if available
        if "ctx" in err:
            ctx = err["ctx"]
            if "expected" in ctx:
                lines.append(f"    Expected: {ctx['expected']}")
            if "actual" in ctx:
                lines.append(f"    Actual: {ctx['actual']}")
        if field_path and "input" in err:
            lines.append(f"    Got: {err['input']!r}")

    lines.append("")
    lines.append("See config.example.yaml for a complete example configuration")

    return "\n".join(lines)


def load_config(config_path: str | None = None) -> Config:
    """Load and validate configuration from YAML file.

    Args:
        config_path: Path to configuration file. If None, uses CONFIG_PATH env var or default.

    Returns:
        Validated Config instance

    Raises:
        FileNotFoundError: If config file does not exist
        ValidationError: If config validation fails (formatted error message is printed)
    """
    if config_path is None:
        config_path = os.getenv("CONFIG_PATH", "config.yaml")

    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)

        # An empty file means "all defaults"
        return Config.model_validate(data or {})
    except ValidationError as e:
        print(format_validation_errors(e))
        raise


def validate_config(config: dict) -> Config:
    """Validate configuration dictionary."""
    return Config.model_validate(config)
