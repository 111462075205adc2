"""
Configuration settings for the OSM to gbXML converter
"""

from dataclasses import dataclass, field


@dataclass
class APIConfig:
    """API endpoints and configuration"""
    # Overpass API (OSM)
    overpass_url: str = "https://overpass-api.de/api/interpreter"
    overpass_timeout: int = 90  # Also used as [timeout:..] in the query

    # Request settings
    max_retries: int = 3
    retry_delay: float = 5.0
    min_request_interval: float = 2.0

    # User agent for API requests
    user_agent: str = "OSM-gbXML-Converter/1.0"


@dataclass
class ConversionConfig:
    """Conversion configuration"""
    # Height fallbacks (meters)
    level_height_m: float = 3.0
    default_height_m: float = 0.1  # Minimal extrusion so no solid is flat

    # Local tangent plane projection
    earth_radius_m: float = 6371000.0

    # gbXML dialect
    gbxml_namespace: str = "http://www.gbxml.org/schema"
    gbxml_version: str = "0.37"
    coordinate_precision: int = 6
    storey_id: str = "storey-1"

    # Warn before fetching areas larger than this
    large_area_warning_km2: float = 4.0

    # API config
    api: APIConfig = field(default_factory=APIConfig)


# Global config instance
config = ConversionConfig()


def get_config() -> ConversionConfig:
    """Get global configuration"""
    return config


def validate_config(config: ConversionConfig) -> None:
    """
    Validate that all required configuration values are set.
    Raises ValueError if any required value is missing or invalid.
    """
    errors = []

    if config.level_height_m is None or config.level_height_m <= 0:
        errors.append(f"level_height_m must be positive, got {config.level_height_m}")

    if config.default_height_m is None or config.default_height_m <= 0:
        errors.append(f"default_height_m must be positive, got {config.default_height_m}")

    if config.earth_radius_m is None or config.earth_radius_m <= 0:
        errors.append(f"earth_radius_m must be positive, got {config.earth_radius_m}")

    if config.coordinate_precision is None:
        errors.append("coordinate_precision is required in config but not set")
    elif config.coordinate_precision < 1 or config.coordinate_precision > 12:
        errors.append(f"coordinate_precision must be between 1 and 12, got {config.coordinate_precision}")

    if not config.gbxml_namespace:
        errors.append("gbxml_namespace is required in config but not set")

    if config.api is None:
        errors.append("api configuration is required but not set")
    elif not config.api.overpass_url:
        errors.append("api.overpass_url is required but not set")

    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ValueError(error_msg)
