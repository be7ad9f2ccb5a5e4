"""Name to coordinate lookup over the configured location table."""

from oceanova.config.schema import AppConfig
from oceanova.errors import LocationNotFoundError
from oceanova.models.weather import Location


def location_names(config: AppConfig) -> list[str]:
    return [loc.name for loc in config.locations]


def resolve_location(config: AppConfig, name: str) -> Location:
    """Resolve a location name, ignoring case and surrounding whitespace."""
    wanted = name.strip().lower()
    for loc in config.locations:
        if loc.name.lower() == wanted:
            return Location(name=loc.name, latitude=loc.latitude, longitude=loc.longitude)
    raise LocationNotFoundError(name)


def default_location(config: AppConfig) -> Location:
    return resolve_location(config, config.refresh.default_location)
