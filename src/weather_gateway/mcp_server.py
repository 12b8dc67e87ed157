import logging
from typing import Any, Dict, List, Optional, Union

from dotenv import load_dotenv
from mcp.server.fastmcp import FastMCP

from weather_gateway.catalog import list_cities as catalog_cities
from weather_gateway.config import Config, config
from weather_gateway.errors import LocationError, MissingCurrentWeather, UnknownCity, WeatherFetchError
from weather_gateway.location import resolve_location
from weather_gateway.server import configure_logging
from weather_gateway.weather import WeatherService

logger = logging.getLogger("weather_gateway.mcp")

mcp = FastMCP(
    "Open-Meteo Weather",
    instructions="Current weather for catalog cities or raw coordinates, proxied from Open-Meteo",
)

weather_service = WeatherService(config)


# Tools
@mcp.tool()
async def list_cities() -> List[Dict[str, Any]]:
    """List the catalog cities that can be passed to get_weather"""
    return catalog_cities()


@mcp.tool()
async def get_weather(
    city: Optional[str] = None,
    latitude: Optional[str] = None,
    longitude: Optional[str] = None,
) -> Union[Dict[str, Any], str]:
    """
    Get current weather for a catalog city, a coordinate pair, or a random city

    Args:
        city: Catalog key such as "nyc" (takes precedence over coordinates)
        latitude: Latitude in decimal degrees
        longitude: Longitude in decimal degrees

    Returns:
        The weather report, or an "Error: ..." message when the lookup fails
    """
    params = {
        name: value
        for name, value in (("city", city), ("lat", latitude), ("lon", longitude))
        if value is not None
    }
    logger.info(f"Starting weather request for {params or 'a random city'}")

    try:
        location = resolve_location(params)
        report = await weather_service.get_report(location)
        return report.model_dump()
    except UnknownCity as e:
        return f"Error: Unknown city key '{e.key}'. Allowed keys: {', '.join(e.allowed)}"
    except MissingCurrentWeather as e:
        return f"Error: No current weather available for {e.location.name}"
    except LocationError as e:
        return f"Error: {str(e)}"
    except WeatherFetchError as e:
        logger.error(f"Error getting weather: {str(e)}")
        return f"Error: Unable to get weather data. {e.detail}"


def main(settings: Optional[Config] = None) -> None:
    global weather_service

    load_dotenv()
    settings = settings or config
    configure_logging(settings)
    weather_service = WeatherService(settings)
    mcp.run()


if __name__ == "__main__":
    main()
