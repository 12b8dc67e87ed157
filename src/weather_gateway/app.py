import logging
from typing import Optional

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Mount, Route
from starlette.staticfiles import StaticFiles

from weather_gateway.catalog import list_cities
from weather_gateway.config import Config, config as default_config
from weather_gateway.errors import (
    InvalidCoordinates,
    MissingCurrentWeather,
    UnknownCity,
    WeatherFetchError,
)
from weather_gateway.location import resolve_location
from weather_gateway.weather import WeatherService

logger = logging.getLogger("weather_gateway.app")


async def cities(request: Request) -> JSONResponse:
    return JSONResponse(list_cities())


async def weather(request: Request) -> JSONResponse:
    """Resolve a location from the query string and return its current weather"""
    service: WeatherService = request.app.state.weather_service

    try:
        location = resolve_location(request.query_params)
    except UnknownCity as e:
        return JSONResponse({"error": "Unknown city key", "allowed": e.allowed}, status_code=400)
    except InvalidCoordinates:
        return JSONResponse({"error": "Invalid lat/lon"}, status_code=400)

    try:
        report = await service.get_report(location)
    except MissingCurrentWeather as e:
        return JSONResponse(
            {"error": "No current_weather in response", "city": e.location.model_dump(exclude_none=True)},
            status_code=502,
        )
    except WeatherFetchError as e:
        return JSONResponse({"error": "Failed to fetch weather", "detail": e.detail}, status_code=500)
    except Exception as e:
        logger.exception(f"Unexpected error while fetching weather for {location.name}")
        return JSONResponse({"error": "Failed to fetch weather", "detail": str(e)}, status_code=500)

    return JSONResponse(report.model_dump())


async def health(request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok"})


def create_app(config: Optional[Config] = None, weather_service: Optional[WeatherService] = None) -> Starlette:
    """Build the gateway application with its routes and static file mount"""
    config = config or default_config
    routes = [
        Route("/weather/cities", cities, methods=["GET"]),
        Route("/weather", weather, methods=["GET"]),
        Route("/health", health, methods=["GET"]),
    ]

    if config.public_dir.is_dir():
        routes.append(Mount("/", app=StaticFiles(directory=config.public_dir, html=True), name="public"))
    else:
        logger.warning(f"Static directory {config.public_dir} not found, static files are disabled")

    app = Starlette(routes=routes)
    app.state.config = config
    app.state.weather_service = weather_service or WeatherService(config)
    return app
