import asyncio
import logging
from typing import Any, Dict, Optional

import httpx

from weather_gateway.config import Config, config as default_config
from weather_gateway.errors import (
    MissingCurrentWeather,
    UpstreamStatusError,
    UpstreamTimeout,
    UpstreamTransportError,
    WeatherFetchError,
)
from weather_gateway.location import format_coordinate
from weather_gateway.models import CurrentWeather, SelectedLocation, WeatherReport

logger = logging.getLogger("weather_gateway.weather")


class WeatherService:
    """Fetches current conditions from Open-Meteo"""

    def __init__(self, config: Optional[Config] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config or default_config
        self._transport = transport

    @property
    def url(self) -> str:
        return self.config.open_meteo_url

    @property
    def timeout(self) -> float:
        return self.config.request_timeout

    @staticmethod
    def build_params(lat: float, lon: float) -> Dict[str, str]:
        return {
            "latitude": format_coordinate(lat),
            "longitude": format_coordinate(lon),
            "current_weather": "true",
            "temperature_unit": "fahrenheit",
            "wind_speed_unit": "mph",
            "timezone": "auto",
        }

    async def fetch_forecast(self, lat: float, lon: float) -> Dict[str, Any]:
        """
        Make a single call to the forecast endpoint and return the decoded body

        The whole call, including reading the body, is bounded by the configured timeout.

        Raises:
            UpstreamTimeout: the deadline expired
            UpstreamStatusError: the provider answered with a non-2xx status
            UpstreamTransportError: the request could not be sent or completed
            WeatherFetchError: the body is not JSON
        """
        try:
            response = await asyncio.wait_for(self._get(lat, lon), timeout=self.timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            logger.error(f"Open-Meteo request for ({lat}, {lon}) timed out after {self.timeout}s")
            raise UpstreamTimeout(self.timeout) from e
        except httpx.RequestError as e:
            logger.error(f"Open-Meteo request for ({lat}, {lon}) failed: {str(e)}")
            raise UpstreamTransportError(str(e) or e.__class__.__name__) from e

        if not response.is_success:
            logger.error(f"Open-Meteo responded {response.status_code} for ({lat}, {lon})")
            raise UpstreamStatusError(response.status_code)

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Open-Meteo returned a body that is not JSON: {str(e)}")
            raise WeatherFetchError(f"Invalid JSON from Open-Meteo: {str(e)}") from e

    async def _get(self, lat: float, lon: float) -> httpx.Response:
        async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
            return await client.get(self.url, params=self.build_params(lat, lon))

    async def get_current_weather(self, location: SelectedLocation) -> CurrentWeather:
        """Get the current_weather block for a location"""
        data = await self.fetch_forecast(location.lat, location.lon)
        current = data.get("current_weather") if isinstance(data, dict) else None
        if not isinstance(current, dict):
            logger.error(f"No current_weather in Open-Meteo response for {location.name}")
            raise MissingCurrentWeather(location)
        return CurrentWeather.model_validate(current)

    async def get_report(self, location: SelectedLocation) -> WeatherReport:
        """Get the normalized weather report for a location"""
        logger.info(f"Fetching weather for {location.name} ({location.lat}, {location.lon})")
        current = await self.get_current_weather(location)
        return WeatherReport.build(location, current)
