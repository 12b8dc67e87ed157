from typing import List, Optional

from weather_gateway.models import SelectedLocation


class WeatherGatewayError(Exception):
    """Base class for gateway errors"""


class LocationError(WeatherGatewayError):
    """The request parameters do not describe a usable location"""


class UnknownCity(LocationError):
    def __init__(self, key: str, allowed: List[str]):
        super().__init__(f"Unknown city key: {key}")
        self.key = key
        self.allowed = allowed


class InvalidCoordinates(LocationError):
    def __init__(self, lat: str, lon: str):
        super().__init__(f"Invalid lat/lon: {lat!r}, {lon!r}")
        self.lat = lat
        self.lon = lon


class WeatherFetchError(WeatherGatewayError):
    """The outbound call to the weather provider failed"""

    @property
    def detail(self) -> str:
        return str(self)


class UpstreamTimeout(WeatherFetchError):
    def __init__(self, timeout: Optional[float] = None):
        super().__init__(f"Open-Meteo did not respond within {timeout}s")
        self.timeout = timeout

    @property
    def detail(self) -> str:
        return "request timed out"


class UpstreamStatusError(WeatherFetchError):
    def __init__(self, status_code: int):
        super().__init__(f"Open-Meteo responded {status_code}")
        self.status_code = status_code


class UpstreamTransportError(WeatherFetchError):
    """Network failure while talking to the provider"""


class MissingCurrentWeather(WeatherGatewayError):
    """The provider answered without a current_weather block"""

    def __init__(self, location: SelectedLocation):
        super().__init__("No current_weather in response")
        self.location = location
