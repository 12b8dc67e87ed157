"""Shared test fixtures."""

import httpx
import pytest
from starlette.testclient import TestClient

from weather_gateway.app import create_app
from weather_gateway.config import Config
from weather_gateway.weather import WeatherService


@pytest.fixture
def current_weather():
    return {
        "time": "2024-01-01T00:00Z",
        "temperature": 50,
        "windspeed": 5,
        "winddirection": 180,
        "weathercode": 1,
    }


@pytest.fixture
def config(tmp_path):
    return Config(public_dir=tmp_path / "public", log_dir=tmp_path / "logs")


@pytest.fixture
def make_service(config):
    """Build a WeatherService whose upstream is answered by `handler`"""

    def factory(handler, **overrides):
        service_config = config.model_copy(update=overrides) if overrides else config
        return WeatherService(service_config, transport=httpx.MockTransport(handler))

    return factory


@pytest.fixture
def make_client(config, make_service):
    """Build a TestClient for the gateway with a mocked upstream"""

    def factory(handler, app_config=None):
        app = create_app(app_config or config, weather_service=make_service(handler))
        return TestClient(app)

    return factory
