import asyncio

import httpx
import pytest

from weather_gateway.errors import (
    MissingCurrentWeather,
    UpstreamStatusError,
    UpstreamTimeout,
    UpstreamTransportError,
    WeatherFetchError,
)
from weather_gateway.models import CurrentWeather, SelectedLocation

NYC = SelectedLocation(key="nyc", name="New York, US", lat=40.7128, lon=-74.006)


@pytest.mark.asyncio
async def test_request_parameters(make_service, current_weather):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"current_weather": current_weather})

    service = make_service(handler)
    await service.fetch_forecast(40.7128, -74.006)

    assert len(seen) == 1
    request = seen[0]
    assert request.method == "GET"
    assert str(request.url).startswith("https://api.open-meteo.com/v1/forecast?")
    assert dict(request.url.params) == {
        "latitude": "40.7128",
        "longitude": "-74.006",
        "current_weather": "true",
        "temperature_unit": "fahrenheit",
        "wind_speed_unit": "mph",
        "timezone": "auto",
    }


@pytest.mark.asyncio
async def test_get_current_weather(make_service, current_weather):
    service = make_service(lambda request: httpx.Response(200, json={"current_weather": current_weather}))
    current = await service.get_current_weather(NYC)
    assert isinstance(current, CurrentWeather)
    assert current.time == "2024-01-01T00:00Z"
    assert current.temperature == 50
    assert current.winddirection == 180
    assert current.weathercode == 1


@pytest.mark.asyncio
async def test_get_report(make_service, current_weather):
    service = make_service(lambda request: httpx.Response(200, json={"current_weather": current_weather}))
    report = await service.get_report(NYC)
    assert report.model_dump() == {
        "city": "New York, US",
        "coordinates": {"lat": 40.7128, "lon": -74.006},
        "observed_at": "2024-01-01T00:00Z",
        "temperature": 50,
        "windspeed": 5,
        "winddirection": 180,
        "weathercode": 1,
        "units": {"temperature": "fahrenheit", "windspeed": "mph"},
        "provider": "Open-Meteo",
    }


@pytest.mark.asyncio
async def test_non_success_status(make_service):
    service = make_service(lambda request: httpx.Response(503, text="unavailable"))
    with pytest.raises(UpstreamStatusError) as exc_info:
        await service.get_current_weather(NYC)
    assert exc_info.value.status_code == 503
    assert "503" in exc_info.value.detail


@pytest.mark.asyncio
async def test_httpx_timeout(make_service):
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    service = make_service(handler)
    with pytest.raises(UpstreamTimeout) as exc_info:
        await service.get_current_weather(NYC)
    assert exc_info.value.detail == "request timed out"


@pytest.mark.asyncio
async def test_deadline_cancels_slow_upstream(make_service, current_weather):
    cancelled = []

    async def handler(request):
        try:
            await asyncio.sleep(5)
        except asyncio.CancelledError:
            cancelled.append(True)
            raise
        return httpx.Response(200, json={"current_weather": current_weather})

    service = make_service(handler, request_timeout=0.05)
    with pytest.raises(UpstreamTimeout):
        await service.get_current_weather(NYC)
    assert cancelled == [True]


@pytest.mark.asyncio
async def test_transport_error(make_service):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    service = make_service(handler)
    with pytest.raises(UpstreamTransportError) as exc_info:
        await service.get_current_weather(NYC)
    assert "connection refused" in exc_info.value.detail


@pytest.mark.asyncio
async def test_invalid_json_body(make_service):
    service = make_service(lambda request: httpx.Response(200, text="<html>oops</html>"))
    with pytest.raises(WeatherFetchError) as exc_info:
        await service.get_current_weather(NYC)
    assert not isinstance(exc_info.value, (UpstreamStatusError, UpstreamTimeout))


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{}, {"current_weather": None}, {"current_weather": "sunny"}, []])
async def test_missing_current_weather(make_service, body):
    service = make_service(lambda request: httpx.Response(200, json=body))
    with pytest.raises(MissingCurrentWeather) as exc_info:
        await service.get_current_weather(NYC)
    assert exc_info.value.location == NYC


@pytest.mark.asyncio
async def test_empty_current_weather_passes_through(make_service):
    service = make_service(lambda request: httpx.Response(200, json={"current_weather": {}}))
    report = await service.get_report(NYC)
    assert report.temperature is None
    assert report.observed_at is None
    assert report.city == "New York, US"


@pytest.mark.asyncio
async def test_current_weather_values_are_not_coerced(make_service):
    body = {"current_weather": {"time": 1704067200, "temperature": "-3.5", "windspeed": 0, "winddirection": 270.0}}
    service = make_service(lambda request: httpx.Response(200, json=body))
    report = await service.get_report(NYC)
    assert report.observed_at == 1704067200
    assert report.temperature == "-3.5"
    assert report.windspeed == 0
    assert isinstance(report.windspeed, int)
    assert report.winddirection == 270.0
