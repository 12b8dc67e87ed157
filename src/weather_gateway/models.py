from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class City(BaseModel):
    """Named location in the city catalog"""
    model_config = ConfigDict(frozen=True)

    key: str
    name: str
    lat: float
    lon: float


class SelectedLocation(BaseModel):
    """Location chosen for a single weather request"""
    name: str
    lat: float
    lon: float
    key: Optional[str] = None

    @classmethod
    def from_city(cls, city: City) -> "SelectedLocation":
        return cls(key=city.key, name=city.name, lat=city.lat, lon=city.lon)


class CurrentWeather(BaseModel):
    """Open-Meteo current_weather block, values passed through as received"""
    model_config = ConfigDict(extra="ignore")

    time: Optional[Any] = None
    temperature: Optional[Any] = None
    windspeed: Optional[Any] = None
    winddirection: Optional[Any] = None
    weathercode: Optional[Any] = None


class Coordinates(BaseModel):
    lat: float
    lon: float


class Units(BaseModel):
    temperature: str = "fahrenheit"
    windspeed: str = "mph"


class WeatherReport(BaseModel):
    """Normalized weather payload returned to clients"""
    city: str
    coordinates: Coordinates
    observed_at: Optional[Any] = None
    temperature: Optional[Any] = None
    windspeed: Optional[Any] = None
    winddirection: Optional[Any] = None
    weathercode: Optional[Any] = None
    units: Units = Units()
    provider: str = "Open-Meteo"

    @classmethod
    def build(cls, location: SelectedLocation, current: CurrentWeather) -> "WeatherReport":
        return cls(
            city=location.name,
            coordinates=Coordinates(lat=location.lat, lon=location.lon),
            observed_at=current.time,
            temperature=current.temperature,
            windspeed=current.windspeed,
            winddirection=current.winddirection,
            weathercode=current.weathercode,
        )
