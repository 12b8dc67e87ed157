import logging
import math
import random
from decimal import Decimal
from typing import Mapping, Optional

from weather_gateway.catalog import city_keys, find_city_by_key, random_city
from weather_gateway.errors import InvalidCoordinates, UnknownCity
from weather_gateway.models import SelectedLocation

logger = logging.getLogger("weather_gateway.location")


def parse_coordinate(value: str) -> Optional[float]:
    """Parse a decimal coordinate, returning None for anything non-finite"""
    # float() also takes digit separators such as "1_0"
    if "_" in value:
        return None
    try:
        number = float(value.strip())
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def format_coordinate(value: float) -> str:
    """
    Render a number the way JavaScript prints it

    Integral values drop the trailing .0 and exponent notation is used only
    below 1e-6 or from 1e21 upwards, written as 1e-7 or 1.5e+21.
    """
    if value == 0:
        return "0"
    text = repr(value)
    if "e" not in text:
        return text[:-2] if text.endswith(".0") else text
    mantissa, exponent = text.split("e")
    power = int(exponent)
    if -7 < power < 21:
        return format(Decimal(text), "f")
    return f"{mantissa}e{power:+d}"


def resolve_location(params: Mapping[str, str], rng: Optional[random.Random] = None) -> SelectedLocation:
    """
    Turn request parameters into a single location

    A `city` key wins over `lat`/`lon`, which win over a random catalog pick.
    Empty values count as absent.

    Raises:
        UnknownCity: the city key is not in the catalog
        InvalidCoordinates: lat or lon is not a finite number
    """
    key = params.get("city")
    if key:
        city = find_city_by_key(key)
        if city is None:
            logger.info(f"Rejected unknown city key {key!r}")
            raise UnknownCity(key, city_keys())
        logger.debug(f"Resolved city key {key!r} to {city.name}")
        return SelectedLocation.from_city(city)

    raw_lat, raw_lon = params.get("lat"), params.get("lon")
    if raw_lat and raw_lon:
        lat, lon = parse_coordinate(raw_lat), parse_coordinate(raw_lon)
        if lat is None or lon is None:
            logger.info(f"Rejected coordinates lat={raw_lat!r} lon={raw_lon!r}")
            raise InvalidCoordinates(raw_lat, raw_lon)
        name = f"Custom ({format_coordinate(lat)}, {format_coordinate(lon)})"
        logger.debug(f"Resolved coordinates to {name}")
        return SelectedLocation(name=name, lat=lat, lon=lon)

    city = random_city(rng)
    logger.debug(f"No location given, picked {city.name}")
    return SelectedLocation.from_city(city)
