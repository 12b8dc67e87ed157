import random
from typing import Dict, List, Optional, Tuple

from weather_gateway.models import City

CITIES: Tuple[City, ...] = (
    City(key="denver", name="Denver, US", lat=39.7392, lon=-104.9903),
    City(key="slc", name="Salt Lake City, US", lat=40.7608, lon=-111.8910),
    City(key="sf", name="San Francisco, US", lat=37.7749, lon=-122.4194),
    City(key="nyc", name="New York, US", lat=40.7128, lon=-74.0060),
    City(key="london", name="London, UK", lat=51.5074, lon=-0.1278),
    City(key="sydney", name="Sydney, AU", lat=-33.8688, lon=151.2093),
    City(key="tokyo", name="Tokyo, JP", lat=35.6762, lon=139.6503),
)


def list_cities() -> List[Dict[str, object]]:
    """Catalog projection used by the listing endpoint"""
    return [city.model_dump() for city in CITIES]


def city_keys() -> List[str]:
    return [city.key for city in CITIES]


def find_city_by_key(key: Optional[str]) -> Optional[City]:
    """Case-insensitive exact lookup against the catalog keys"""
    if not key:
        return None
    key = key.lower()
    for city in CITIES:
        if city.key == key:
            return city
    return None


def random_city(rng: Optional[random.Random] = None) -> City:
    """Uniformly random catalog entry"""
    return (rng or random).choice(CITIES)
