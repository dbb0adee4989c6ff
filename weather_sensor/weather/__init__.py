"""OpenWeatherMap client and response records."""

from .errors import (
    WeatherClientError,
    TransportError,
    DecodeError,
    RequestFailedError,
)
from .models import WeatherRecord
from .openweather_client import WeatherClient

__all__ = [
    'WeatherClient',
    'WeatherRecord',
    'WeatherClientError',
    'TransportError',
    'DecodeError',
    'RequestFailedError',
]
