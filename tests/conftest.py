"""Shared fixtures for the weather virtual sensor tests."""

import copy
from unittest.mock import Mock

import pytest

from weather_sensor.config.config_manager import ConfigManager


BERLIN_RESPONSE = {
    "coord": {"lon": 13.4105, "lat": 52.5244},
    "weather": [{"id": 803, "main": "Clouds", "description": "broken clouds", "icon": "04d"}],
    "base": "stations",
    "main": {
        "temp": 10.5,
        "feels_like": 9.4,
        "temp_min": 9.1,
        "temp_max": 11.7,
        "pressure": 1012,
        "humidity": 80,
        "sea_level": 1012,
        "grnd_level": 1007,
    },
    "visibility": 10000,
    "wind": {"speed": 4.12, "deg": 250, "gust": 7.2},
    "clouds": {"all": 75},
    "rain": {"1h": 0.25},
    "dt": 1700000000,
    "sys": {"type": 2, "id": 2011538, "country": "DE", "sunrise": 1699944000, "sunset": 1699976000},
    "timezone": 3600,
    "id": 2950159,
    "name": "Berlin",
    "cod": 200,
}


@pytest.fixture
def weather_payload():
    """A full current weather response for Berlin."""
    return copy.deepcopy(BERLIN_RESPONSE)


@pytest.fixture
def mock_config():
    """Create a mock configuration."""
    config = Mock(spec=ConfigManager)
    config.interval = 60
    config.locations = ("Berlin", "Paris")
    config.get_sensor_config.return_value = {'interval': 60}
    config.get_weather_api_config.return_value = {
        'appid': 'test_key',
        'units': 'metric',
        'locations': ['Berlin', 'Paris'],
    }
    config.get_influxdb_config.return_value = {
        'hostname': 'http://localhost:8086',
        'token': 'test_token',
        'org': 'home',
        'bucket': 'weather',
        'measurement': 'weather',
    }
    config.get_logging_config.return_value = {'level': 'INFO'}
    return config
