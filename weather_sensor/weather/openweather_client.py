"""OpenWeatherMap current weather client."""

import logging
from typing import Optional

import requests

from ..config.config_manager import ConfigManager
from .errors import DecodeError, RequestFailedError, TransportError
from .models import WeatherRecord


DEFAULT_BASE_URL = "https://api.openweathermap.org/data/2.5/weather"
DEFAULT_TIMEOUT = 10


class WeatherClient:
    """Fetches current weather observations, one request per location."""

    def __init__(self, config: ConfigManager, session: Optional[requests.Session] = None) -> None:
        """Initialize the weather client with configuration.

        Args:
            config: Configuration manager instance
            session: Optional HTTP session (a new one is created if omitted)
        """
        self.config = config
        self.logger = logging.getLogger(__name__)
        self.session = session or requests.Session()

        api_config = config.get_weather_api_config()
        self.base_url = api_config.get('base_url', DEFAULT_BASE_URL)
        self.timeout = api_config.get('timeout', DEFAULT_TIMEOUT)
        self._appid = api_config['appid']
        self._units = api_config['units']

    def fetch(self, location: str) -> WeatherRecord:
        """Fetch the current weather for a location.

        Args:
            location: Free-text location query (e.g. "Berlin" or "Paris,FR")

        Returns:
            Decoded weather record

        Raises:
            ValueError: If the location is empty
            TransportError: If the request could not be completed
            RequestFailedError: If the API answered with a non-2xx status
            DecodeError: If the response body does not match the schema
        """
        if not location:
            raise ValueError("location must not be empty")

        params = {
            'q': location,
            'appid': self._appid,
            'units': self._units,
        }

        try:
            response = self.session.get(self.base_url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError(location, e) from e

        try:
            if not 200 <= response.status_code < 300:
                raise RequestFailedError(location, response.status_code)

            try:
                record = WeatherRecord.from_dict(response.json())
            except ValueError as e:
                # json decode errors are ValueError subclasses as well
                raise DecodeError(location, e) from e
        finally:
            response.close()

        self.logger.debug(f"Decoded weather for {location}: {record.name} ({record.sys.country})")
        return record

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
