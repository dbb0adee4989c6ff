"""Configuration manager for the weather virtual sensor."""

import os
import yaml
from typing import Dict, Any, Optional, Tuple


DEFAULT_UNITS = "metric"
DEFAULT_LOGGING = {
    'level': 'INFO',
    'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
}


class ConfigError(ValueError):
    """Raised when the configuration is missing or invalid."""
    pass


class ConfigManager:
    """Loads the settings document once and exposes it read-only."""

    def __init__(self, config_path: Optional[str] = None) -> None:
        """Initialize configuration manager.

        Args:
            config_path: Path to configuration file. If None, looks at CONFIG_PATH
                        and then for config.yaml in the current directory.
        """
        self._config_path = config_path or self._find_config_file()
        self._config: Dict[str, Any] = {}
        self._locations: Tuple[str, ...] = ()
        self._load_config()

    def _find_config_file(self) -> str:
        """Find configuration file in standard locations."""
        possible_paths = [
            os.environ.get('CONFIG_PATH'),
            'config.yaml',
        ]

        for path in possible_paths:
            if path and os.path.exists(path):
                return os.path.abspath(path)

        raise FileNotFoundError(
            "Configuration file not found. Please create config.yaml or set CONFIG_PATH environment variable."
        )

    def _load_config(self) -> None:
        """Load configuration from YAML file and environment variables."""
        if not os.path.exists(self._config_path):
            raise FileNotFoundError(f"Configuration file not found: {self._config_path}")

        try:
            with open(self._config_path, 'r') as file:
                self._config = yaml.safe_load(file) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to load configuration: {e}") from e

        if not isinstance(self._config, dict):
            raise ConfigError("Configuration document must be a mapping")

        # Override with environment variables
        self._apply_env_overrides()

        # Validate configuration
        self._validate_config()

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides."""
        env_mappings = {
            'WEATHER_API_APPID': ['weather_api', 'appid'],
            'WEATHER_API_UNITS': ['weather_api', 'units'],
            'SENSOR_INTERVAL': ['sensor', 'interval'],
            'INFLUXDB_URL': ['influxdb', 'hostname'],
            'INFLUXDB_TOKEN': ['influxdb', 'token'],
            'INFLUXDB_ORG': ['influxdb', 'org'],
            'INFLUXDB_BUCKET': ['influxdb', 'bucket'],
            'LOG_LEVEL': ['logging', 'level'],
        }

        for env_var, config_path in env_mappings.items():
            value = os.environ.get(env_var)
            if value:
                self._set_nested_value(config_path, value)

    def _set_nested_value(self, path: list, value: str) -> None:
        """Set nested configuration value."""
        current = self._config
        for key in path[:-1]:
            if not isinstance(current.get(key), dict):
                current[key] = {}
            current = current[key]
        current[path[-1]] = value

    def _validate_config(self) -> None:
        """Validate required configuration values."""
        required_sections = ['sensor', 'weather_api', 'influxdb']

        for section in required_sections:
            if not isinstance(self._config.get(section), dict):
                raise ConfigError(f"Missing required configuration section: {section}")

        self._config['sensor']['interval'] = self._validate_interval(self._config['sensor'].get('interval'))

        weather_api = self._config['weather_api']
        if not weather_api.get('appid'):
            raise ConfigError("Weather API key must be set in config or WEATHER_API_APPID environment variable")
        weather_api.setdefault('units', DEFAULT_UNITS)
        self._locations = self._validate_locations(weather_api)

        influxdb = self._config['influxdb']
        if not influxdb.get('token'):
            raise ConfigError("InfluxDB token must be set in config or INFLUXDB_TOKEN environment variable")
        for key in ('hostname', 'org', 'bucket', 'measurement'):
            if not influxdb.get(key):
                raise ConfigError(f"Missing required InfluxDB setting: influxdb.{key}")

        logging_config = self._config.get('logging') or {}
        self._config['logging'] = {**DEFAULT_LOGGING, **logging_config}

    @staticmethod
    def _validate_interval(value: Any) -> int:
        """Coerce the polling interval to a positive number of seconds."""
        if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
            raise ConfigError(f"sensor.interval must be an integer, got {value!r}")
        try:
            interval = int(value)
        except (TypeError, ValueError):
            raise ConfigError(f"sensor.interval must be an integer, got {value!r}")
        if interval <= 0:
            raise ConfigError(f"sensor.interval must be greater than zero, got {interval}")
        return interval

    @staticmethod
    def _validate_locations(weather_api: Dict[str, Any]) -> Tuple[str, ...]:
        """Collect configured locations; a single api_location counts as a list of one."""
        locations = weather_api.get('locations')
        if locations is None and weather_api.get('api_location'):
            locations = [weather_api['api_location']]
        if isinstance(locations, str):
            locations = [locations]

        if not locations:
            raise ConfigError("Weather locations are empty! Aborting...")

        for location in locations:
            if not isinstance(location, str) or not location.strip():
                raise ConfigError(f"Invalid weather location: {location!r}")

        return tuple(locations)

    def get(self, path: str, default: Any = None) -> Any:
        """Get configuration value using dot notation.

        Args:
            path: Configuration path using dot notation (e.g., 'influxdb.bucket')
            default: Default value if path not found

        Returns:
            Configuration value or default
        """
        keys = path.split('.')
        current = self._config

        try:
            for key in keys:
                current = current[key]
            return current
        except (KeyError, TypeError):
            return default

    def get_sensor_config(self) -> Dict[str, Any]:
        """Get sensor configuration."""
        return self._config['sensor'].copy()

    def get_weather_api_config(self) -> Dict[str, Any]:
        """Get weather API configuration."""
        return self._config['weather_api'].copy()

    def get_influxdb_config(self) -> Dict[str, Any]:
        """Get InfluxDB configuration."""
        return self._config['influxdb'].copy()

    def get_logging_config(self) -> Dict[str, Any]:
        """Get logging configuration."""
        return self._config['logging'].copy()

    @property
    def interval(self) -> int:
        """Polling interval in seconds."""
        return self._config['sensor']['interval']

    @property
    def locations(self) -> Tuple[str, ...]:
        """Configured locations, in polling order."""
        return self._locations

    @property
    def config_path(self) -> str:
        """Get path to configuration file."""
        return self._config_path
