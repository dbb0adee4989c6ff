"""Main application for the weather virtual sensor."""

import sys
import logging
import signal
from typing import Optional

from .config import ConfigManager, ConfigError
from .weather import WeatherClient, WeatherClientError
from .processing import PointMapper
from .database import InfluxDBManager
from .scheduler import Ticker, TickChannel, TickEvent


TICKER_JOIN_TIMEOUT = 5


class WeatherSensorApp:
    """Polls the weather API and writes one point per location per tick."""

    def __init__(
        self,
        config_path: Optional[str] = None,
        interval: Optional[int] = None,
        *,
        config: Optional[ConfigManager] = None,
        weather_client: Optional[WeatherClient] = None,
        point_mapper: Optional[PointMapper] = None,
        influxdb_manager: Optional[InfluxDBManager] = None,
    ) -> None:
        """Initialize the virtual sensor.

        Args:
            config_path: Path to configuration file (optional)
            interval: Polling interval override in seconds (optional)
            config: Already loaded configuration (takes precedence over config_path)
            weather_client: Weather client to use instead of building one
            point_mapper: Point mapper to use instead of building one
            influxdb_manager: InfluxDB manager to use instead of building one
        """
        self.config: Optional[ConfigManager] = config
        self.weather_client = weather_client
        self.point_mapper = point_mapper
        self.influxdb_manager = influxdb_manager
        self.logger: logging.Logger = logging.getLogger(__name__)
        self.channel = TickChannel()
        self.interval: Optional[int] = interval

        self._initialize(config_path)

    def _initialize(self, config_path: Optional[str] = None) -> None:
        """Initialize all components."""
        try:
            # Load configuration
            if self.config is None:
                self.config = ConfigManager(config_path)

            # Setup logging
            self._setup_logging()

            if not self.config.locations:
                raise ConfigError("Weather locations are empty! Aborting...")

            if self.interval is None:
                self.interval = self.config.interval
            elif self.interval <= 0:
                raise ConfigError(f"Polling interval must be greater than zero, got {self.interval}")

            # Initialize components
            self.weather_client = self.weather_client or WeatherClient(self.config)
            self.point_mapper = self.point_mapper or PointMapper(self.config)
            self.influxdb_manager = self.influxdb_manager or InfluxDBManager(self.config)

            self.logger.info(f"Weather virtual sensor initialized for {len(self.config.locations)} location(s)")

        except (OSError, ValueError) as e:
            print(f"Failed to initialize weather virtual sensor: {e}", file=sys.stderr)
            sys.exit(1)

    def _setup_logging(self) -> None:
        """Setup logging configuration."""
        log_config = self.config.get_logging_config()

        handlers = [logging.StreamHandler()]
        if log_config.get('file'):
            handlers.append(logging.FileHandler(log_config['file']))

        logging.basicConfig(
            level=getattr(logging, str(log_config.get('level', 'INFO')).upper(), logging.INFO),
            format=log_config.get('format', '%(asctime)s - %(name)s - %(levelname)s - %(message)s'),
            handlers=handlers
        )

    def _signal_handler(self, signum, frame) -> None:
        """Handle shutdown signals."""
        self.channel.request_stop(signum)

    def run_single_cycle(self) -> bool:
        """Fetch and store the weather for every location, in order.

        Returns:
            True if every location was fetched and written, False otherwise
        """
        success = True

        for location in self.config.locations:
            if self.channel.stop_requested:
                self.logger.info(f"Stop requested, skipping remaining locations from '{location}'")
                return False

            try:
                record = self.weather_client.fetch(location)
            except WeatherClientError as e:
                self.logger.error(f"Error fetching the weather: {e}")
                success = False
                continue

            self.logger.info(f"Weather fetched for location '{location}'")

            point = self.point_mapper.to_point(record, location)
            if self.influxdb_manager.write_point(point):
                self.logger.info(f"Stored {self.point_mapper.format_for_logging(point)}")
                self.logger.debug(f"Point statistics: {self.point_mapper.get_field_statistics(point)}")
            else:
                success = False

        return success

    def run_continuous(self) -> Optional[int]:
        """Run a cycle now and after every tick until a stop is requested.

        Returns:
            The signal number that stopped the loop, if any
        """
        previous_handlers = {
            sig: signal.signal(sig, self._signal_handler)
            for sig in (signal.SIGINT, signal.SIGTERM)
        }

        self.logger.info(f"Starting weather virtual sensor reporting each {self.interval} seconds...")

        if not self.influxdb_manager.test_connection():
            self.logger.warning(f"InfluxDB at {self.influxdb_manager.url} is not reachable yet, writes may fail")

        ticker = Ticker(self.channel, self.interval)
        ticker.start()

        try:
            while not self.channel.stop_requested:
                try:
                    if not self.run_single_cycle():
                        self.logger.warning("Polling cycle completed with issues")
                except Exception as e:
                    self.logger.error(f"Unexpected error in polling cycle: {e}")

                if self.channel.wait() is TickEvent.STOP:
                    break
        finally:
            ticker.stop()
            ticker.join(timeout=TICKER_JOIN_TIMEOUT)
            for sig, handler in previous_handlers.items():
                signal.signal(sig, handler)

        signum = self.channel.stop_signal
        name = signal.Signals(signum).name if signum is not None else "stop request"
        self.logger.info(f"Signal {name} captured, exiting...")
        return signum

    def cleanup(self) -> None:
        """Cleanup resources."""
        if self.weather_client:
            self.weather_client.close()

        self.logger.info("Weather virtual sensor shutdown complete")

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.cleanup()


def main(argv=None):
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description='Weather Virtual Sensor')
    parser.add_argument('--config', '-c', help='Path to configuration file')
    parser.add_argument('--single', '-s', action='store_true',
                        help='Run a single polling cycle instead of continuous')
    parser.add_argument('--interval', '-i', type=int, default=None,
                        help='Polling interval in seconds (default: sensor.interval from config)')

    args = parser.parse_args(argv)

    with WeatherSensorApp(args.config, args.interval) as app:
        if args.single:
            success = app.run_single_cycle()
            sys.exit(0 if success else 1)
        else:
            app.run_continuous()
            sys.exit(0)


if __name__ == '__main__':
    main()
