"""InfluxDB client for storing virtual sensor readings."""

import logging
from datetime import datetime, timezone
from typing import Optional

from influxdb_client import InfluxDBClient, Point, WritePrecision
from influxdb_client.client.write_api import WriteOptions, WriteType
from influxdb_client.rest import ApiException

from ..config.config_manager import ConfigManager
from ..processing.point_mapper import MeasurementPoint


DEFAULT_BATCH_SIZE = 20


class InfluxDBManager:
    """Writes measurement points to InfluxDB.

    Every write opens its own client and closes it before returning, so no
    connection is held between ticks.
    """

    def __init__(self, config: ConfigManager) -> None:
        """Initialize InfluxDB manager with configuration.

        Args:
            config: Configuration manager instance
        """
        self.config = config
        self.logger = logging.getLogger(__name__)

        influxdb_config = config.get_influxdb_config()
        self.url = influxdb_config['hostname']
        self.org = influxdb_config['org']
        self.bucket = influxdb_config['bucket']
        self._token = influxdb_config['token']
        self.write_options = WriteOptions(
            write_type=WriteType.synchronous,
            batch_size=int(influxdb_config.get('batch_size', DEFAULT_BATCH_SIZE)),
        )

    def _open_client(self) -> InfluxDBClient:
        return InfluxDBClient(url=self.url, token=self._token, org=self.org)

    def write_point(self, point: MeasurementPoint, timestamp: Optional[datetime] = None) -> bool:
        """Write a single point and flush it immediately.

        Args:
            point: Measurement point to store
            timestamp: Point timestamp (defaults to now, UTC)

        Returns:
            True if write was successful, False otherwise
        """
        record = self._create_point(point, timestamp or datetime.now(timezone.utc))

        try:
            with self._open_client() as client:
                # Synchronous writes return only once the batch is flushed
                with client.write_api(write_options=self.write_options) as write_api:
                    write_api.write(bucket=self.bucket, org=self.org, record=record)

            self.logger.debug(f"Successfully wrote {point.measurement} for {point.tags.get('location')} to InfluxDB")
            return True

        except ApiException as e:
            self.logger.error(f"InfluxDB API error writing {point.tags.get('location')}: {e.status} {e.reason}")

        except Exception as e:
            self.logger.error(f"Unexpected error writing {point.tags.get('location')} to InfluxDB: {e}")

        return False

    def _create_point(self, point: MeasurementPoint, timestamp: datetime) -> Point:
        """Create an InfluxDB Point from a measurement point.

        Args:
            point: Measurement point
            timestamp: Point timestamp

        Returns:
            InfluxDB Point object
        """
        record = Point(point.measurement).time(timestamp, WritePrecision.S)

        for tag_name, value in point.tags.items():
            record.tag(tag_name, value)

        for field_name, value in point.fields.items():
            record.field(field_name, value)

        return record

    def test_connection(self) -> bool:
        """Test InfluxDB connection.

        Returns:
            True if the server answers a ping, False otherwise
        """
        try:
            with self._open_client() as client:
                return client.ping()

        except Exception as e:
            self.logger.error(f"InfluxDB connection test failed: {e}")
            return False
