"""Tests for the InfluxDB writer."""

import logging
import pytest
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

from influxdb_client import WritePrecision
from influxdb_client.client.write_api import WriteType
from influxdb_client.rest import ApiException

from weather_sensor.database.influxdb_client import InfluxDBManager
from weather_sensor.processing.point_mapper import MeasurementPoint


@pytest.fixture
def point():
    return MeasurementPoint(
        measurement='weather',
        tags={'location': 'Berlin', 'city': 'Berlin', 'country': 'DE'},
        fields={'temperature': 10.5, 'pressure': 1012.0, 'visibility': 10000},
    )


@pytest.fixture
def client_cls():
    """Patch InfluxDBClient and return the mocked class."""
    with patch('weather_sensor.database.influxdb_client.InfluxDBClient') as mock_cls:
        yield mock_cls


def write_api_of(client_cls):
    client = client_cls.return_value.__enter__.return_value
    return client.write_api.return_value.__enter__.return_value


class TestInfluxDBManager:
    """Test cases for InfluxDBManager."""

    def test_write_options(self, mock_config):
        manager = InfluxDBManager(mock_config)

        assert manager.write_options.write_type == WriteType.synchronous
        assert manager.write_options.batch_size == 20

    def test_write_point_success(self, mock_config, client_cls, point):
        manager = InfluxDBManager(mock_config)

        assert manager.write_point(point) is True

        client_cls.assert_called_once_with(url='http://localhost:8086', token='test_token', org='home')
        write_api = write_api_of(client_cls)
        write_api.write.assert_called_once()
        kwargs = write_api.write.call_args.kwargs
        assert kwargs['bucket'] == 'weather'
        assert kwargs['org'] == 'home'

        # client is closed after every write
        client_cls.return_value.__exit__.assert_called_once()

    def test_write_point_line_protocol(self, mock_config, client_cls, point):
        manager = InfluxDBManager(mock_config)
        timestamp = datetime(2024, 1, 15, 10, 30, 0, tzinfo=timezone.utc)

        manager.write_point(point, timestamp)

        record = write_api_of(client_cls).write.call_args.kwargs['record']
        line = record.to_line_protocol()
        assert line.startswith('weather,city=Berlin,country=DE,location=Berlin ')
        assert 'temperature=10.5' in line
        assert 'visibility=10000i' in line
        assert line.endswith(str(int(timestamp.timestamp())))
        assert record._write_precision == WritePrecision.S

    def test_write_point_api_error(self, mock_config, client_cls, point, caplog):
        write_api_of(client_cls).write.side_effect = ApiException(status=401, reason="Unauthorized")
        manager = InfluxDBManager(mock_config)

        with caplog.at_level(logging.ERROR):
            assert manager.write_point(point) is False

        assert "Unauthorized" in caplog.text
        client_cls.return_value.__exit__.assert_called_once()

    def test_write_point_connection_error(self, mock_config, client_cls, point, caplog):
        write_api_of(client_cls).write.side_effect = ConnectionError("connection refused")
        manager = InfluxDBManager(mock_config)

        with caplog.at_level(logging.ERROR):
            assert manager.write_point(point) is False

        assert "connection refused" in caplog.text

    def test_test_connection(self, mock_config, client_cls):
        client_cls.return_value.__enter__.return_value.ping.return_value = True

        assert InfluxDBManager(mock_config).test_connection() is True

    def test_test_connection_failure(self, mock_config, client_cls):
        client_cls.return_value.__enter__.return_value.ping.side_effect = OSError("unreachable")

        assert InfluxDBManager(mock_config).test_connection() is False
