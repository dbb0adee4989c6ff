"""Time-series storage."""

from .influxdb_client import InfluxDBManager

__all__ = ['InfluxDBManager']
