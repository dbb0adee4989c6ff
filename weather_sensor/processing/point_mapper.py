"""Maps weather records to time-series measurement points."""

import logging
from dataclasses import dataclass, field
from typing import Dict, Any, Union

from ..config.config_manager import ConfigManager
from ..weather.models import WeatherRecord


FieldValue = Union[int, float]


@dataclass(frozen=True)
class MeasurementPoint:
    """One point to be written: measurement name, tags and numeric fields.

    The timestamp is assigned by the store at write time.
    """

    measurement: str
    tags: Dict[str, str] = field(default_factory=dict)
    fields: Dict[str, FieldValue] = field(default_factory=dict)


class PointMapper:
    """Turns decoded weather observations into measurement points."""

    def __init__(self, config: ConfigManager) -> None:
        """Initialize point mapper with configuration.

        Args:
            config: Configuration manager instance
        """
        self.config = config
        self.logger = logging.getLogger(__name__)
        self.measurement = config.get_influxdb_config()['measurement']

    def to_point(self, record: WeatherRecord, location: str) -> MeasurementPoint:
        """Map a weather record to a measurement point.

        Args:
            record: Decoded weather observation
            location: Location query the record was fetched with

        Returns:
            Measurement point tagged with location, city and country
        """
        tags = {
            'location': location,
            'city': record.name,
            'country': record.sys.country,
        }

        fields: Dict[str, FieldValue] = {
            'visibility': record.visibility,
            'clouds': record.clouds,
            'wind_speed': record.wind.speed,
            'wind_bearing': record.wind.deg,
            'wind_gusts': record.wind.gust,
            'rain_1h': record.rain.last_hour,
            'rain_3h': record.rain.last_3_hours,
            'snow_1h': record.snow.last_hour,
            'snow_3h': record.snow.last_3_hours,
            'humidity': record.main.humidity,
            'temperature': record.main.temp,
            'temperature_max': record.main.temp_max,
            'temperature_min': record.main.temp_min,
            'pressure': self.derive_pressure(record),
        }

        return MeasurementPoint(measurement=self.measurement, tags=tags, fields=fields)

    @staticmethod
    def derive_pressure(record: WeatherRecord) -> float:
        """Pressure at the location's elevation when reported, sea-level otherwise."""
        if record.main.grnd_level == 0:
            return record.main.pressure
        return record.main.grnd_level

    def format_for_logging(self, point: MeasurementPoint) -> str:
        """Format a point as a single log line.

        Args:
            point: Measurement point

        Returns:
            Formatted log string
        """
        tags_str = ", ".join(f"{k}={v}" for k, v in point.tags.items())
        fields_str = ", ".join(f"{k}:{v}" for k, v in point.fields.items())
        return f"[{point.measurement}] {tags_str} | {fields_str}"

    def get_field_statistics(self, point: MeasurementPoint) -> Dict[str, Any]:
        """Generate basic statistics for a point's fields.

        Args:
            point: Measurement point

        Returns:
            Dictionary with basic statistics
        """
        zero_fields = [k for k, v in point.fields.items() if v == 0]

        return {
            "total_fields": len(point.fields),
            "zero_fields": len(zero_fields),
            "field_names": list(point.fields.keys()),
        }
