"""
Weather Virtual Sensor

Polls the OpenWeatherMap current weather API for a list of locations and
stores each observation as a point in an InfluxDB time-series bucket.
"""

__version__ = "1.0.0"
__author__ = "Weather Sensor Team"
