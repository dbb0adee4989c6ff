"""Mapping of weather observations to measurement points."""

from .point_mapper import PointMapper, MeasurementPoint

__all__ = ['PointMapper', 'MeasurementPoint']
