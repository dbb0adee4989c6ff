"""Typed records for the OpenWeatherMap current weather response.

The provider omits blocks that do not apply (no ``rain`` when it is dry, no
``grnd_level`` over flat terrain), so every missing value decodes to its zero
value. Values that are present but of the wrong type are rejected with
``ValueError``.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping


def _section(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise ValueError(f"'{key}' must be an object, got {type(value).__name__}")
    return value


def _float(data: Mapping[str, Any], key: str) -> float:
    value = data.get(key)
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"'{key}' must be a number, got {value!r}")
    try:
        return float(value)
    except OverflowError:
        raise ValueError(f"'{key}' is out of range for a float")


def _int(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"'{key}' must be an integer, got {value!r}")
    return value


def _str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"'{key}' must be a string, got {value!r}")
    return value


@dataclass(frozen=True)
class Coordinates:
    lon: float = 0.0
    lat: float = 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Coordinates":
        return cls(lon=_float(data, "lon"), lat=_float(data, "lat"))


@dataclass(frozen=True)
class Condition:
    """One entry of the ``weather`` list (e.g. 500 / Rain / light rain / 10d)."""

    id: int = 0
    main: str = ""
    description: str = ""
    icon: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Condition":
        return cls(
            id=_int(data, "id"),
            main=_str(data, "main"),
            description=_str(data, "description"),
            icon=_str(data, "icon"),
        )


@dataclass(frozen=True)
class MainReadings:
    temp: float = 0.0
    feels_like: float = 0.0
    temp_min: float = 0.0
    temp_max: float = 0.0
    pressure: float = 0.0
    humidity: float = 0.0
    sea_level: float = 0.0
    grnd_level: float = 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MainReadings":
        return cls(**{name: _float(data, name) for name in cls.__dataclass_fields__})


@dataclass(frozen=True)
class Wind:
    speed: float = 0.0
    deg: float = 0.0
    gust: float = 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Wind":
        return cls(speed=_float(data, "speed"), deg=_float(data, "deg"), gust=_float(data, "gust"))


@dataclass(frozen=True)
class Precipitation:
    """Rain or snow volume in mm for the last one and three hours."""

    last_hour: float = 0.0
    last_3_hours: float = 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Precipitation":
        return cls(last_hour=_float(data, "1h"), last_3_hours=_float(data, "3h"))


@dataclass(frozen=True)
class SystemInfo:
    type: int = 0
    id: int = 0
    country: str = ""
    sunrise: int = 0
    sunset: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SystemInfo":
        return cls(
            type=_int(data, "type"),
            id=_int(data, "id"),
            country=_str(data, "country"),
            sunrise=_int(data, "sunrise"),
            sunset=_int(data, "sunset"),
        )


@dataclass(frozen=True)
class WeatherRecord:
    """Decoded current weather observation for one location."""

    coord: Coordinates = field(default_factory=Coordinates)
    weather: List[Condition] = field(default_factory=list)
    base: str = ""
    main: MainReadings = field(default_factory=MainReadings)
    visibility: int = 0
    wind: Wind = field(default_factory=Wind)
    clouds: int = 0
    rain: Precipitation = field(default_factory=Precipitation)
    snow: Precipitation = field(default_factory=Precipitation)
    dt: int = 0
    sys: SystemInfo = field(default_factory=SystemInfo)
    timezone: int = 0
    id: int = 0
    name: str = ""
    cod: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WeatherRecord":
        """Build a record from the decoded JSON body.

        Raises:
            ValueError: If the body or one of its values has the wrong type
        """
        if not isinstance(data, Mapping):
            raise ValueError(f"response body must be an object, got {type(data).__name__}")

        conditions = data.get("weather") or []
        if not isinstance(conditions, list):
            raise ValueError("'weather' must be a list")
        for condition in conditions:
            if not isinstance(condition, Mapping):
                raise ValueError("'weather' entries must be objects")

        return cls(
            coord=Coordinates.from_dict(_section(data, "coord")),
            weather=[Condition.from_dict(condition) for condition in conditions],
            base=_str(data, "base"),
            main=MainReadings.from_dict(_section(data, "main")),
            visibility=_int(data, "visibility"),
            wind=Wind.from_dict(_section(data, "wind")),
            clouds=_int(_section(data, "clouds"), "all"),
            rain=Precipitation.from_dict(_section(data, "rain")),
            snow=Precipitation.from_dict(_section(data, "snow")),
            dt=_int(data, "dt"),
            sys=SystemInfo.from_dict(_section(data, "sys")),
            timezone=_int(data, "timezone"),
            id=_int(data, "id"),
            name=_str(data, "name"),
            cod=_cod(data),
        )


def _cod(data: Mapping[str, Any]) -> int:
    # Error payloads carry "cod" as a string ("404"); observations as an int.
    value = data.get("cod")
    if isinstance(value, str) and value.isdigit():
        return int(value)
    return _int(data, "cod")
