"""Measurement points and the synthetic diurnal generator."""

from __future__ import annotations

import math
import random
from dataclasses import asdict, dataclass
from datetime import datetime, tzinfo
from typing import Any, Dict, Mapping, Optional

POINT_FIELDS = ("et0", "temp", "humidity", "wind", "solar", "predicted")
NON_NEGATIVE_FIELDS = ("et0", "wind", "solar", "predicted")


@dataclass(frozen=True)
class Point:
    """Single evapotranspiration/weather sample on the daily grid."""

    timestamp: int
    et0: float
    temp: float
    humidity: float
    wind: float
    solar: float
    predicted: float

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Point":
        """Build a point from a decoded JSON object, validating value ranges."""
        if not isinstance(payload, Mapping):
            raise ValueError(f"Expected a JSON object for a point, got {type(payload).__name__}")
        missing = [key for key in ("timestamp",) + POINT_FIELDS if key not in payload]
        if missing:
            raise ValueError(f"Point is missing keys: {', '.join(missing)}")
        try:
            timestamp = int(payload["timestamp"])
            values = {key: float(payload[key]) for key in POINT_FIELDS}
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Point has a non-numeric value: {exc}") from exc

        for key, value in values.items():
            if not math.isfinite(value):
                raise ValueError(f"Point field '{key}' is not finite")
        for key in NON_NEGATIVE_FIELDS:
            if values[key] < 0:
                raise ValueError(f"Point field '{key}' must be >= 0, got {values[key]}")
        if not 0.0 <= values["humidity"] <= 100.0:
            raise ValueError(f"Point humidity must be within [0, 100], got {values['humidity']}")
        return cls(timestamp=timestamp, **values)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class PointGenerator:
    """Produces points from a sinusoidal day curve plus uniform sensor jitter.

    Every quantity follows the same phase, peaking at 12:00 local time, so the
    scatter charts show coherent correlations. Pass a seeded ``random.Random``
    for reproducible output and ``tz`` to pin the hour-of-day to a zone other
    than the process-local one.
    """

    def __init__(self, rng: Optional[random.Random] = None, tz: Optional[tzinfo] = None) -> None:
        self.rng = rng or random.Random()
        self.tz = tz

    def _hour(self, timestamp: int) -> int:
        return datetime.fromtimestamp(timestamp / 1000.0, tz=self.tz).hour

    def _noise(self, low: float, high: float) -> float:
        # half-open [low, high)
        return low + self.rng.random() * (high - low)

    def generate(self, timestamp: int) -> Point:
        shape = math.sin((self._hour(timestamp) - 6) * math.pi / 12)
        uniform = self._noise

        et0 = max(0.0, 0.5 + 0.4 * shape + uniform(0.0, 0.1))
        temp = 15.0 + 10.0 * shape + uniform(0.0, 2.0)
        humidity = min(100.0, max(0.0, 60.0 - 20.0 * shape + uniform(0.0, 5.0)))
        wind = 2.0 + uniform(0.0, 3.0)
        solar = max(0.0, 800.0 * shape + uniform(0.0, 100.0))
        predicted = max(0.0, et0 + uniform(-0.1, 0.1))

        return Point(
            timestamp=timestamp,
            et0=et0,
            temp=temp,
            humidity=humidity,
            wind=wind,
            solar=solar,
            predicted=predicted,
        )
