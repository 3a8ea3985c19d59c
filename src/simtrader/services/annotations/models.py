"""Data models for chart annotations."""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class TrendlineGeometry:
    """Pixel-space endpoints of a line drawn on a chart."""

    start_x: float
    start_y: float
    end_x: float
    end_y: float

    @property
    def length(self) -> float:
        return math.hypot(self.end_x - self.start_x, self.end_y - self.start_y)


@dataclass(frozen=True)
class Trendline:
    """A stored trendline with its session-unique id."""

    id: str
    start_x: float
    start_y: float
    end_x: float
    end_y: float

    @property
    def geometry(self) -> TrendlineGeometry:
        return TrendlineGeometry(self.start_x, self.start_y, self.end_x, self.end_y)
