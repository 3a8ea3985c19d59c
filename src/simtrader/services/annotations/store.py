"""In-memory trendline store scoped to one chart session."""

import itertools
import uuid
from typing import List, Optional, Tuple

from ...config.logging import get_logger
from ...config.settings import get_settings
from .models import Trendline, TrendlineGeometry

logger = get_logger(__name__)


class TrendlineStore:
    """Insertion-ordered collection of trendlines keyed by generated id."""

    def __init__(self, min_length: Optional[float] = None):
        self.logger = logger.bind(component="trendline_store")
        self.min_length = (
            min_length if min_length is not None else get_settings().min_trendline_length
        )
        self._trendlines: List[Trendline] = []
        self._counter = itertools.count(1)
        self._session = uuid.uuid4().hex[:8]

    def _next_id(self) -> str:
        # Counter keeps ids unique even for adds within the same millisecond
        return f"trendline-{self._session}-{next(self._counter)}"

    @property
    def trendlines(self) -> Tuple[Trendline, ...]:
        """Snapshot of stored trendlines in insertion order."""
        return tuple(self._trendlines)

    def __len__(self) -> int:
        return len(self._trendlines)

    def __contains__(self, trendline_id: str) -> bool:
        return any(t.id == trendline_id for t in self._trendlines)

    def add(self, geometry: TrendlineGeometry) -> Trendline:
        """
        Store a trendline under a fresh id.

        Args:
            geometry: Line endpoints

        Returns:
            The stored Trendline
        """
        trendline = Trendline(
            id=self._next_id(),
            start_x=geometry.start_x,
            start_y=geometry.start_y,
            end_x=geometry.end_x,
            end_y=geometry.end_y,
        )
        self._trendlines.append(trendline)
        self.logger.debug("Added trendline", trendline_id=trendline.id)
        return trendline

    def add_from_drag(
        self, start: Tuple[float, float], end: Tuple[float, float]
    ) -> Optional[Trendline]:
        """
        Store a trendline from a drag gesture if it is long enough.

        Args:
            start: (x, y) where the drag began
            end: (x, y) where the drag ended

        Returns:
            The stored Trendline, or None when the drag was too short
        """
        geometry = TrendlineGeometry(start[0], start[1], end[0], end[1])
        if geometry.length <= self.min_length:
            return None
        return self.add(geometry)

    def remove(self, trendline_id: str) -> None:
        """Remove a trendline by id; unknown ids are ignored."""
        self._trendlines = [t for t in self._trendlines if t.id != trendline_id]

    def clear(self) -> None:
        """Remove every trendline."""
        self._trendlines = []
