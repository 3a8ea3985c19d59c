"""Chart annotation state."""

from .models import Trendline, TrendlineGeometry
from .store import TrendlineStore

__all__ = ["Trendline", "TrendlineGeometry", "TrendlineStore"]
