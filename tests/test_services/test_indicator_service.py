"""Tests for timestamped indicator computation."""

import pytest
from pydantic import ValidationError

from simtrader.config.settings import Settings
from simtrader.core.price_feed import PriceSample
from simtrader.services.indicators import (
    IndicatorConfig,
    IndicatorSet,
    compute_indicators,
)


@pytest.fixture
def small_config():
    return IndicatorConfig(
        sma_periods=[3, 50],
        ema_period=3,
        rsi_period=14,
        macd_fast=12,
        macd_slow=26,
        macd_signal=9,
    )


class TestComputeIndicators:
    """Test compute_indicators over PriceSample sequences."""

    def test_series_tagged_with_window_end_timestamp(
        self, price_samples, small_config
    ):
        result = compute_indicators(price_samples, small_config)

        assert result.sma[3][0].timestamp == price_samples[2].timestamp
        assert result.ema[0].timestamp == price_samples[2].timestamp
        assert result.rsi[0].timestamp == price_samples[14].timestamp
        assert result.macd[0].timestamp == price_samples[33].timestamp
        assert result.macd[-1].timestamp == price_samples[-1].timestamp
        assert result.rsi[-1].timestamp == price_samples[-1].timestamp

    def test_series_lengths(self, price_samples, small_config):
        result = compute_indicators(price_samples, small_config)

        assert len(result.sma[3]) == 38
        assert result.sma[50] == []
        assert len(result.ema) == 38
        assert len(result.rsi) == 26
        assert len(result.macd) == 40 - 26 - 9 + 2

    def test_macd_points_consistent(self, price_samples, small_config):
        result = compute_indicators(price_samples, small_config)

        for point in result.macd:
            assert point.histogram == point.macd_line - point.signal_line

    def test_zone_and_volatility(self, price_samples, small_config):
        result = compute_indicators(price_samples, small_config)

        assert result.rsi_zone is not None
        assert result.volatility is not None and result.volatility > 0

    def test_empty_samples(self, small_config):
        result = compute_indicators([], small_config)

        assert isinstance(result, IndicatorSet)
        assert result.is_empty()
        assert result.volatility is None
        assert result.rsi_zone is None

    def test_rejects_unordered_samples(self, small_config):
        samples = [
            PriceSample(timestamp=2000, price=8.0),
            PriceSample(timestamp=1000, price=8.1),
        ]

        with pytest.raises(ValueError, match="ordered"):
            compute_indicators(samples, small_config)

    def test_defaults_from_settings(self, price_samples):
        result = compute_indicators(price_samples)

        assert set(result.sma) == {20, 50, 100, 200}
        assert len(result.sma[20]) == 21


class TestIndicatorConfig:
    """Test indicator configuration validation."""

    def test_from_settings(self):
        settings = Settings(rsi_period=21, sma_periods=[7, 30])

        config = IndicatorConfig.from_settings(settings)

        assert config.rsi_period == 21
        assert config.sma_periods == [7, 30]

    def test_rejects_fast_not_shorter_than_slow(self):
        with pytest.raises(ValidationError):
            IndicatorConfig(macd_fast=26, macd_slow=12)

    def test_rejects_non_positive_period(self):
        with pytest.raises(ValidationError):
            IndicatorConfig(rsi_period=0)
