"""Application settings and configuration management using Pydantic."""

from functools import lru_cache
from typing import List

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Main application settings combining all configuration sections."""

    # Environment and deployment
    environment: str = "development"
    debug: bool = False

    # Price feed settings
    price_symbol: str = "ICP-USD"

    # Indicator settings
    rsi_period: int = 14
    rsi_overbought: float = 70.0
    rsi_oversold: float = 30.0
    macd_fast: int = 12
    macd_slow: int = 26
    macd_signal: int = 9
    sma_periods: List[int] = [20, 50, 100, 200]
    ema_period: int = 20

    # Chart annotation settings
    min_trendline_length: float = 20.0

    # Logging settings
    log_level: str = "INFO"
    log_format: str = "structured"  # 'structured' or 'plain'
    log_file_enabled: bool = False
    log_file_path: str = "data/simtrader.log"
    log_max_file_size: str = "10MB"
    log_backup_count: int = 5

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",  # Ignore extra environment variables
    }

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Validate environment setting."""
        valid_environments = ["development", "testing", "production"]
        if v.lower() not in valid_environments:
            raise ValueError(f"Environment must be one of: {valid_environments}")
        return v.lower()

    @field_validator(
        "rsi_period", "macd_fast", "macd_slow", "macd_signal", "ema_period"
    )
    @classmethod
    def validate_period(cls, v):
        """Validate indicator periods are positive."""
        if v < 1:
            raise ValueError("Indicator periods must be positive integers")
        return v

    @field_validator("sma_periods")
    @classmethod
    def validate_sma_periods(cls, v):
        """Validate moving average periods."""
        if any(period < 1 for period in v):
            raise ValueError("Moving average periods must be positive integers")
        return sorted(set(v))

    @field_validator("rsi_overbought", "rsi_oversold")
    @classmethod
    def validate_rsi_threshold(cls, v):
        """Validate RSI zone thresholds lie on the RSI scale."""
        if v < 0 or v > 100:
            raise ValueError("RSI thresholds must be between 0 and 100")
        return v

    @field_validator("min_trendline_length")
    @classmethod
    def validate_min_trendline_length(cls, v):
        """Validate minimum trendline drag length."""
        if v < 0:
            raise ValueError("Minimum trendline length cannot be negative")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v):
        """Validate log format."""
        valid_formats = ["structured", "plain"]
        if v.lower() not in valid_formats:
            raise ValueError(f"Log format must be one of: {valid_formats}")
        return v.lower()

    @model_validator(mode="after")
    def validate_cross_fields(self):
        """Validate settings that depend on each other."""
        if self.macd_fast >= self.macd_slow:
            raise ValueError("MACD fast period must be shorter than slow period")
        if self.rsi_oversold >= self.rsi_overbought:
            raise ValueError("RSI oversold threshold must be below overbought")
        return self


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Application configuration instance
    """
    return Settings()
