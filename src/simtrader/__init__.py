"""Simtrader - portfolio valuation, leveraged-position risk and indicator engine."""

__version__ = "0.1.0"
