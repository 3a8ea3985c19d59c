"""Services layer for Simtrader."""
