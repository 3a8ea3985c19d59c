"""Core domain primitives: errors and price feed contract."""
