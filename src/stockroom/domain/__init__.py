"""Domain layer for Stockroom."""
