"""Order book, depth aggregation, match result messages and rolling 24-hour ticker for a spot exchange."""

__version__ = "0.1.0"