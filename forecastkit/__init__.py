"""Client-side time-series forecasting toolkit."""

__version__ = "0.1.0"
