"""NSE Ticker backend: quotes and intraday charts for a fixed symbol list."""

__version__ = "0.1.0"
