"""Normalized centralized-exchange data types, with OKX REST and websocket payload handling."""

__version__ = "0.1.0"