"""Bistro restaurant site: reservation form backend."""

__version__ = "0.1.0"
