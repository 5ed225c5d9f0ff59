"""Brightside - positive news classification, reading history, and recommendations."""

__version__ = "0.1.0"
