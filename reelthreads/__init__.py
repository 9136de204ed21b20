"""Threaded comments and engagement aggregation for a social movie catalog."""

__version__ = "0.1.0"
