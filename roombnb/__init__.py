"""Roombnb: REST backend for a short-term room rental marketplace."""

__version__ = "0.1.0"
