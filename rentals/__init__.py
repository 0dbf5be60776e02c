"""Rental listings and application tracking."""

__version__ = "0.1.0"
