"""Demo data generators."""

from rentals.generators.application import ApplicationGenerator

__all__ = ["ApplicationGenerator"]
