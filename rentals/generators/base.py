"""Base class for the demo data generators."""

from __future__ import annotations

import random
from abc import ABC
from datetime import datetime, timedelta

from faker import Faker


class BaseGenerator(ABC):
    """Shared Faker instance and private random stream.

    Each generator owns its ``random.Random`` so seeding one never changes
    another's output, and the global ``random`` module is left alone.

    Parameters
    ----------
    seed : int | None
        Random seed for reproducibility.
    locale : str
        Faker locale (default ``en_US``).
    """

    def __init__(self, seed: int | None = None, locale: str = "en_US") -> None:
        self.fake = Faker(locale)
        self.random = random.Random(seed)
        if seed is not None:
            self.fake.seed_instance(seed)

    def moment_before(self, now: datetime, days_back: int) -> datetime:
        """A whole-second moment in the ``days_back`` days before ``now``."""
        return now - timedelta(seconds=self.random.randint(0, days_back * 24 * 3600))
