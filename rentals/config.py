"""Configuration management for rentals."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from rentals.exceptions import ConfigurationError

DEFAULT_CATALOG_PATH = Path(__file__).parent / "data" / "properties.json"


@dataclass
class StoreConfig:
    """Document store configuration."""

    path: Path = field(default_factory=lambda: Path("rentals-store.json"))
    collection: str = "applications"


@dataclass
class CatalogConfig:
    """Static property catalog configuration."""

    path: Path = field(default_factory=lambda: DEFAULT_CATALOG_PATH)


@dataclass
class DashboardConfig:
    """Dashboard aggregation settings."""

    trend_days: int = 14
    week_days: int = 7
    month_days: int = 30
    recent_limit: int = 10
    guard_transitions: bool = True

    def __post_init__(self) -> None:
        if self.trend_days < 1:
            raise ConfigurationError(f"trend_days must be positive, got {self.trend_days}")
        if self.recent_limit < 1:
            raise ConfigurationError(f"recent_limit must be positive, got {self.recent_limit}")


@dataclass
class RentalsConfig:
    """Main configuration for rentals."""

    store: StoreConfig = field(default_factory=StoreConfig)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    dashboard: DashboardConfig = field(default_factory=DashboardConfig)
    seed: int | None = None
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "RentalsConfig":
        """Create config from environment variables."""
        store = StoreConfig(
            path=Path(os.getenv("RENTALS_STORE_PATH", "rentals-store.json")),
            collection=os.getenv("RENTALS_COLLECTION", "applications"),
        )

        catalog_path = os.getenv("RENTALS_CATALOG_PATH")
        catalog = CatalogConfig(path=Path(catalog_path)) if catalog_path else CatalogConfig()

        dashboard = DashboardConfig(
            trend_days=_int_env("TREND_DAYS", 14),
            recent_limit=_int_env("RECENT_LIMIT", 10),
            guard_transitions=os.getenv("GUARD_TRANSITIONS", "true").lower() == "true",
        )

        seed = os.getenv("SEED")

        return cls(
            store=store,
            catalog=catalog,
            dashboard=dashboard,
            seed=_int_env("SEED", 0) if seed else None,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc
