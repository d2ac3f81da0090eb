"""
Service configuration for Auctioneer.

Values come from the environment, optionally seeded from a .env file.
The auction duration is kept as the raw string; DurationResolver decides
what to do with it.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from auctioneer.core.scheduler import DEFAULT_SWEEP_INTERVAL
from auctioneer.utils.logger import get_logger

logger = get_logger("config")


# Environment variable names
ENV_AUCTION_INTERVAL = "AUCTION_INTERVAL"
ENV_SWEEP_INTERVAL = "SWEEP_INTERVAL"
ENV_BACKEND = "AUCTION_BACKEND"
ENV_DATA_DIR = "AUCTION_DATA_DIR"
ENV_LOG_DIR = "AUCTION_LOG_DIR"

BACKENDS = ("memory", "sqlite")


@dataclass
class ServiceConfig:
    """Runtime configuration parameters"""

    # Expiry
    auction_interval: Optional[str] = None  # Auction duration, e.g. "10m"
    sweep_interval: float = DEFAULT_SWEEP_INTERVAL  # Seconds between expiry sweeps

    # Storage
    backend: str = "memory"  # "memory" or "sqlite"
    data_dir: Path = Path("data")
    db_name: str = "auctions.db"

    # Logging
    log_dir: Path = Path("logs")  # Used when file logging is enabled

    def __post_init__(self):
        if self.backend not in BACKENDS:
            raise ValueError(f"Unknown backend {self.backend!r}, expected one of {BACKENDS}")
        if self.sweep_interval <= 0:
            raise ValueError(f"sweep_interval must be positive, got {self.sweep_interval}")

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


def load_config(env_file: Optional[str] = None) -> ServiceConfig:
    """
    Load configuration from the environment.

    Args:
        env_file: Optional .env file; values already set in the
            environment take precedence over it

    Returns:
        ServiceConfig instance
    """
    load_dotenv(env_file or find_dotenv(usecwd=True), override=False)

    sweep_interval = DEFAULT_SWEEP_INTERVAL
    raw_sweep = os.getenv(ENV_SWEEP_INTERVAL)
    if raw_sweep:
        try:
            sweep_interval = float(raw_sweep)
        except ValueError:
            sweep_interval = 0.0
        if not sweep_interval > 0:
            logger.warning(
                f"Invalid {ENV_SWEEP_INTERVAL} {raw_sweep!r}, using {DEFAULT_SWEEP_INTERVAL} seconds"
            )
            sweep_interval = DEFAULT_SWEEP_INTERVAL

    return ServiceConfig(
        auction_interval=os.getenv(ENV_AUCTION_INTERVAL),
        sweep_interval=sweep_interval,
        backend=os.getenv(ENV_BACKEND, "memory").lower(),
        data_dir=Path(os.getenv(ENV_DATA_DIR, "data")),
        log_dir=Path(os.getenv(ENV_LOG_DIR, "logs")),
    )
