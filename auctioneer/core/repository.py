"""
AuctionRepository - Store plus expiry scheduler behind one object.

Building a repository starts sweeping; callers only create and read
auctions. `stop()` belongs in the process shutdown sequence.
"""

import time
from typing import Callable, Optional

from auctioneer.core.auction.entity import Auction, AuctionStatus
from auctioneer.core.auction.expiry import DurationResolver
from auctioneer.core.config import ServiceConfig
from auctioneer.core.scheduler import DEFAULT_SWEEP_INTERVAL, ExpiryScheduler
from auctioneer.core.storage.base import AuctionStore
from auctioneer.core.storage.durable_store import DurableAuctionStore
from auctioneer.core.storage.memory_store import InMemoryAuctionStore
from auctioneer.utils.logger import get_logger

logger = get_logger("repository")


class AuctionRepository:
    """
    Auction access for the API layer, with automatic expiry.

    Usage:
        with AuctionRepository(InMemoryAuctionStore()) as repo:
            repo.create(auction)
            repo.find_by_id(auction.auction_id)
    """

    def __init__(
        self,
        store: AuctionStore,
        resolver: Optional[DurationResolver] = None,
        interval: float = DEFAULT_SWEEP_INTERVAL,
        clock: Callable[[], float] = time.time,
    ):
        self.store = store
        self.resolver = resolver or DurationResolver()
        self.scheduler = ExpiryScheduler(
            store=store,
            resolver=self.resolver,
            interval=interval,
            clock=clock,
        )

    @classmethod
    def from_config(cls, config: ServiceConfig) -> "AuctionRepository":
        """Build the store named by `config.backend` and start sweeping it."""
        if config.backend == "sqlite":
            store = DurableAuctionStore(config.data_dir, config.db_name)
        else:
            store = InMemoryAuctionStore()

        logger.info(f"Using {config.backend} auction store")
        return cls(
            store=store,
            resolver=DurationResolver(config.auction_interval),
            interval=config.sweep_interval,
        )

    def create(self, auction: Auction) -> None:
        self.store.create(auction)
        logger.debug(f"Auction created: {auction.auction_id}")

    def find_by_id(self, auction_id: str) -> Auction:
        return self.store.find_by_id(auction_id)

    def count(self, status: Optional[AuctionStatus] = None) -> int:
        return self.store.count(status)

    def sweep_now(self) -> int:
        """Close expired auctions immediately instead of waiting for a tick."""
        return self.scheduler.sweep_now()

    def stop(self, timeout: Optional[float] = None) -> None:
        """Stop the expiry scheduler. Safe to call more than once."""
        self.scheduler.stop(timeout)

    def __enter__(self) -> "AuctionRepository":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
