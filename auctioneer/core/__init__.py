"""Auction domain, storage backends and the expiry scheduler"""
from auctioneer.core.errors import (
    AuctionError,
    AuctionNotFoundError,
    StorageError,
    StorageWriteError,
    DuplicateAuctionError,
    InvalidAuctionError,
)
from auctioneer.core.scheduler import ExpiryScheduler, SchedulerState, DEFAULT_SWEEP_INTERVAL
from auctioneer.core.repository import AuctionRepository

__all__ = [
    # Errors
    "AuctionError",
    "AuctionNotFoundError",
    "StorageError",
    "StorageWriteError",
    "DuplicateAuctionError",
    "InvalidAuctionError",
    # Expiry
    "ExpiryScheduler",
    "SchedulerState",
    "DEFAULT_SWEEP_INTERVAL",
    "AuctionRepository",
]
