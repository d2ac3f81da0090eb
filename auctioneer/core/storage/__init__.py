"""
Auction Storage Module.

Two interchangeable backends behind one AuctionStore contract:
- InMemoryAuctionStore: lock-guarded dict, for tests and embedding
- DurableAuctionStore: SQLite, expiry as a single bulk UPDATE
"""

from auctioneer.core.storage.base import AuctionStore
from auctioneer.core.storage.memory_store import InMemoryAuctionStore
from auctioneer.core.storage.durable_store import AuctionRow, DurableAuctionStore
from auctioneer.core.storage.sqlite_adapter import SQLiteAdapter

__all__ = [
    "AuctionStore",
    "InMemoryAuctionStore",
    "DurableAuctionStore",
    "AuctionRow",
    "SQLiteAdapter",
]
