"""
InMemoryAuctionStore - Dict-backed auction store for tests and single-process use.

Nothing survives a restart. Expiry is a full scan under the store lock
using the same predicate as the SQL update of the durable store.
"""

import threading
from dataclasses import replace
from datetime import timedelta
from typing import Dict, Optional

from auctioneer.core.auction.entity import Auction, AuctionStatus
from auctioneer.core.auction.expiry import is_expired
from auctioneer.core.errors import (
    AuctionNotFoundError,
    DuplicateAuctionError,
    InvalidAuctionError,
)
from auctioneer.utils.logger import get_logger

logger = get_logger("storage.memory")


def _require_id(auction: Auction) -> None:
    if not auction.auction_id:
        raise InvalidAuctionError("auction_id must not be empty")


class InMemoryAuctionStore:
    """
    Dict-backed auction store.

    All access goes through one lock, so a sweep never interleaves with a
    create or a read. Records are copied in and out: callers never hold a
    reference to the stored object.
    """

    def __init__(self):
        self._auctions: Dict[str, Auction] = {}
        self._lock = threading.Lock()

    def create(self, auction: Auction) -> None:
        _require_id(auction)
        with self._lock:
            if auction.auction_id in self._auctions:
                raise DuplicateAuctionError(auction.auction_id)
            self._auctions[auction.auction_id] = replace(auction)

    def save(self, auction: Auction) -> None:
        _require_id(auction)
        with self._lock:
            self._auctions[auction.auction_id] = replace(auction)

    def find_by_id(self, auction_id: str) -> Auction:
        with self._lock:
            auction = self._auctions.get(auction_id)
            if auction is None:
                raise AuctionNotFoundError(auction_id)
            return replace(auction)

    def close_expired(self, now: int, duration: timedelta) -> int:
        """Scan every record and complete the expired ones in place."""
        closed = 0
        with self._lock:
            for auction in self._auctions.values():
                if is_expired(auction.status, auction.timestamp, now, duration):
                    auction.complete()
                    closed += 1

        if closed:
            logger.info(f"Closed {closed} expired auction(s)")
        return closed

    def count(self, status: Optional[AuctionStatus] = None) -> int:
        with self._lock:
            if status is None:
                return len(self._auctions)
            return sum(1 for a in self._auctions.values() if a.status == status)
