"""
AuctionStore - the contract every storage backend satisfies.
"""

from datetime import timedelta
from typing import Optional, Protocol, runtime_checkable

from auctioneer.core.auction.entity import Auction, AuctionStatus


@runtime_checkable
class AuctionStore(Protocol):
    """
    Protocol for auction storage backends.

    Implementations must be safe to call from several threads at once:
    the expiry scheduler sweeps from its own thread while callers create
    and read auctions.
    """

    def create(self, auction: Auction) -> None:
        """
        Insert a new auction.

        Raises:
            DuplicateAuctionError: If the id is already stored
            StorageWriteError: If the backend write fails
        """
        ...

    def save(self, auction: Auction) -> None:
        """Insert or replace an auction."""
        ...

    def find_by_id(self, auction_id: str) -> Auction:
        """
        Return the current state of an auction.

        Raises:
            AuctionNotFoundError: If no auction has this id
        """
        ...

    def close_expired(self, now: int, duration: timedelta) -> int:
        """
        Complete every ACTIVE auction that has run for at least `duration`.

        Returns:
            Number of auctions closed (0 is not an error)

        Raises:
            StorageWriteError: If the bulk update fails
        """
        ...

    def count(self, status: Optional[AuctionStatus] = None) -> int:
        """Number of stored auctions, optionally filtered by status."""
        ...
