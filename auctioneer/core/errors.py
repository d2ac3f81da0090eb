"""
Error types raised by the auction stores and entities.

A missing record is a LookupError, a bad entity a ValueError, so callers
that only know the builtin hierarchy can still handle them.
"""


class AuctionError(Exception):
    """Base class for all auctioneer errors."""


class AuctionNotFoundError(AuctionError, LookupError):
    """No auction is stored under the requested id."""

    def __init__(self, auction_id: str):
        super().__init__(f"Auction not found: {auction_id}")
        self.auction_id = auction_id


class StorageError(AuctionError):
    """The backing store failed to serve a request."""


class StorageWriteError(StorageError):
    """A write against the backing store failed."""


class DuplicateAuctionError(StorageWriteError):
    """An auction with the same id already exists."""

    def __init__(self, auction_id: str):
        super().__init__(f"Auction already exists: {auction_id}")
        self.auction_id = auction_id


class InvalidAuctionError(AuctionError, ValueError):
    """Auction fields failed validation."""
