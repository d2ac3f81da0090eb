"""
DurableAuctionStore - SQLite-backed auction store.

Records go through the AuctionRow model on the way in and out, so a row
that reaches the database always has a non-empty id and known enum values.
"""

import sqlite3
from datetime import timedelta
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from auctioneer.core.auction.entity import Auction, AuctionStatus, ProductCondition
from auctioneer.core.auction.expiry import expiry_cutoff
from auctioneer.core.errors import (
    AuctionNotFoundError,
    DuplicateAuctionError,
    InvalidAuctionError,
    StorageError,
    StorageWriteError,
)
from auctioneer.core.storage.sqlite_adapter import SQLiteAdapter
from auctioneer.utils.logger import get_logger

logger = get_logger("storage.durable")


class AuctionRow(BaseModel):
    """Persisted shape of an auction: one row per auction, keyed by `id`."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    product_name: str
    category: str
    description: str
    condition: ProductCondition
    status: AuctionStatus
    timestamp: int

    @classmethod
    def from_auction(cls, auction: Auction) -> "AuctionRow":
        return cls(
            id=auction.auction_id,
            product_name=auction.product_name,
            category=auction.category,
            description=auction.description,
            condition=auction.condition,
            status=auction.status,
            timestamp=auction.timestamp,
        )

    def to_auction(self) -> Auction:
        return Auction(
            auction_id=self.id,
            product_name=self.product_name,
            category=self.category,
            description=self.description,
            condition=self.condition,
            status=self.status,
            timestamp=self.timestamp,
        )


class DurableAuctionStore:
    """
    SQLite-backed auction store.

    Expiry is pushed down to the database: `close_expired` is one
    conditional UPDATE, so no rows are pulled into memory to evaluate the
    predicate. Concurrent sweeps (threads or processes sharing the file)
    are harmless because the update only matches ACTIVE rows.
    """

    def __init__(self, data_dir: Path, db_name: str = "auctions.db"):
        self.data_dir = data_dir
        self.db_path = data_dir / db_name
        self.adapter = SQLiteAdapter(self.db_path)

        logger.info(f"DurableAuctionStore initialized at {self.db_path}")

    def _to_row(self, auction: Auction) -> dict:
        try:
            return AuctionRow.from_auction(auction).model_dump(mode="json")
        except ValidationError as e:
            raise InvalidAuctionError(f"Invalid auction {auction.auction_id!r}: {e}") from e

    def create(self, auction: Auction) -> None:
        row = self._to_row(auction)
        try:
            self.adapter.insert_auction(row)
        except sqlite3.IntegrityError as e:
            raise DuplicateAuctionError(auction.auction_id) from e
        except sqlite3.Error as e:
            logger.error(f"Error trying to insert auction {auction.auction_id}: {e}")
            raise StorageWriteError("Error trying to insert auction") from e

    def save(self, auction: Auction) -> None:
        row = self._to_row(auction)
        try:
            self.adapter.upsert_auction(row)
        except sqlite3.Error as e:
            logger.error(f"Error trying to save auction {auction.auction_id}: {e}")
            raise StorageWriteError("Error trying to save auction") from e

    def find_by_id(self, auction_id: str) -> Auction:
        try:
            row = self.adapter.get_auction(auction_id)
        except sqlite3.Error as e:
            logger.error(f"Error trying to find auction {auction_id}: {e}")
            raise StorageError("Error trying to find auction") from e

        if row is None:
            raise AuctionNotFoundError(auction_id)
        return AuctionRow.model_validate(row).to_auction()

    def close_expired(self, now: int, duration: timedelta) -> int:
        """
        Complete expired auctions with a single bulk update:
        status = COMPLETED where status = ACTIVE and timestamp <= now - duration.
        """
        cutoff = expiry_cutoff(now, duration)
        try:
            closed = self.adapter.update_status_where(
                new_status=int(AuctionStatus.COMPLETED),
                current_status=int(AuctionStatus.ACTIVE),
                max_timestamp=cutoff,
            )
        except sqlite3.Error as e:
            raise StorageWriteError("Error trying to update expired auctions") from e

        if closed:
            logger.info(f"Closed {closed} expired auction(s)")
        return closed

    def count(self, status: Optional[AuctionStatus] = None) -> int:
        try:
            return self.adapter.count_auctions(None if status is None else int(status))
        except sqlite3.Error as e:
            raise StorageError("Error trying to count auctions") from e

    def close(self) -> None:
        """Release database connections."""
        self.adapter.close()
