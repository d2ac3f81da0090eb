"""
Auctioneer Auction Module.

Provides the auction entity and its expiry rules:
- Auction record, status and product condition
- Duration parsing and resolution with fallback
- Expiry predicate shared by every store backend
"""

from auctioneer.core.auction.entity import (
    Auction,
    AuctionStatus,
    ProductCondition,
    create_auction,
)

from auctioneer.core.auction.expiry import (
    DurationResolver,
    DEFAULT_AUCTION_DURATION,
    parse_duration,
    duration_seconds,
    expiry_cutoff,
    is_expired,
)

__all__ = [
    # Entity
    "Auction",
    "AuctionStatus",
    "ProductCondition",
    "create_auction",
    # Expiry
    "DurationResolver",
    "DEFAULT_AUCTION_DURATION",
    "parse_duration",
    "duration_seconds",
    "expiry_cutoff",
    "is_expired",
]
