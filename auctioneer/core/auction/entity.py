"""
Auction entity.

Only `status` and `timestamp` matter for expiry; the descriptive fields
are carried through storage untouched.
"""

import time
import uuid
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional, Tuple

from auctioneer.core.errors import InvalidAuctionError


# =============================================================================
# Constants
# =============================================================================

MIN_PRODUCT_NAME_LENGTH = 2
MIN_CATEGORY_LENGTH = 3
MIN_DESCRIPTION_LENGTH = 11


# =============================================================================
# Enums
# =============================================================================


class AuctionStatus(IntEnum):
    """Lifecycle status of an auction. Only ACTIVE -> COMPLETED is allowed."""
    ACTIVE = 0
    COMPLETED = 1


class ProductCondition(IntEnum):
    """Condition of the auctioned product."""
    NEW = 1
    USED = 2
    REFURBISHED = 3


# =============================================================================
# Entity
# =============================================================================


@dataclass
class Auction:
    """
    An auction record.

    `timestamp` is the epoch second the auction started; together with the
    configured duration it decides when the auction expires.
    """
    auction_id: str
    product_name: str
    category: str
    description: str
    condition: ProductCondition
    status: AuctionStatus = AuctionStatus.ACTIVE
    timestamp: int = field(default_factory=lambda: int(time.time()))

    @property
    def is_active(self) -> bool:
        return self.status == AuctionStatus.ACTIVE

    def complete(self) -> None:
        """Mark the auction completed. No-op if it already is."""
        self.status = AuctionStatus.COMPLETED

    def validate(self) -> Tuple[bool, str]:
        """
        Validate descriptive fields.

        Returns:
            (is_valid, error_message)
        """
        if not self.auction_id:
            return False, "auction_id must not be empty"

        if len(self.product_name) < MIN_PRODUCT_NAME_LENGTH:
            return False, f"product_name must be at least {MIN_PRODUCT_NAME_LENGTH} characters"

        if len(self.category) < MIN_CATEGORY_LENGTH:
            return False, f"category must be at least {MIN_CATEGORY_LENGTH} characters"

        if len(self.description) < MIN_DESCRIPTION_LENGTH:
            return False, f"description must be at least {MIN_DESCRIPTION_LENGTH} characters"

        if self.condition not in list(ProductCondition):
            return False, f"Unknown product condition: {self.condition}"

        return True, ""


# =============================================================================
# Factory
# =============================================================================


def create_auction(
    product_name: str,
    category: str,
    description: str,
    condition: ProductCondition,
    timestamp: Optional[int] = None,
) -> Auction:
    """
    Create a new active auction with a fresh id.

    Args:
        product_name: Name of the product on sale
        category: Product category
        description: Free-text description
        condition: Product condition
        timestamp: Start time in epoch seconds (defaults to now)

    Returns:
        A validated Auction in ACTIVE status

    Raises:
        InvalidAuctionError: If any field fails validation
    """
    try:
        condition = ProductCondition(condition)
    except ValueError as e:
        raise InvalidAuctionError(f"Unknown product condition: {condition}") from e

    auction = Auction(
        auction_id=str(uuid.uuid4()),
        product_name=product_name,
        category=category,
        description=description,
        condition=condition,
        status=AuctionStatus.ACTIVE,
        timestamp=int(time.time()) if timestamp is None else timestamp,
    )

    is_valid, error = auction.validate()
    if not is_valid:
        raise InvalidAuctionError(error)

    return auction
