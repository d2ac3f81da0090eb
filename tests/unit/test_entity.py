"""
Tests for the Auction entity.

Tests cover:
1. Auction creation via factory
2. Field validation
3. Status transitions
"""

import time

import pytest

from auctioneer.core.auction import (
    Auction,
    AuctionStatus,
    ProductCondition,
    create_auction,
)
from auctioneer.core.errors import InvalidAuctionError


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def valid_fields():
    return dict(
        product_name="Test Product",
        category="Test Category",
        description="Test Description",
        condition=ProductCondition.NEW,
    )


# =============================================================================
# Factory Tests
# =============================================================================


class TestCreateAuction:
    """Tests for create_auction."""

    def test_new_auction_is_active(self, valid_fields):
        auction = create_auction(**valid_fields)

        assert auction.status == AuctionStatus.ACTIVE
        assert auction.is_active
        assert auction.product_name == "Test Product"

    def test_timestamp_defaults_to_now(self, valid_fields):
        before = int(time.time())
        auction = create_auction(**valid_fields)
        after = int(time.time())

        assert before <= auction.timestamp <= after

    def test_explicit_timestamp(self, valid_fields):
        auction = create_auction(**valid_fields, timestamp=1234)
        assert auction.timestamp == 1234

    def test_ids_are_unique(self, valid_fields):
        ids = {create_auction(**valid_fields).auction_id for _ in range(50)}
        assert len(ids) == 50

    def test_condition_from_int(self, valid_fields):
        valid_fields["condition"] = 2
        auction = create_auction(**valid_fields)
        assert auction.condition == ProductCondition.USED

    def test_unknown_condition_rejected(self, valid_fields):
        valid_fields["condition"] = 9
        with pytest.raises(InvalidAuctionError):
            create_auction(**valid_fields)

    @pytest.mark.parametrize("field,value", [
        ("product_name", "A"),
        ("category", "AB"),
        ("description", "too short"),
    ])
    def test_short_fields_rejected(self, valid_fields, field, value):
        valid_fields[field] = value
        with pytest.raises(InvalidAuctionError):
            create_auction(**valid_fields)

    def test_invalid_auction_error_is_value_error(self, valid_fields):
        valid_fields["product_name"] = ""
        with pytest.raises(ValueError):
            create_auction(**valid_fields)


# =============================================================================
# Entity Tests
# =============================================================================


class TestAuction:
    """Tests for Auction methods."""

    def test_validate_ok(self):
        auction = Auction("a1", "Test Product", "Test Category", "Test Description", ProductCondition.NEW)
        assert auction.validate() == (True, "")

    def test_validate_empty_id(self):
        auction = Auction("", "Test Product", "Test Category", "Test Description", ProductCondition.NEW)
        is_valid, error = auction.validate()
        assert not is_valid
        assert "auction_id" in error

    def test_complete(self):
        auction = Auction("a1", "Test Product", "Test Category", "Test Description", ProductCondition.NEW)
        auction.complete()
        assert auction.status == AuctionStatus.COMPLETED
        assert not auction.is_active

    def test_complete_is_idempotent(self):
        auction = Auction(
            "a1", "Test Product", "Test Category", "Test Description",
            ProductCondition.NEW, status=AuctionStatus.COMPLETED,
        )
        auction.complete()
        assert auction.status == AuctionStatus.COMPLETED


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
