"""
Auctioneer

Auction persistence with automatic expiry:
- Dual storage backends (in-memory, SQLite)
- Background sweeper that completes auctions whose window elapsed
- Duration configuration with a safe fallback
"""

__version__ = "0.1.0"
