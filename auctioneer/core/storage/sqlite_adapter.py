"""
SQLite adapter for the auctions table.

Owns the schema and the per-thread connections; DurableAuctionStore maps
between entities and the plain dict rows used here.
"""

import sqlite3
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from auctioneer.utils.logger import get_logger

logger = get_logger("storage.sqlite")


class SQLiteAdapter:
    """
    SQLite backend for the auctions collection.

    One row per auction, keyed by id. Each thread gets its own connection;
    the scheduler thread and caller threads never share one. Write
    conflicts are resolved by SQLite's own locking (WAL mode, busy timeout).
    Connections of exited threads are closed the next time a thread opens
    one, so thread-per-request callers do not accumulate them.
    """

    def __init__(self, db_path: Path):
        self.db_path = db_path
        self._conn_local = threading.local()
        self._connections: List[Tuple[threading.Thread, sqlite3.Connection]] = []
        self._connections_lock = threading.Lock()

        # Ensure directory exists
        if not db_path.parent.exists():
            db_path.parent.mkdir(parents=True, exist_ok=True)

        self._init_schema()

    def _get_conn(self) -> sqlite3.Connection:
        """Get or create connection for current thread."""
        if not hasattr(self._conn_local, "conn"):
            conn = sqlite3.connect(
                self.db_path,
                timeout=30.0,
                check_same_thread=False
            )
            conn.row_factory = sqlite3.Row
            # Enable WAL mode for better concurrency
            conn.execute("PRAGMA journal_mode=WAL;")
            conn.execute("PRAGMA synchronous=NORMAL;")
            self._conn_local.conn = conn
            logger.debug(f"Opened connection to {self.db_path} for {threading.current_thread().name}")
            with self._connections_lock:
                self._prune_dead_connections()
                self._connections.append((threading.current_thread(), conn))
        return self._conn_local.conn

    def _prune_dead_connections(self):
        """Close connections owned by threads that have exited. Caller holds the lock."""
        alive = []
        for thread, conn in self._connections:
            if thread.is_alive():
                alive.append((thread, conn))
            else:
                conn.close()
        if len(alive) < len(self._connections):
            logger.debug(f"Closed {len(self._connections) - len(alive)} connection(s) of finished threads")
        self._connections = alive

    def _init_schema(self):
        """Initialize database schema."""
        conn = self._get_conn()
        with conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS auctions (
                    id TEXT PRIMARY KEY,
                    product_name TEXT NOT NULL,
                    category TEXT NOT NULL,
                    description TEXT NOT NULL,
                    condition INTEGER NOT NULL,
                    status INTEGER NOT NULL,
                    timestamp INTEGER NOT NULL
                )
            """)
            # Serves the expiry sweep filter
            conn.execute(
                "CREATE INDEX IF NOT EXISTS idx_auction_status_ts ON auctions(status, timestamp);"
            )

    def close(self):
        """Close every connection opened by this adapter."""
        with self._connections_lock:
            for _, conn in self._connections:
                conn.close()
            self._connections.clear()
        self._conn_local = threading.local()

    # =========================================================================
    # Auction Operations
    # =========================================================================

    def insert_auction(self, row: Dict[str, Any]):
        """Insert a new auction row. Raises sqlite3.IntegrityError on duplicate id."""
        conn = self._get_conn()
        with conn:
            conn.execute(
                "INSERT INTO auctions (id, product_name, category, description, condition, status, timestamp) "
                "VALUES (:id, :product_name, :category, :description, :condition, :status, :timestamp)",
                row
            )

    def upsert_auction(self, row: Dict[str, Any]):
        """Insert or replace an auction row."""
        conn = self._get_conn()
        with conn:
            conn.execute(
                "INSERT OR REPLACE INTO auctions (id, product_name, category, description, condition, status, timestamp) "
                "VALUES (:id, :product_name, :category, :description, :condition, :status, :timestamp)",
                row
            )

    def get_auction(self, auction_id: str) -> Optional[Dict[str, Any]]:
        """Get auction row by id."""
        conn = self._get_conn()
        cursor = conn.execute("SELECT * FROM auctions WHERE id = ?", (auction_id,))
        row = cursor.fetchone()
        return dict(row) if row else None

    def update_status_where(self, new_status: int, current_status: int, max_timestamp: int) -> int:
        """
        Bulk status update in a single statement.

        Sets `status = new_status` on every row with `status = current_status`
        and `timestamp <= max_timestamp`.

        Returns:
            Number of rows updated
        """
        conn = self._get_conn()
        with conn:
            cursor = conn.execute(
                "UPDATE auctions SET status = ? WHERE status = ? AND timestamp <= ?",
                (new_status, current_status, max_timestamp)
            )
        return cursor.rowcount

    def count_auctions(self, status: Optional[int] = None) -> int:
        conn = self._get_conn()
        if status is None:
            cursor = conn.execute("SELECT COUNT(*) as cnt FROM auctions")
        else:
            cursor = conn.execute("SELECT COUNT(*) as cnt FROM auctions WHERE status = ?", (status,))
        return cursor.fetchone()['cnt']
