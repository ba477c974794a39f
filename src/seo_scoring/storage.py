# src/seo_scoring/storage.py
"""Persistence of content analyses, keyed by content hash."""

import json
import sqlite3
import threading
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, Dict, Any
import logging

from seo_scoring.config import settings

logger = logging.getLogger(__name__)

CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS content_analysis (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    content_page_id TEXT,
    content_hash TEXT NOT NULL UNIQUE,
    analysis_type TEXT NOT NULL DEFAULT 'comprehensive',
    content_score INTEGER NOT NULL,

    -- JSON documents
    readability_analysis TEXT NOT NULL,
    keyword_analysis TEXT NOT NULL,
    structure_analysis TEXT NOT NULL,
    recommendations TEXT NOT NULL,
    fallback_reasons TEXT NOT NULL DEFAULT '[]',

    degraded INTEGER NOT NULL DEFAULT 0,
    created_at TIMESTAMP NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_content_analysis_page
    ON content_analysis(content_page_id, created_at);
"""

JSON_COLUMNS = (
    "readability_analysis",
    "keyword_analysis",
    "structure_analysis",
    "recommendations",
    "fallback_reasons",
)

REQUIRED_FIELDS = ("content_hash", "content_score") + JSON_COLUMNS[:4]


class AbstractAnalysisStore(ABC):
    """Abstract base class defining the analysis store interface."""

    @abstractmethod
    def connect(self) -> None:
        """Establish the store connection."""
        pass

    @abstractmethod
    def close(self) -> None:
        """Close the store connection."""
        pass

    @abstractmethod
    def create_schema(self) -> None:
        """Create the necessary tables."""
        pass

    @abstractmethod
    def find_by_content_hash(self, content_hash: str) -> Optional[Dict[str, Any]]:
        """Look up the stored analysis for a content hash.

        Args:
            content_hash: Hash identifying the analysed input.

        Returns:
            The stored row, or None.
        """
        pass

    @abstractmethod
    def save_analysis(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """Store a new analysis.

        If an analysis with the same content hash already exists, the existing
        row is kept and returned.

        Args:
            record: Analysis fields. Must include 'content_hash', 'content_score'
                and the analysis documents.

        Returns:
            The stored row including its generated 'id', plus 'inserted':
            False when an existing row was kept instead of the given record.
        """
        pass

    @abstractmethod
    def get_analysis(self, analysis_id: int) -> Optional[Dict[str, Any]]:
        """Retrieve an analysis by id."""
        pass

    @abstractmethod
    def get_latest_for_content(self, content_id: str) -> Optional[Dict[str, Any]]:
        """Retrieve the most recent analysis stored for a content page."""
        pass


class LocalSqliteAnalysisStore(AbstractAnalysisStore):
    """SQLite analysis store for local storage."""

    def __init__(self, db_url: Optional[str] = None):
        """Initialize local SQLite store.

        Args:
            db_url: Database URL (sqlite:///path/to/db.db). Defaults to settings.DATABASE_URL.
        """
        self.db_url = db_url or settings.DATABASE_URL
        self.db_path = self.db_url.replace("sqlite:///", "")
        self.conn: Optional[sqlite3.Connection] = None
        self._lock = threading.Lock()
        self.connect()
        self.create_schema()

    def connect(self) -> None:
        """Establish SQLite connection."""
        self.conn = sqlite3.connect(self.db_path, check_same_thread=False)
        self.conn.row_factory = sqlite3.Row
        logger.debug(f"Connected to local SQLite database: {self.db_path}")

    def close(self) -> None:
        """Close SQLite connection."""
        if self.conn:
            self.conn.close()
            self.conn = None
            logger.debug("Closed local SQLite connection")

    def create_schema(self) -> None:
        """Create the content_analysis table if it doesn't exist."""
        with self._lock, self.conn:
            self.conn.executescript(CREATE_TABLE_SQL)
        logger.debug("Schema verified/created for local SQLite")

    def find_by_content_hash(self, content_hash: str) -> Optional[Dict[str, Any]]:
        return self._fetch_one(
            "SELECT * FROM content_analysis WHERE content_hash = ?",
            (content_hash,),
        )

    def save_analysis(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """Insert an analysis, keeping the existing row on a hash conflict."""
        missing = [name for name in REQUIRED_FIELDS if name not in record]
        if missing:
            raise ValueError(f"Missing required analysis fields: {', '.join(missing)}")

        row = {
            "content_page_id": record.get("content_page_id"),
            "content_hash": record["content_hash"],
            "analysis_type": record.get("analysis_type", "comprehensive"),
            "content_score": record["content_score"],
            "degraded": int(bool(record.get("degraded", False))),
            "created_at": record.get("created_at") or datetime.now().isoformat(),
        }
        for column in JSON_COLUMNS:
            row[column] = json.dumps(record.get(column, []))

        columns = ', '.join(row.keys())
        placeholders = ', '.join('?' for _ in row)
        insert_sql = (
            f"INSERT INTO content_analysis ({columns}) VALUES ({placeholders}) "
            "ON CONFLICT(content_hash) DO NOTHING"
        )

        with self._lock, self.conn:
            cursor = self.conn.execute(insert_sql, tuple(row.values()))
            inserted = cursor.rowcount > 0

        if inserted:
            logger.debug(f"Saved analysis for content hash: {row['content_hash']}")
        else:
            logger.debug(f"Analysis already stored for content hash: {row['content_hash']}")

        stored = self.find_by_content_hash(row["content_hash"])
        stored["inserted"] = inserted
        return stored

    def get_analysis(self, analysis_id: int) -> Optional[Dict[str, Any]]:
        return self._fetch_one(
            "SELECT * FROM content_analysis WHERE id = ?",
            (analysis_id,),
        )

    def get_latest_for_content(self, content_id: str) -> Optional[Dict[str, Any]]:
        return self._fetch_one(
            "SELECT * FROM content_analysis WHERE content_page_id = ? "
            "ORDER BY created_at DESC, id DESC LIMIT 1",
            (content_id,),
        )

    def _fetch_one(self, query_sql: str, params: tuple) -> Optional[Dict[str, Any]]:
        with self._lock:
            cursor = self.conn.execute(query_sql, params)
            row = cursor.fetchone()
        return self._decode_row(row) if row else None

    @staticmethod
    def _decode_row(row: sqlite3.Row) -> Dict[str, Any]:
        data = dict(row)
        for column in JSON_COLUMNS:
            data[column] = json.loads(data[column]) if data.get(column) else []
        data["degraded"] = bool(data.get("degraded"))
        return data


def get_store_client(
    backend: Optional[str] = None,
    **kwargs,
) -> AbstractAnalysisStore:
    """Factory function to create the appropriate analysis store.

    Args:
        backend: Storage backend ('local'). Defaults to settings.DB_BACKEND.
        **kwargs: Additional arguments passed to the store constructor.

    Returns:
        An instance of AbstractAnalysisStore.

    Raises:
        ValueError: If an unknown backend is specified.
    """
    backend = backend or settings.DB_BACKEND

    if backend == "local":
        logger.info("Using local SQLite analysis store")
        return LocalSqliteAnalysisStore(**kwargs)
    else:
        raise ValueError(
            f"Unknown storage backend: '{backend}'. "
            "Supported backends: 'local'"
        )
