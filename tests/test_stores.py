"""Tests for URL store implementations."""

import threading
from unittest.mock import MagicMock

import pytest
from sqlalchemy import text

from shortlink.core.database import create_db_engine
from shortlink.core.exceptions import DuplicateSlugError, NotFoundError, StoreError
from shortlink.stores import MemoryURLStore, SQLURLStore


class TestURLStoreContract:
    """Behaviour shared by every store."""

    def test_insert_and_get(self, store):
        """Test a stored mapping can be read back."""
        store.insert("abc123", "https://example.com")
        assert store.get("abc123") == "https://example.com"

    def test_get_missing(self, store):
        """Test unknown slugs raise NotFoundError."""
        with pytest.raises(NotFoundError):
            store.get("nope00")

    def test_duplicate_slug_rejected(self, store):
        """Test an existing slug is never overwritten."""
        store.insert("abc123", "https://example.com")
        with pytest.raises(DuplicateSlugError) as exc_info:
            store.insert("abc123", "https://other.example.com")
        assert exc_info.value.slug == "abc123"
        assert isinstance(exc_info.value, StoreError)
        assert store.get("abc123") == "https://example.com"

    def test_find_by_url(self, store):
        """Test the reverse lookup."""
        store.insert("abc123", "https://example.com")
        assert store.find_by_url("https://example.com") == "abc123"

    def test_find_by_url_missing(self, store):
        """Test unknown URLs raise NotFoundError."""
        with pytest.raises(NotFoundError):
            store.find_by_url("https://example.com")

    def test_find_by_url_is_literal(self, store):
        """Test the reverse lookup does not normalize URLs."""
        store.insert("abc123", "https://example.com")
        for variant in ["https://example.com/", "HTTPS://EXAMPLE.COM", " https://example.com"]:
            with pytest.raises(NotFoundError):
                store.find_by_url(variant)

    def test_duplicate_urls_allowed(self, store):
        """Test one URL may be stored under several slugs."""
        store.insert("aaaaaa", "https://example.com")
        store.insert("bbbbbb", "https://example.com")
        assert store.get("aaaaaa") == store.get("bbbbbb") == "https://example.com"
        assert store.find_by_url("https://example.com") in {"aaaaaa", "bbbbbb"}

    def test_nul_lookups_not_found(self, store):
        """Test values containing NUL are unknown rather than errors."""
        store.insert("abc123", "https://example.com")
        with pytest.raises(NotFoundError):
            store.get("abc123\x00")
        with pytest.raises(NotFoundError):
            store.find_by_url("https://example.com\x00")

    def test_ping(self, store):
        assert store.ping() is True

    def test_init_schema_is_idempotent(self, store):
        """Test bootstrapping twice keeps existing data."""
        store.insert("abc123", "https://example.com")
        store.init_schema()
        assert store.get("abc123") == "https://example.com"


class TestMemoryURLStore:
    """Tests specific to the in-memory store."""

    def test_first_slug_wins_reverse_lookup(self):
        store = MemoryURLStore()
        store.insert("aaaaaa", "https://example.com")
        store.insert("bbbbbb", "https://example.com")
        assert store.find_by_url("https://example.com") == "aaaaaa"

    def test_concurrent_inserts(self):
        """Test exactly one of many concurrent inserts of a slug wins."""
        store = MemoryURLStore()
        results = []

        def insert(i):
            try:
                store.insert("abc123", f"https://example.com/{i}")
                results.append(True)
            except DuplicateSlugError:
                results.append(False)

        threads = [threading.Thread(target=insert, args=(i,)) for i in range(20)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert results.count(True) == 1
        assert len(store) == 1


class TestSQLURLStore:
    """Tests specific to the relational store."""

    def test_schema(self, sql_store):
        """Test the table has the expected columns."""
        with sql_store.engine.connect() as conn:
            columns = conn.execute(text("PRAGMA table_info(urls)")).fetchall()
        by_name = {row[1]: row for row in columns}
        assert set(by_name) == {"slug", "original_url"}
        assert by_name["slug"][2] == "CHAR(6)"
        assert by_name["slug"][5] == 1  # primary key
        assert by_name["original_url"][3] == 1  # not null

    def test_slug_length(self):
        """Test the slug column width follows the configured length."""
        store = SQLURLStore(create_db_engine("sqlite://"), slug_length=8)
        store.init_schema()
        with store.engine.connect() as conn:
            columns = conn.execute(text("PRAGMA table_info(urls)")).fetchall()
        assert {row[1]: row[2] for row in columns}["slug"] == "CHAR(8)"
        store.close()

    def test_missing_table_is_store_error(self):
        """Test queries against an unbootstrapped database fail as StoreError."""
        store = SQLURLStore(create_db_engine("sqlite://"))
        with pytest.raises(StoreError):
            store.get("abc123")
        with pytest.raises(StoreError):
            store.insert("abc123", "https://example.com")
        store.close()

    def test_ping_failure(self):
        """Test ping reports a broken engine."""
        store = SQLURLStore(create_db_engine("sqlite:////nonexistent/dir/db.sqlite"))
        assert store.ping() is False

    def test_find_by_url_several_slugs(self, sql_store):
        """Test the lowest slug is returned when a URL has several."""
        sql_store.insert("bbbbbb", "https://example.com")
        sql_store.insert("aaaaaa", "https://example.com")
        assert sql_store.find_by_url("https://example.com") == "aaaaaa"
        assert sql_store.find_by_url("https://example.com") == "aaaaaa"

    def test_driver_value_error_is_store_error(self):
        """Test driver ValueErrors (unquotable values) become StoreError."""
        engine = MagicMock()
        conn = engine.begin.return_value.__enter__.return_value
        conn.execute.side_effect = ValueError(
            "A string literal cannot contain NUL (0x00) characters."
        )
        store = SQLURLStore(engine)

        with pytest.raises(StoreError):
            store.insert("abc123", "https://example.com")
        with pytest.raises(StoreError):
            store.execute("SELECT 1")
        assert store.ping() is False
