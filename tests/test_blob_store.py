from unittest.mock import MagicMock

import pytest

from zapstock.core_settings import Settings
from zapstock.infrastructure.blob_store import RedisBlobStore, build_blob_store
from zapstock.infrastructure.db import SqlBlobStore

def test_sql_store_overwrites_slot(blobs):
    assert blobs.get("slot") is None
    blobs.put("slot", "[1]")
    blobs.put("slot", "[1,2]")
    assert blobs.get("slot") == "[1,2]"
    blobs.ping()

def test_redis_store_uses_one_key_per_slot():
    client = MagicMock()
    client.get.return_value = "[]"
    store = RedisBlobStore(client)
    store.put("zapstock_orders", "[]")
    assert store.get("zapstock_orders") == "[]"
    store.ping()
    client.set.assert_called_once_with("zapstock_orders", "[]")
    client.get.assert_called_once_with("zapstock_orders")
    client.ping.assert_called_once()

def test_build_sql_backend():
    store = build_blob_store(Settings(SNAPSHOT_BACKEND="sql", DATABASE_URL="sqlite://"))
    assert isinstance(store, SqlBlobStore)
    store.put("a", "b")
    assert store.get("a") == "b"

def test_build_unknown_backend():
    with pytest.raises(ValueError):
        build_blob_store(Settings(SNAPSHOT_BACKEND="s3"))
