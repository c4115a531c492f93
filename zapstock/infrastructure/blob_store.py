"""Snapshot backends: one opaque string per named slot."""

from typing import Optional, Protocol
import redis

from zapstock.core_settings import Settings
from .db import SqlBlobStore, make_engine

class BlobStore(Protocol):
    def get(self, name: str) -> Optional[str]: ...
    def put(self, name: str, payload: str) -> None: ...
    def ping(self) -> None: ...

class RedisBlobStore:
    def __init__(self, client: redis.Redis):
        self.client = client

    @classmethod
    def from_url(cls, url: str) -> "RedisBlobStore":
        return cls(redis.from_url(url, decode_responses=True))

    def get(self, name: str) -> Optional[str]:
        return self.client.get(name)

    def put(self, name: str, payload: str) -> None:
        self.client.set(name, payload)

    def ping(self) -> None:
        self.client.ping()

def build_blob_store(settings: Settings) -> BlobStore:
    backend = settings.SNAPSHOT_BACKEND.lower()
    if backend == "redis":
        return RedisBlobStore.from_url(settings.REDIS_URL)
    if backend == "sql":
        store = SqlBlobStore(make_engine(settings.DATABASE_URL))
        store.init_models()
        return store
    raise ValueError(f"Unknown SNAPSHOT_BACKEND: {settings.SNAPSHOT_BACKEND}")
