import pytest
from fastapi.testclient import TestClient

from zapstock.application.store import RecordStore
from zapstock.infrastructure.db import SqlBlobStore, make_engine

class FakeOracle:
    """Stands in for the Gemini client; records every message it sees."""

    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []
        self.configured = True
        self.on_call = None

    async def extract(self, message):
        self.calls.append(message)
        if self.on_call:
            self.on_call()
        if self.error:
            raise self.error
        return self.result

@pytest.fixture
def anyio_backend():
    return "asyncio"

@pytest.fixture
def blobs():
    blob_store = SqlBlobStore(make_engine("sqlite://"))
    blob_store.init_models()
    return blob_store

@pytest.fixture
def store(blobs):
    return RecordStore(blobs)

@pytest.fixture
def oracle():
    return FakeOracle()

@pytest.fixture
def client(store, oracle):
    from zapstock.main import app
    from zapstock.api.deps import get_store, get_oracle

    app.state.store = store
    app.state.oracle = oracle
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_oracle] = lambda: oracle
    yield TestClient(app)
    app.dependency_overrides.clear()
