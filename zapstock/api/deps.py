from fastapi import Request

from zapstock.application.store import RecordStore
from zapstock.application.smart_fill import OrderOracle

def get_store(request: Request) -> RecordStore:
    return request.app.state.store

def get_oracle(request: Request) -> OrderOracle:
    return request.app.state.oracle
