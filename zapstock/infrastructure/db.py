from sqlalchemy import create_engine, String, Text, DateTime, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, sessionmaker
from sqlalchemy.pool import StaticPool
from datetime import datetime
from typing import Optional

class Base(DeclarativeBase):
    pass

class Snapshot(Base):
    """One row per collection slot; payload is the serialized collection."""
    __tablename__ = "snapshots"
    name: Mapped[str] = mapped_column(String(100), primary_key=True)
    payload: Mapped[str] = mapped_column(Text)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

def make_engine(database_url: str) -> Engine:
    kwargs = {}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        # In-memory databases live per connection; share a single one
        if database_url == "sqlite://" or ":memory:" in database_url:
            kwargs["poolclass"] = StaticPool
    return create_engine(database_url, echo=False, future=True, **kwargs)

class SqlBlobStore:
    """Key-value blob store backed by the ``snapshots`` table."""

    def __init__(self, engine: Engine):
        self.engine = engine
        self.SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    def init_models(self):
        Base.metadata.create_all(self.engine)

    def get(self, name: str) -> Optional[str]:
        with self.SessionLocal() as db:
            row = db.get(Snapshot, name)
            return row.payload if row else None

    def put(self, name: str, payload: str) -> None:
        with self.SessionLocal() as db:
            row = db.get(Snapshot, name)
            if row is None:
                db.add(Snapshot(name=name, payload=payload, updated_at=datetime.utcnow()))
            else:
                row.payload = payload
                row.updated_at = datetime.utcnow()
            db.commit()

    def ping(self) -> None:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1")).fetchone()
