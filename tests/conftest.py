import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from sqlalchemy.orm import sessionmaker
from app.core.exceptions import TransportFailure
from app.database.connection import Base, make_engine
from app.database.document_store import DocumentStore
from app.models.document import StoredDocument  # noqa: F401
from app.schemas.catalog import CategoryRef

DATABASES = ["retailers", "buyers"]


class RecordingStore(DocumentStore):
    """DocumentStore that records every path touched and can fail on demand."""

    def __init__(self, session_factory):
        super().__init__(session_factory)
        self.reads = []
        self.fail_reads = set()
        self.fail_writes = set()
        self.fail_deletes = set()

    async def get(self, path):
        self.reads.append(path)
        if path in self.fail_reads:
            raise TransportFailure(f"read of {path} refused")
        return await super().get(path)

    async def query(self, collection_path, filters=None, limit=None):
        self.reads.append(collection_path)
        if collection_path in self.fail_reads:
            raise TransportFailure(f"query of {collection_path} refused")
        return await super().query(collection_path, filters, limit)

    async def set(self, path, record, merge=False):
        if path in self.fail_writes:
            raise TransportFailure(f"write of {path} refused")
        await super().set(path, record, merge)

    async def delete(self, path):
        if path in self.fail_deletes:
            raise TransportFailure(f"delete of {path} refused")
        await super().delete(path)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture()
def engine(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'catalog.db'}")
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def store(engine):
    return RecordingStore(sessionmaker(autocommit=False, autoflush=False, bind=engine))


@pytest.fixture()
def categories():
    return [
        CategoryRef(name="Wallpapers", slug="wallpapers"),
        CategoryRef(name="Wall Art", slug="wall-art"),
    ]


@pytest.fixture()
def databases():
    return list(DATABASES)


@pytest.fixture()
def make_product():
    return build_product


def build_product(title="Linen Wallpaper", db="retailers", category="wallpapers", **extra):
    record = {
        "title": title,
        "code": "WP-001",
        "description": "Textured linen wallpaper",
        "price": 45.0,
        "images": ["https://img.example.com/linen-1.jpg"],
        "specifications": "Roll: 10m, Finish: matte",
        "attributes": {"color": ["beige", "grey"], "material": "linen"},
        "stock": 12,
        "stock_status": "In Stock",
        "created_at": "2026-01-10T09:00:00+00:00",
        "db": db,
        "category": category,
        "status": "Draft",
    }
    record.update(extra)
    return record
