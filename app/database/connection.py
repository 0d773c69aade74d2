import json
from functools import partial

from pydantic_core import to_jsonable_python
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from app.core.config import settings

Base = declarative_base()


def make_engine(url: str):
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(
        url,
        connect_args=connect_args,
        # documents are schemaless; datetimes and enums coming from callers are stored as JSON text
        json_serializer=partial(json.dumps, default=to_jsonable_python),
    )


engine = make_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_store():
    from app.database.document_store import DocumentStore

    return DocumentStore(SessionLocal)
