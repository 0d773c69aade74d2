from sqlalchemy import Column, String, JSON, DateTime
from datetime import datetime
from app.database.connection import Base

class StoredDocument(Base):
    __tablename__ = "documents"

    path = Column(String, primary_key=True, index=True)
    collection = Column(String, nullable=False, index=True)
    doc_id = Column(String, nullable=False)

    data = Column(JSON, nullable=False, default=dict)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
