import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime, JSON, Uuid, Index
from sqlalchemy.dialects.postgresql import JSONB
from app.core.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
DocumentType = JSON().with_variant(JSONB(), "postgresql")


class Job(Base):
    """
    A job posting stored as a client-supplied document.

    `document` holds the fields exactly as the client sent them. The other
    columns are projections of that document so the listing endpoints can
    filter and sort in the database.
    """
    __tablename__ = "jobs"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    # Projections of the document
    title = Column(String, nullable=True, index=True)
    category = Column(String, nullable=True, index=True)
    deadline = Column(DateTime(timezone=True), nullable=True, index=True)
    buyer_email = Column(String, nullable=True, index=True)

    document = Column(DocumentType, nullable=False, default=dict)

    # Insertion order doubles as the natural listing order
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=utcnow)

    __table_args__ = (
        Index("ix_jobs_created_at_id", "created_at", "id"),
    )

    def to_document(self) -> dict:
        """Return the stored document with its id, as served to clients."""
        return {"_id": str(self.id), **(self.document or {})}

    def __repr__(self):
        return f"<Job(id={self.id}, title='{self.title}', category='{self.category}')>"
