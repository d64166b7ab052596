import uuid
from sqlalchemy import Column, String, DateTime, Uuid, UniqueConstraint
from app.core.database import Base
from app.models.job import DocumentType, utcnow


class Bid(Base):
    """
    A bid placed by a freelancer against a job.

    `job_id` is the raw jobId from the document and is deliberately not a
    foreign key: deleting a job leaves its bids in place.
    """
    __tablename__ = "bids"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)

    # Projections of the document
    email = Column(String, nullable=True, index=True)
    job_id = Column(String, nullable=True, index=True)
    buyer_email = Column(String, nullable=True, index=True)
    status = Column(String, nullable=True)

    document = Column(DocumentType, nullable=False, default=dict)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=utcnow)

    # One bid per bidder per job
    __table_args__ = (
        UniqueConstraint("email", "job_id", name="uq_bids_email_job_id"),
    )

    def to_document(self) -> dict:
        return {"_id": str(self.id), **(self.document or {})}

    def __repr__(self):
        return f"<Bid(id={self.id}, email='{self.email}', job_id='{self.job_id}', status='{self.status}')>"
