"""
CRUD operations for Bid documents.

A bidder may place only one bid per job. The check runs before the insert,
and the (email, job_id) unique constraint catches concurrent submissions
that both pass it.
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from app.models.bid import Bid
from app.schemas.bid import BidFields
from app.schemas.common import UpdateResult


class DuplicateBidError(Exception):
    """The bidder already has a bid on this job."""

    def __init__(self, email: Optional[str], job_id: Optional[str]):
        self.email = email
        self.job_id = job_id
        super().__init__(f"Bid already exists for {email} on job {job_id}")


def _without_id(document: dict) -> dict:
    return {key: value for key, value in document.items() if key != "_id"}


def _apply_document(bid: Bid, document: dict) -> None:
    fields = BidFields.model_validate(document)
    bid.email = fields.email
    bid.job_id = fields.job_id
    bid.buyer_email = fields.buyer_email
    bid.status = fields.status
    bid.document = document


def get_by_id(db: Session, bid_id: UUID) -> Optional[Bid]:
    return db.query(Bid).filter(Bid.id == bid_id).first()


def get_by_bidder(db: Session, email: Optional[str], job_id: Optional[str]) -> Optional[Bid]:
    """Find the bid this bidder placed on this job, if any."""
    return db.query(Bid).filter(Bid.email == email, Bid.job_id == job_id).first()


def get_by_email(db: Session, email: str) -> List[Bid]:
    """Bids placed by this bidder."""
    return db.query(Bid).filter(Bid.email == email).order_by(Bid.created_at, Bid.id).all()


def get_by_buyer(db: Session, email: str) -> List[Bid]:
    """Bids received on jobs owned by this buyer."""
    return db.query(Bid).filter(Bid.buyer_email == email).order_by(Bid.created_at, Bid.id).all()


def create(db: Session, document: dict) -> Bid:
    """
    Insert a bid unless the bidder already bid on the job.

    Args:
        db: Database session
        document: The bid fields exactly as the client sent them

    Returns:
        Created Bid instance

    Raises:
        DuplicateBidError: If a bid with the same email and jobId exists
    """
    document = _without_id(document)
    db_bid = Bid()
    _apply_document(db_bid, document)

    if get_by_bidder(db, db_bid.email, db_bid.job_id):
        raise DuplicateBidError(db_bid.email, db_bid.job_id)

    db.add(db_bid)
    try:
        db.commit()
    except IntegrityError:
        # Lost the race against a concurrent submission
        db.rollback()
        raise DuplicateBidError(db_bid.email, db_bid.job_id)

    db.refresh(db_bid)
    return db_bid


def update(db: Session, bid_id: UUID, fields: dict) -> UpdateResult:
    """
    Merge fields (typically {"status": ...}) into an existing bid.

    Returns:
        UpdateResult; matched_count is 0 when the bid does not exist

    Raises:
        DuplicateBidError: If the new email and jobId belong to another bid
    """
    bid = get_by_id(db, bid_id)
    if not bid:
        return UpdateResult(matched_count=0, modified_count=0)

    current = dict(bid.document or {})
    merged = {**current, **_without_id(fields)}
    if merged == current:
        return UpdateResult(matched_count=1, modified_count=0)

    _apply_document(bid, merged)
    email, job_id = bid.email, bid.job_id

    with db.no_autoflush:
        other = get_by_bidder(db, email, job_id)
    if other is not None and other.id != bid.id:
        db.rollback()
        raise DuplicateBidError(email, job_id)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise DuplicateBidError(email, job_id)

    return UpdateResult(matched_count=1, modified_count=1)
