"""
API endpoints for bids.

Bidders list their own bids, buyers list the bids placed on their jobs, and
buyers move bids through their status (e.g. "In Progress", "Rejected").
"""

import logging
from typing import Any, Dict, List
from uuid import UUID
from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import bid_document, bid_id_param
from app.crud import bid as bid_crud
from app.crud.bid import DuplicateBidError
from app.schemas.common import InsertOneResult, UpdateResult

router = APIRouter(tags=["Bids"])
logger = logging.getLogger(__name__)

DUPLICATE_BID_MESSAGE = "You have already placed a bid for this job"


@router.get("/my-bids/{email}", response_model=List[Dict[str, Any]])
def list_my_bids(email: str, db: Session = Depends(get_db)):
    """List the bids placed by this bidder."""
    return [bid.to_document() for bid in bid_crud.get_by_email(db, email)]


@router.get("/bid-request/{email}", response_model=List[Dict[str, Any]])
def list_bid_requests(email: str, db: Session = Depends(get_db)):
    """List the bids placed on jobs owned by this buyer."""
    return [bid.to_document() for bid in bid_crud.get_by_buyer(db, email)]


@router.post(
    "/bid",
    response_model=InsertOneResult,
    responses={400: {"description": "Bid already placed", "content": {"text/plain": {}}}},
)
def create_bid(
    document: Dict[str, Any] = Depends(bid_document),
    db: Session = Depends(get_db)
):
    """
    Place a bid on a job.

    A bidder can bid once per job. A second bid with the same email and
    jobId is rejected with 400 and a plain-text message, and nothing is stored.
    """
    try:
        new_bid = bid_crud.create(db, document)
    except DuplicateBidError as e:
        logger.warning(f"Rejected duplicate bid: {e}")
        return PlainTextResponse(DUPLICATE_BID_MESSAGE, status_code=status.HTTP_400_BAD_REQUEST)

    logger.info(f"Created bid {new_bid.id} by {new_bid.email} on job {new_bid.job_id}")

    return InsertOneResult(inserted_id=str(new_bid.id))


@router.patch(
    "/bid/{bid_id}",
    response_model=UpdateResult,
    responses={400: {"description": "Bid already placed", "content": {"text/plain": {}}}},
)
def update_bid(
    bid_id: UUID = Depends(bid_id_param),
    document: Dict[str, Any] = Depends(bid_document),
    db: Session = Depends(get_db)
):
    """
    Update fields of a bid, typically its status.

    Unknown IDs are not created; matchedCount is 0 instead. Moving a bid onto
    an email and jobId pair that another bid already holds is rejected like a
    duplicate placement.
    """
    try:
        result = bid_crud.update(db, bid_id, document)
    except DuplicateBidError as e:
        logger.warning(f"Rejected bid update {bid_id}: {e}")
        return PlainTextResponse(DUPLICATE_BID_MESSAGE, status_code=status.HTTP_400_BAD_REQUEST)

    if result.matched_count:
        logger.info(f"Updated bid {bid_id}: {document}")

    return result
