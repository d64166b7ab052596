import logging
from typing import Any, Dict, List, Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import get_listing_params, job_document, job_id_param, require_owner
from app.crud import job as job_crud
from app.schemas.common import CountResponse, DeleteResult, InsertOneResult, UpdateResult
from app.schemas.job import JobListingParams

router = APIRouter(tags=["Jobs"])
logger = logging.getLogger(__name__)


@router.get("/jobs", response_model=List[Dict[str, Any]])
def list_jobs(db: Session = Depends(get_db)):
    """
    List every job in insertion order.
    """
    return [job.to_document() for job in job_crud.get_all(db)]


@router.get("/job/{job_id}", response_model=Optional[Dict[str, Any]])
def get_job(job_id: UUID = Depends(job_id_param), db: Session = Depends(get_db)):
    """
    Retrieve a job by ID.

    Returns null when no job has this ID.
    """
    job = job_crud.get_by_id(db, job_id)
    return job.to_document() if job else None


@router.get("/jobs/{email}", response_model=List[Dict[str, Any]])
def list_jobs_by_buyer(email: str = Depends(require_owner), db: Session = Depends(get_db)):
    """
    List the jobs posted by the signed-in buyer.

    The session's email must match the path email (403 otherwise).
    """
    return [job.to_document() for job in job_crud.get_by_buyer(db, email)]


@router.post("/job", response_model=InsertOneResult)
def create_job(
    document: Dict[str, Any] = Depends(job_document),
    db: Session = Depends(get_db)
):
    """
    Save a new job posting.

    The body is stored as sent; the response carries the new job's ID.
    """
    new_job = job_crud.create(db, document)

    logger.info(f"Created job {new_job.id}: {new_job.title}")

    return InsertOneResult(inserted_id=str(new_job.id))


@router.put("/job/{job_id}", response_model=UpdateResult)
def update_job(
    job_id: UUID = Depends(job_id_param),
    document: Dict[str, Any] = Depends(job_document),
    db: Session = Depends(get_db)
):
    """
    Update a job, creating it under this ID if it does not exist.

    Fields in the body replace the stored ones; other stored fields are kept.
    """
    result = job_crud.upsert(db, job_id, document)

    if result.upserted_id:
        logger.info(f"Upserted job {job_id}")
    else:
        logger.info(f"Updated job {job_id} (modified: {result.modified_count})")

    return result


@router.delete("/job/{job_id}", response_model=DeleteResult)
def delete_job(job_id: UUID = Depends(job_id_param), db: Session = Depends(get_db)):
    """
    Delete a job by ID. Bids on the job are kept.
    """
    deleted = job_crud.delete(db, job_id)

    if deleted:
        logger.info(f"Deleted job {job_id}")

    return DeleteResult(deleted_count=1 if deleted else 0)


@router.get("/jobs-all", response_model=List[Dict[str, Any]])
def list_jobs_page(
    params: JobListingParams = Depends(get_listing_params),
    db: Session = Depends(get_db)
):
    """
    List one page of jobs with optional search, category filter and deadline sort.

    Query parameters:
        limit: Page size (omit for every match)
        cpage: 1-based page number (default: 1)
        filter: Exact category
        sort: "asc" for earliest deadline first, anything else for latest first
        search: Case-insensitive substring of the job title
    """
    jobs = job_crud.get_page(db, params)
    return [job.to_document() for job in jobs]


@router.get("/jobs-count", response_model=CountResponse)
def count_jobs(
    category: Optional[str] = Query(None, alias="filter"),
    search: Optional[str] = Query(None),
    db: Session = Depends(get_db)
):
    """
    Count jobs for pagination.

    Without parameters this is the total number of jobs. With `filter`
    and/or `search` it counts the same jobs GET /jobs-all would page through.
    """
    return CountResponse(result=job_crud.count(db, category=category or None, search=search or None))
