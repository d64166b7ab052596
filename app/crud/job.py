"""
CRUD operations for Job documents.

Implements the Repository pattern to encapsulate all database operations
for jobs, including the filter/sort/paginate query behind GET /jobs-all.
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy.orm import Query, Session
from app.models.job import Job
from app.schemas.common import UpdateResult
from app.schemas.job import JobFields, JobListingParams, SortOrder


def _without_id(document: dict) -> dict:
    """Drop a client-supplied _id; ids are assigned by the store."""
    return {key: value for key, value in document.items() if key != "_id"}


def _apply_document(job: Job, document: dict) -> None:
    """Store the document and refresh the projection columns from it."""
    fields = JobFields.model_validate(document)
    job.title = fields.title
    job.category = fields.category
    job.deadline = fields.deadline
    job.buyer_email = fields.buyer_email
    job.document = document


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term matches as a literal substring."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def apply_listing_filters(
    query: Query,
    category: Optional[str] = None,
    search: Optional[str] = None
) -> Query:
    """
    Restrict a Job query by title search and exact category.

    Both predicates are optional and combine with AND.
    """
    if search:
        query = query.filter(Job.title.ilike(f"%{escape_like(search)}%", escape="\\"))

    if category:
        query = query.filter(Job.category == category)

    return query


def create(db: Session, document: dict) -> Job:
    """
    Insert a new job document.

    Args:
        db: Database session
        document: The job fields exactly as the client sent them

    Returns:
        Created Job instance with id
    """
    db_job = Job()
    _apply_document(db_job, _without_id(document))

    db.add(db_job)
    db.commit()
    db.refresh(db_job)

    return db_job


def get_by_id(db: Session, job_id: UUID) -> Optional[Job]:
    """
    Retrieve a job by its ID.

    Returns:
        Job instance if found, None otherwise
    """
    return db.query(Job).filter(Job.id == job_id).first()


def get_all(db: Session) -> List[Job]:
    """Retrieve every job in insertion order."""
    return db.query(Job).order_by(Job.created_at, Job.id).all()


def get_by_buyer(db: Session, email: str) -> List[Job]:
    """Retrieve every job posted by the buyer with this email."""
    return (
        db.query(Job)
        .filter(Job.buyer_email == email)
        .order_by(Job.created_at, Job.id)
        .all()
    )


def get_page(db: Session, params: JobListingParams) -> List[Job]:
    """
    Retrieve one page of jobs matching the listing parameters.

    Filters by search/category, orders by deadline when a sort is given
    (jobs without a deadline sort lowest), then skips `limit * (cpage - 1)` rows
    and takes `limit`. Insertion order breaks ties so consecutive pages never overlap.

    Args:
        db: Database session
        params: Validated listing parameters

    Returns:
        List of Job instances, at most `params.limit` long
    """
    query = apply_listing_filters(db.query(Job), params.category, params.search)

    if params.sort is not None:
        if params.sort == SortOrder.ASC:
            query = query.order_by(Job.deadline.asc().nulls_first())
        else:
            query = query.order_by(Job.deadline.desc().nulls_last())

    query = query.order_by(Job.created_at, Job.id)

    return query.offset(params.skip).limit(params.limit).all()


def count(
    db: Session,
    category: Optional[str] = None,
    search: Optional[str] = None
) -> int:
    """
    Count jobs, optionally restricted by the same filters as get_page.

    With no filters this is the total number of jobs.
    """
    return apply_listing_filters(db.query(Job), category, search).count()


def upsert(db: Session, job_id: UUID, fields: dict) -> UpdateResult:
    """
    Merge fields into a job, inserting it under job_id if it does not exist.

    Top-level keys in `fields` replace the stored ones; other stored keys
    are kept.

    Returns:
        UpdateResult with matched/modified counts, or the upserted id
    """
    fields = _without_id(fields)
    job = get_by_id(db, job_id)

    if not job:
        job = Job(id=job_id)
        _apply_document(job, fields)
        db.add(job)
        db.commit()
        return UpdateResult(upserted_id=str(job_id), upserted_count=1)

    current = dict(job.document or {})
    merged = {**current, **fields}
    if merged == current:
        return UpdateResult(matched_count=1, modified_count=0)

    _apply_document(job, merged)
    db.commit()

    return UpdateResult(matched_count=1, modified_count=1)


def delete(db: Session, job_id: UUID) -> bool:
    """
    Delete a job by ID. Bids referencing the job are left untouched.

    Returns:
        True if deleted, False if not found
    """
    job = get_by_id(db, job_id)
    if not job:
        return False

    db.delete(job)
    db.commit()

    return True
