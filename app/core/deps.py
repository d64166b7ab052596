"""
FastAPI dependencies for authentication, ownership checks and request parsing.

These dependencies are used to protect endpoints and to turn raw path, query
and body values into validated inputs (400 on bad input).
"""

import logging
from typing import Any, Dict, Optional, Type
from uuid import UUID

from fastapi import Body, Depends, HTTPException, Query, status
from fastapi.security import APIKeyCookie
from jose import JWTError
from pydantic import BaseModel, ValidationError

from app.core.config import settings
from app.core.security import decode_token
from app.schemas.bid import BidFields
from app.schemas.job import JobFields, JobListingParams, SortOrder

logger = logging.getLogger(__name__)

# Session token carried in an HTTP-only cookie
session_cookie = APIKeyCookie(name=settings.SESSION_COOKIE_NAME, auto_error=False)

# Largest LIMIT/OFFSET the store accepts (signed 64-bit)
MAX_PAGING_VALUE = 2 ** 63 - 1


async def get_current_identity(token: Optional[str] = Depends(session_cookie)) -> dict:
    """
    Extract and validate the caller's identity from the session cookie.

    Raises:
        HTTPException 401: If the cookie is missing, the token is invalid or
            expired, or it carries no email claim
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized access",
    )

    if not token:
        logger.warning("Rejected request without session token")
        raise credentials_exception

    try:
        payload = decode_token(token)
    except JWTError as e:
        logger.warning(f"Rejected invalid session token: {e}")
        raise credentials_exception

    if not payload.get("email"):
        logger.warning("Rejected session token without email claim")
        raise credentials_exception

    return payload


def require_owner(email: str, identity: dict = Depends(get_current_identity)) -> str:
    """
    Ensure the path email belongs to the caller.

    Raises:
        HTTPException 403: If the verified email differs from the path email
    """
    if identity["email"] != email:
        logger.warning(f"Forbidden: {identity['email']} requested resources of {email}")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden access"
        )
    return email


def _parse_id(raw: str) -> UUID:
    try:
        return UUID(raw)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid id: {raw}"
        )


def job_id_param(job_id: str) -> UUID:
    return _parse_id(job_id)


def bid_id_param(bid_id: str) -> UUID:
    return _parse_id(bid_id)


def _positive_int(name: str, raw: Optional[str]) -> Optional[int]:
    if raw is None or raw == "":
        return None
    try:
        value = int(raw)
    except ValueError:
        value = 0
    if value < 1:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{name} must be a positive integer"
        )
    if value > MAX_PAGING_VALUE:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{name} must not exceed {MAX_PAGING_VALUE}"
        )
    return value


def get_listing_params(
    limit: Optional[str] = Query(None, description="Page size"),
    cpage: Optional[str] = Query(None, description="1-based page number"),
    category: Optional[str] = Query(None, alias="filter", description="Exact category match"),
    sort: Optional[str] = Query(None, description="'asc' sorts deadlines ascending, anything else descending"),
    search: Optional[str] = Query(None, description="Case-insensitive title substring"),
) -> JobListingParams:
    """
    Parse GET /jobs-all query parameters.

    A missing limit means no limit and a missing cpage means the first page.
    Values that are present but not positive integers are rejected, as are
    pages whose offset would not fit in the store.
    """
    sort_order = None
    if sort:
        sort_order = SortOrder.ASC if sort == "asc" else SortOrder.DESC

    params = JobListingParams(
        limit=_positive_int("limit", limit),
        cpage=_positive_int("cpage", cpage) or 1,
        category=category or None,
        sort=sort_order,
        search=search or None,
    )

    if params.skip > MAX_PAGING_VALUE:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="cpage is too large for this limit"
        )

    return params


def _validate_document(model: Type[BaseModel], document: Dict[str, Any], kind: str) -> Dict[str, Any]:
    try:
        model.model_validate(document)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in e.errors()
        )
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid {kind} document: {problems}"
        )
    return document


def job_document(document: Dict[str, Any] = Body(...)) -> Dict[str, Any]:
    """Job body, checked so its projected fields can be stored."""
    return _validate_document(JobFields, document, "job")


def bid_document(document: Dict[str, Any] = Body(...)) -> Dict[str, Any]:
    """Bid body, checked so its projected fields can be stored."""
    return _validate_document(BidFields, document, "bid")
