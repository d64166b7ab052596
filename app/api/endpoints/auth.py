"""
Session endpoints.

- POST /jwt: Sign the caller's identity claims into an HTTP-only cookie
- GET /logout: Clear that cookie

The frontend authenticates users itself and posts the resulting identity
here; protected routes then read the cookie (see app.core.deps).
"""

import logging
from datetime import timedelta
from fastapi import APIRouter, Response

from app.core.config import settings
from app.core.security import create_access_token, session_cookie_options
from app.schemas.common import SuccessResponse
from app.schemas.session import SessionClaims

router = APIRouter(tags=["Session"])
logger = logging.getLogger(__name__)


@router.post("/jwt", response_model=SuccessResponse)
def issue_session(claims: SessionClaims, response: Response):
    """
    Issue a session token for the given identity.

    The token expires after ACCESS_TOKEN_EXPIRE_DAYS and is set as an
    HTTP-only cookie; it is never returned in the body.
    """
    lifetime = timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS)
    token = create_access_token(claims.model_dump(mode="json"), expires_delta=lifetime)

    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=int(lifetime.total_seconds()),
        **session_cookie_options()
    )

    logger.info(f"Issued session token for {claims.email}")

    return SuccessResponse()


@router.get("/logout", response_model=SuccessResponse)
def clear_session(response: Response):
    """Clear the session cookie."""
    response.delete_cookie(key=settings.SESSION_COOKIE_NAME, **session_cookie_options())
    return SuccessResponse()
