"""
Pydantic schemas for session tokens.
"""

from pydantic import BaseModel, ConfigDict, EmailStr


class SessionClaims(BaseModel):
    """Identity claims signed into the session cookie. Extra claims are kept."""
    model_config = ConfigDict(extra="allow")

    email: EmailStr
