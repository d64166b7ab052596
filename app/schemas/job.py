from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from typing import Optional
from datetime import datetime, timezone
from enum import Enum


class SortOrder(str, Enum):
    """Deadline sort direction for the paginated listing"""
    ASC = "asc"
    DESC = "desc"


class BuyerRef(BaseModel):
    """The job owner sub-record embedded in jobs and bids"""
    model_config = ConfigDict(extra="allow")

    email: Optional[str] = None


class JobFields(BaseModel):
    """
    Queryable projection of a job document.

    Only the fields the API filters or sorts on are typed here; everything
    else in the document is stored as-is.
    """
    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = Field(None, validation_alias=AliasChoices("job_title", "title"))
    category: Optional[str] = None
    deadline: Optional[datetime] = None
    buyer: Optional[BuyerRef] = None

    @field_validator("deadline")
    @classmethod
    def assume_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        """Treat naive deadlines as UTC so they sort alongside aware ones."""
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @property
    def buyer_email(self) -> Optional[str]:
        return self.buyer.email if self.buyer else None


class JobListingParams(BaseModel):
    """Validated query parameters for GET /jobs-all"""
    limit: Optional[int] = Field(None, ge=1, description="Page size; None returns every match")
    cpage: int = Field(1, ge=1, description="1-based page number")
    category: Optional[str] = None
    sort: Optional[SortOrder] = None
    search: Optional[str] = None

    @property
    def skip(self) -> int:
        if self.limit is None:
            return 0
        return self.limit * (self.cpage - 1)
