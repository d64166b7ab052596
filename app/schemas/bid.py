from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from typing import Optional

from app.schemas.job import BuyerRef


class BidFields(BaseModel):
    """Queryable projection of a bid document"""
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    email: Optional[str] = None
    job_id: Optional[str] = Field(None, validation_alias=AliasChoices("jobId", "job_id"))
    buyer: Optional[BuyerRef] = None
    status: Optional[str] = None

    @property
    def buyer_email(self) -> Optional[str]:
        return self.buyer.email if self.buyer else None
