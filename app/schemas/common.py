"""
Write acknowledgments and small envelope responses.

Acknowledgments are serialized in camelCase (insertedId, matchedCount, ...),
the shape the marketplace frontend reads.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional


class Acknowledgment(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    acknowledged: bool = True


class InsertOneResult(Acknowledgment):
    """Result of inserting one document"""
    inserted_id: str


class UpdateResult(Acknowledgment):
    """Result of updating (or upserting) one document"""
    matched_count: int = 0
    modified_count: int = 0
    upserted_id: Optional[str] = None
    upserted_count: int = 0


class DeleteResult(Acknowledgment):
    """Result of deleting one document"""
    deleted_count: int = 0


class CountResponse(BaseModel):
    result: int


class SuccessResponse(BaseModel):
    success: bool = True
