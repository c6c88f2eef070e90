"""
Pydantic models for volunteer opportunities.

``OpportunityBase`` carries the shared fields; ``OpportunityCreate``
is the admin request body, ``OpportunityUpdate`` the partial PATCH
body and ``Opportunity`` the response with its ``id``.
"""

from typing import List, Optional

from pydantic import Field

from ..core.db import MAX_INTEGER
from .base import ApiModel


class OpportunityBase(ApiModel):
    title: str = Field(..., min_length=3, examples=["Community Garden Cleanup"])
    organization: str = Field(..., min_length=2, examples=["Green Streets"])
    location: str = Field(..., min_length=2, examples=["Riverside Park"])
    description: str = Field(..., min_length=10, examples=["Help weed and mulch the shared beds."])
    # ISO date string; listings sort on it lexically.
    date: str = Field(..., min_length=1, examples=["2024-03-10"])
    tags: List[str] = Field(default_factory=list, examples=[["Outdoors", "Family friendly"]])
    spots_remaining: int = Field(..., ge=0, le=MAX_INTEGER, examples=[12])


class OpportunityCreate(OpportunityBase):
    """Schema for creating an opportunity."""
    pass


class OpportunityUpdate(ApiModel):
    """Schema for updating an opportunity.

    All fields are optional; only provided fields will be updated.
    """
    title: Optional[str] = Field(None, min_length=3)
    organization: Optional[str] = Field(None, min_length=2)
    location: Optional[str] = Field(None, min_length=2)
    description: Optional[str] = Field(None, min_length=10)
    date: Optional[str] = Field(None, min_length=1)
    tags: Optional[List[str]] = None
    spots_remaining: Optional[int] = Field(None, ge=0, le=MAX_INTEGER)


class Opportunity(OpportunityBase):
    """Schema for reading an opportunity from the API."""

    id: str
