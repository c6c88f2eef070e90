"""
Pydantic models for volunteer signups.

A signup is created once by ``SignupCreate`` and never modified
afterwards.  ``Signup.opportunity_id`` is ``None`` when the referenced
opportunity has since been archived.
"""

from typing import Optional

from pydantic import EmailStr, Field

from .base import ApiModel


class SignupCreate(ApiModel):
    """Public signup request body."""

    opportunity_id: str = Field(..., min_length=1)
    volunteer_name: str = Field(..., min_length=2, examples=["Jane Volunteer"])
    volunteer_email: EmailStr = Field(..., examples=["volunteer@example.com"])
    notes: Optional[str] = Field(None, examples=["Happy to help"])


class Signup(ApiModel):
    id: str
    opportunity_id: Optional[str] = None
    volunteer_name: str
    volunteer_email: str
    notes: Optional[str] = None
    created_at: str


class SignupReceipt(ApiModel):
    """Acknowledgement returned after a successful admission."""

    success: bool = True
    message: str
