"""
Signup listing endpoint for API v1.

Signups are created through ``POST /opportunities/{id}/signups``; this
router only exposes the paginated administrative listing.
"""

from typing import Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from volunteer_board_api.app.core.config import Settings, get_settings
from volunteer_board_api.app.core.errors import VolunteerBoardError
from volunteer_board_api.app.core.security import require_admin
from volunteer_board_api.app.schemas.page import Page
from volunteer_board_api.app.schemas.signup import Signup
from volunteer_board_api.app.services.pagination import resolve_window
from volunteer_board_api.app.services.signup_service import SignupService

from .opportunities import get_signup_service


router = APIRouter()


@router.get("", response_model=Page[Signup])
async def list_signups(
    page: Optional[str] = Query(None, description="1-based page number"),
    per_page: Optional[str] = Query(None, alias="perPage", description="Items per page (clamped)"),
    opportunity_id: Optional[str] = Query(None, alias="opportunityId"),
    current_admin: Dict[str, str] = Depends(require_admin),
    settings: Settings = Depends(get_settings),
    service: SignupService = Depends(get_signup_service),
) -> Page[Signup]:
    """List signups newest first, optionally for a single opportunity.

    Requires an administrator: either a bearer token for an allowlisted
    email or the legacy ``X-Admin-Token`` secret.
    """
    window = resolve_window(
        page,
        per_page,
        default_per_page=settings.default_page_size,
        max_per_page=settings.max_page_size,
    )
    try:
        return await service.list_signups(window, opportunity_id=opportunity_id)
    except VolunteerBoardError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
