"""
Opportunity endpoints for API v1.

Listing, reading and signing up are public.  Creating, editing,
archiving and reading the signups of one opportunity require an
administrator (see ``core.security.require_admin``).
"""

from typing import Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from volunteer_board_api.app.core.config import Settings, get_settings
from volunteer_board_api.app.core.errors import VolunteerBoardError
from volunteer_board_api.app.core.security import require_admin
from volunteer_board_api.app.schemas.opportunity import Opportunity, OpportunityCreate, OpportunityUpdate
from volunteer_board_api.app.schemas.page import Page
from volunteer_board_api.app.schemas.signup import Signup, SignupCreate, SignupReceipt
from volunteer_board_api.app.services.opportunity_service import OpportunityService
from volunteer_board_api.app.services.pagination import resolve_window
from volunteer_board_api.app.services.signup_service import SignupService


router = APIRouter()


def get_opportunity_service(settings: Settings = Depends(get_settings)) -> OpportunityService:
    return OpportunityService(settings.database_url)


def get_signup_service(settings: Settings = Depends(get_settings)) -> SignupService:
    return SignupService(settings.database_url)


@router.get("", response_model=Page[Opportunity])
async def list_opportunities(
    page: Optional[str] = Query(None, description="1-based page number"),
    per_page: Optional[str] = Query(None, alias="perPage", description="Items per page (clamped)"),
    tag: Optional[str] = Query(None, description="Only opportunities carrying this tag"),
    available: bool = Query(False, description="Only opportunities with spots remaining"),
    settings: Settings = Depends(get_settings),
    service: OpportunityService = Depends(get_opportunity_service),
) -> Page[Opportunity]:
    """List opportunities ordered by date, one page at a time.

    Invalid ``page``/``perPage`` values fall back to the defaults
    rather than failing the request.
    """
    window = resolve_window(
        page,
        per_page,
        default_per_page=settings.default_page_size,
        max_per_page=settings.max_page_size,
    )
    try:
        return await service.list_opportunities(window, tag=tag, available_only=available)
    except VolunteerBoardError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e


@router.get("/{opportunity_id}", response_model=Opportunity)
async def get_opportunity(
    opportunity_id: str = Path(..., description="ID of the opportunity"),
    service: OpportunityService = Depends(get_opportunity_service),
) -> Opportunity:
    try:
        return await service.get_opportunity(opportunity_id)
    except VolunteerBoardError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e


@router.post("", response_model=Opportunity, status_code=status.HTTP_201_CREATED)
async def create_opportunity(
    opportunity: OpportunityCreate,
    current_admin: Dict[str, str] = Depends(require_admin),
    service: OpportunityService = Depends(get_opportunity_service),
) -> Opportunity:
    """Create a new opportunity (admin only)."""
    try:
        return await service.create_opportunity(opportunity, current_admin)
    except VolunteerBoardError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e


@router.patch("/{opportunity_id}", response_model=Opportunity)
async def update_opportunity(
    updates: OpportunityUpdate,
    opportunity_id: str = Path(..., description="ID of the opportunity"),
    current_admin: Dict[str, str] = Depends(require_admin),
    service: OpportunityService = Depends(get_opportunity_service),
) -> Opportunity:
    """Update an existing opportunity (admin only).

    Partial updates are supported; fields that are omitted or null
    remain unchanged.
    """
    update_dict = {k: v for k, v in updates.model_dump().items() if v is not None}
    try:
        return await service.update_opportunity(opportunity_id, update_dict, current_admin)
    except VolunteerBoardError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e


@router.delete("/{opportunity_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_opportunity(
    opportunity_id: str = Path(..., description="ID of the opportunity"),
    current_admin: Dict[str, str] = Depends(require_admin),
    service: OpportunityService = Depends(get_opportunity_service),
) -> None:
    """Archive an opportunity (admin only).

    Existing signups are kept and lose their opportunity reference.
    """
    try:
        await service.delete_opportunity(opportunity_id, current_admin)
    except VolunteerBoardError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e
    return None


@router.post(
    "/{opportunity_id}/signups",
    response_model=SignupReceipt,
    status_code=status.HTTP_201_CREATED,
)
async def create_signup(
    signup: SignupCreate,
    opportunity_id: str = Path(..., description="ID of the opportunity to sign up for"),
    service: SignupService = Depends(get_signup_service),
) -> SignupReceipt:
    """Sign a volunteer up for an opportunity.

    Returns 400 when the body names another opportunity, 404 when the
    opportunity does not exist and 409 when no spots remain.
    """
    try:
        return await service.admit(opportunity_id, signup)
    except VolunteerBoardError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e


@router.get("/{opportunity_id}/signups", response_model=Page[Signup])
async def list_opportunity_signups(
    opportunity_id: str = Path(..., description="ID of the opportunity"),
    page: Optional[str] = Query(None),
    per_page: Optional[str] = Query(None, alias="perPage"),
    current_admin: Dict[str, str] = Depends(require_admin),
    settings: Settings = Depends(get_settings),
    service: SignupService = Depends(get_signup_service),
) -> Page[Signup]:
    """List the signups of one opportunity, newest first (admin only)."""
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
