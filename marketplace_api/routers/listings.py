"""
Listing API endpoints: CRUD with owner-only mutation and optional filters.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Path, Query, status

from marketplace_api.models.listing import Listing, ListingCategory, ListingCondition, ListingStatus
from marketplace_api.models.user import User
from marketplace_api.schemas.envelope import ApiResponse, success_response
from marketplace_api.schemas.listing import ListingCreate, ListingUpdate, ListingResponse
from marketplace_api.services.listing import ListingService
from marketplace_api.utils.dependencies import get_current_user, get_listing_service
from marketplace_api.utils.messages import SuccessMessages


router = APIRouter(prefix="/listings", tags=["Listings"])


def _to_response(listing) -> ListingResponse:
    return ListingResponse.model_validate(listing.to_dict())


async def get_owned_listing(
    listing_id: str = Path(..., description="Listing ID"),
    current_user: User = Depends(get_current_user),
    listing_service: ListingService = Depends(get_listing_service)
) -> Listing:
    """Resolve a listing the caller owns, before the request body is validated."""
    return await listing_service.get_owned(listing_id, current_user.id)


@router.post(
    "",
    response_model=ApiResponse[ListingResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create new listing",
    description="Create a listing owned by the authenticated user"
)
async def create_listing(
    listing_data: ListingCreate,
    current_user: User = Depends(get_current_user),
    listing_service: ListingService = Depends(get_listing_service)
):
    listing = await listing_service.create_listing(listing_data, current_user)
    return success_response(SuccessMessages.LISTING_CREATED, _to_response(listing))


@router.get(
    "",
    response_model=ApiResponse[List[ListingResponse]],
    summary="List listings",
    description="All listings, newest first, with optional equality filters"
)
async def list_listings(
    category: Optional[ListingCategory] = Query(None, description="Category filter"),
    condition: Optional[ListingCondition] = Query(None, description="Condition filter"),
    status_filter: Optional[ListingStatus] = Query(None, alias="status", description="Status filter"),
    owner_id: Optional[str] = Query(None, description="Owner ID filter"),
    listing_service: ListingService = Depends(get_listing_service)
):
    listings = await listing_service.list_listings(
        category=category,
        condition=condition,
        status=status_filter,
        owner_id=owner_id
    )
    message = SuccessMessages.LISTINGS_RETRIEVED if listings else SuccessMessages.NO_LISTINGS_CREATED
    return success_response(message, [_to_response(l) for l in listings])


@router.get(
    "/{listing_id}",
    response_model=ApiResponse[ListingResponse],
    summary="Get listing by ID"
)
async def get_listing(
    listing_id: str = Path(..., description="Listing ID"),
    current_user: User = Depends(get_current_user),
    listing_service: ListingService = Depends(get_listing_service)
):
    """
    Raises:
        InvalidRequestError: If the ID is malformed
        NotFoundError: If the listing doesn't exist
    """
    listing = await listing_service.get_listing(listing_id)
    return success_response(SuccessMessages.LISTING_RETRIEVED, _to_response(listing))


@router.patch(
    "/{listing_id}",
    response_model=ApiResponse[ListingResponse],
    summary="Update listing",
    description="Update provided fields of a listing. Only the owner may update."
)
async def update_listing(
    listing_data: ListingUpdate,
    listing: Listing = Depends(get_owned_listing),
    current_user: User = Depends(get_current_user),
    listing_service: ListingService = Depends(get_listing_service)
):
    """
    Raises:
        InvalidRequestError, NotFoundError, ForbiddenError, ValidationError
    """
    listing = await listing_service.update_owned(listing, listing_data, current_user)
    return success_response(SuccessMessages.LISTING_UPDATED, _to_response(listing))


@router.delete(
    "/{listing_id}",
    response_model=ApiResponse,
    summary="Delete listing",
    description="Delete a listing and its favorites. Only the owner may delete."
)
async def delete_listing(
    listing_id: str = Path(..., description="Listing ID"),
    current_user: User = Depends(get_current_user),
    listing_service: ListingService = Depends(get_listing_service)
):
    await listing_service.delete_listing(listing_id, current_user)
    return success_response(SuccessMessages.LISTING_DELETED)
