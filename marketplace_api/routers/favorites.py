"""
Favorite endpoints. Every favorite is private to the user who saved it.
"""

from typing import List
from fastapi import APIRouter, Depends, Path, status

from marketplace_api.models.user import User
from marketplace_api.schemas.envelope import ApiResponse, success_response
from marketplace_api.schemas.favorite import FavoriteCreate, FavoriteResponse
from marketplace_api.schemas.listing import ListingResponse
from marketplace_api.services.favorite import FavoriteService
from marketplace_api.utils.dependencies import get_current_user, get_favorite_service
from marketplace_api.utils.messages import SuccessMessages


router = APIRouter(prefix="/favorites", tags=["Favorites"])


def _to_response(favorite, listing) -> FavoriteResponse:
    data = favorite.to_dict()
    data["listing"] = ListingResponse.model_validate(listing.to_dict()) if listing is not None else None
    return FavoriteResponse.model_validate(data)


@router.get(
    "",
    response_model=ApiResponse[List[FavoriteResponse]],
    summary="List own favorites"
)
async def list_favorites(
    current_user: User = Depends(get_current_user),
    favorite_service: FavoriteService = Depends(get_favorite_service)
):
    pairs = await favorite_service.list_favorites(current_user)
    message = SuccessMessages.FAVORITES_RETRIEVED if pairs else SuccessMessages.NO_FAVORITES
    return success_response(message, [_to_response(f, l) for f, l in pairs])


@router.post(
    "",
    response_model=ApiResponse[FavoriteResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Add favorite"
)
async def add_favorite(
    favorite_data: FavoriteCreate,
    current_user: User = Depends(get_current_user),
    favorite_service: FavoriteService = Depends(get_favorite_service)
):
    """
    Raises:
        InvalidRequestError: If listing_id is malformed
        NotFoundError: If the listing doesn't exist
        ConflictError: If the listing is already a favorite
    """
    favorite, listing = await favorite_service.add_favorite(favorite_data.listing_id, current_user)
    return success_response(SuccessMessages.FAVORITE_ADDED, _to_response(favorite, listing))


@router.get(
    "/{favorite_id}",
    response_model=ApiResponse[FavoriteResponse],
    summary="Get own favorite"
)
async def get_favorite(
    favorite_id: str = Path(..., description="Favorite ID"),
    current_user: User = Depends(get_current_user),
    favorite_service: FavoriteService = Depends(get_favorite_service)
):
    favorite, listing = await favorite_service.get_favorite(favorite_id, current_user)
    return success_response(SuccessMessages.FAVORITE_RETRIEVED, _to_response(favorite, listing))


@router.delete(
    "/{favorite_id}",
    response_model=ApiResponse,
    summary="Remove favorite"
)
async def remove_favorite(
    favorite_id: str = Path(..., description="Favorite ID"),
    current_user: User = Depends(get_current_user),
    favorite_service: FavoriteService = Depends(get_favorite_service)
):
    await favorite_service.remove_favorite(favorite_id, current_user)
    return success_response(SuccessMessages.FAVORITE_REMOVED)
