"""
Self-account endpoints for the authenticated user.
"""

from typing import List
from fastapi import APIRouter, Depends, status

from marketplace_api.models.user import User
from marketplace_api.schemas.envelope import ApiResponse, success_response
from marketplace_api.schemas.listing import ListingResponse
from marketplace_api.schemas.user import UserResponse, UserUpdate, PasswordResetRequest
from marketplace_api.services.listing import ListingService
from marketplace_api.services.user import UserService
from marketplace_api.utils.dependencies import get_current_user, get_listing_service, get_user_service
from marketplace_api.utils.messages import SuccessMessages


router = APIRouter(prefix="/account", tags=["Account"])


@router.get(
    "",
    response_model=ApiResponse[UserResponse],
    summary="Get own account"
)
async def get_account(current_user: User = Depends(get_current_user)):
    return success_response(SuccessMessages.ACCOUNT_RETRIEVED, UserResponse.model_validate(current_user.to_dict()))


@router.patch(
    "",
    response_model=ApiResponse[UserResponse],
    summary="Update own account"
)
async def update_account(
    user_data: UserUpdate,
    current_user: User = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service)
):
    """
    Raises:
        ValidationError: If no fields are provided
        ConflictError: If the new email is already in use
    """
    user = await user_service.update_account(current_user, user_data)
    return success_response(SuccessMessages.ACCOUNT_UPDATED, UserResponse.model_validate(user.to_dict()))


@router.delete(
    "",
    response_model=ApiResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete own account",
    description="Delete the account together with its listings and favorites"
)
async def delete_account(
    current_user: User = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service)
):
    await user_service.delete_account(current_user)
    return success_response(SuccessMessages.ACCOUNT_DELETED)


@router.get(
    "/listings",
    response_model=ApiResponse[List[ListingResponse]],
    summary="Get own listings"
)
async def get_account_listings(
    current_user: User = Depends(get_current_user),
    listing_service: ListingService = Depends(get_listing_service)
):
    listings = await listing_service.get_user_listings(current_user.id)
    message = SuccessMessages.USER_LISTINGS_RETRIEVED if listings else SuccessMessages.USER_HAS_NO_LISTINGS
    return success_response(message, [ListingResponse.model_validate(l.to_dict()) for l in listings])


@router.patch(
    "/password",
    response_model=ApiResponse[UserResponse],
    summary="Reset password",
    description="Set a new password for the authenticated account, identified by email"
)
async def reset_password(
    reset_data: PasswordResetRequest,
    current_user: User = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service)
):
    """
    Raises:
        ValidationError: If password or email is missing
        NotFoundError: If no account has the email
        ForbiddenError: If the email belongs to another account
    """
    user = await user_service.reset_password(current_user, reset_data)
    return success_response(SuccessMessages.PASSWORD_RESET, UserResponse.model_validate(user.to_dict()))
