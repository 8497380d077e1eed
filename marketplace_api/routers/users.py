"""
Public user profile endpoints.
"""

from typing import List
from fastapi import APIRouter, Depends, Path

from marketplace_api.models.user import User
from marketplace_api.schemas.envelope import ApiResponse, success_response
from marketplace_api.schemas.user import UserResponse
from marketplace_api.services.user import UserService
from marketplace_api.utils.dependencies import get_current_user, get_user_service
from marketplace_api.utils.messages import SuccessMessages


router = APIRouter(prefix="/users", tags=["Users"])


@router.get(
    "",
    response_model=ApiResponse[List[UserResponse]],
    summary="List users"
)
async def list_users(
    current_user: User = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service)
):
    users = await user_service.list_users()
    message = SuccessMessages.USERS_RETRIEVED if users else SuccessMessages.NO_USERS_CREATED
    return success_response(message, [UserResponse.model_validate(u.to_dict()) for u in users])


@router.get(
    "/{user_id}",
    response_model=ApiResponse[UserResponse],
    summary="Get user by ID"
)
async def get_user(
    user_id: str = Path(..., description="User ID"),
    current_user: User = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service)
):
    """
    Raises:
        InvalidRequestError: If the ID is malformed
        NotFoundError: If the user doesn't exist
    """
    user = await user_service.get_user(user_id)
    return success_response(SuccessMessages.USER_RETRIEVED, UserResponse.model_validate(user.to_dict()))
