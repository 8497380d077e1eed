"""
Authentication API endpoints for registration and login.
"""

from fastapi import APIRouter, Depends, status

from marketplace_api.schemas.auth import RegisterRequest, LoginRequest, AuthResponse
from marketplace_api.schemas.envelope import ApiResponse, success_response
from marketplace_api.schemas.user import UserResponse
from marketplace_api.services.auth import AuthService
from marketplace_api.utils.dependencies import get_auth_service
from marketplace_api.utils.messages import SuccessMessages


router = APIRouter(prefix="/auth", tags=["Authentication"])


def _auth_payload(auth_service: AuthService, user, access_token: str) -> AuthResponse:
    return AuthResponse(
        user=UserResponse.model_validate(user.to_dict()),
        access_token=access_token,
        token_type="bearer",
        expires_in=auth_service.expires_in
    )


@router.post(
    "/register",
    response_model=ApiResponse[AuthResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    description="Create an account and return a bearer token for it"
)
async def register(
    register_data: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Raises:
        ValidationError: If a field is missing or invalid
        ConflictError: If the email is already registered
    """
    user, access_token = await auth_service.register(register_data)
    return success_response(SuccessMessages.USER_REGISTERED, _auth_payload(auth_service, user, access_token))


@router.post(
    "/login",
    response_model=ApiResponse[AuthResponse],
    status_code=status.HTTP_200_OK,
    summary="User login",
    description="Authenticate with email and password and return a bearer token"
)
async def login(
    login_data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Raises:
        InvalidCredentialsError: If the email is unknown or the password is wrong
    """
    user, access_token = await auth_service.login(
        email=login_data.email,
        password=login_data.password
    )
    return success_response(SuccessMessages.USER_LOGGED_IN, _auth_payload(auth_service, user, access_token))
