"""
Authentication service for registration, login and bearer credential handling.
"""

from typing import Tuple
from datetime import timedelta
from sqlalchemy.ext.asyncio import AsyncSession
from jose import JWTError
import uuid
import logging

from marketplace_api.config import Settings
from marketplace_api.models.user import User
from marketplace_api.repositories.user import UserRepository
from marketplace_api.schemas.auth import RegisterRequest
from marketplace_api.utils.auth import create_access_token, verify_token, TokenPayload
from marketplace_api.utils.exceptions import (
    ConflictError,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingSecretError,
    ValidationError,
)
from marketplace_api.utils.messages import ErrorMessages

logger = logging.getLogger(__name__)


class AuthService:
    """
    Handles user registration, login and token verification.
    The signing secret comes from the injected settings.
    """

    def __init__(self, db_session: AsyncSession, settings: Settings):
        self.db = db_session
        self.settings = settings
        self.user_repo = UserRepository(db_session)

    def _require_secret(self) -> str:
        """
        Raises:
            MissingSecretError: If no signing secret is configured
        """
        if not self.settings.jwt_secret_key:
            logger.error("JWT secret key is not configured")
            raise MissingSecretError()
        return self.settings.jwt_secret_key

    @property
    def expires_in(self) -> int:
        """Access token lifetime in seconds."""
        return self.settings.access_token_expire_minutes * 60

    def create_token(self, user: User) -> str:
        return create_access_token(
            user_id=user.id,
            email=user.email,
            name=user.full_name,
            secret_key=self._require_secret(),
            algorithm=self.settings.jwt_algorithm,
            expires_delta=timedelta(minutes=self.settings.access_token_expire_minutes)
        )

    async def register(self, register_data: RegisterRequest) -> Tuple[User, str]:
        """
        Create an account and issue a token for it.

        Raises:
            ValidationError: If a field is missing, the email is malformed or the password is too short
            ConflictError: If the email is already registered
        """
        fields = {
            "first_name": (register_data.first_name or "").strip(),
            "last_name": (register_data.last_name or "").strip(),
            "email": (register_data.email or "").strip(),
            "password": register_data.password or "",
        }
        if not all(fields.values()):
            raise ValidationError(ErrorMessages.USER_MISSING_FIELDS)

        # Fail on configuration before writing anything
        self._require_secret()

        try:
            fields["email"] = User.validate_email_format(fields["email"])
        except ValueError as e:
            raise ValidationError(str(e))

        if not await self.user_repo.check_email_availability(fields["email"]):
            raise ConflictError(ErrorMessages.USER_EMAIL_IN_USE)

        try:
            user = await self.user_repo.create_user(fields)
        except ValueError as e:
            raise ValidationError(str(e))

        logger.info(f"User registered: {user.email}")
        return user, self.create_token(user)

    async def login(self, email: str, password: str) -> Tuple[User, str]:
        """
        Raises:
            InvalidCredentialsError: If the email is unknown or the password does not match
        """
        user = await self.user_repo.get_by_email(email)
        if user is None:
            logger.warning(f"Login attempt for unknown email: {email}")
            raise InvalidCredentialsError(ErrorMessages.AUTH_NO_EMAIL_MATCH)

        if not user.verify_password(password):
            logger.warning(f"Failed login attempt for user: {user.email}")
            raise InvalidCredentialsError(ErrorMessages.AUTH_NO_PASSWORD_MATCH)

        logger.info(f"User logged in: {user.email}")
        return user, self.create_token(user)

    def decode_token(self, token: str) -> TokenPayload:
        """
        Raises:
            MissingSecretError: If no signing secret is configured
            InvalidTokenError: If verification fails
        """
        secret = self._require_secret()
        try:
            return verify_token(token, secret, self.settings.jwt_algorithm)
        except JWTError as e:
            logger.warning(f"Token rejected: {e}")
            raise InvalidTokenError()

    async def get_current_user(self, token: str) -> Tuple[TokenPayload, User]:
        """
        Resolve the identity and user behind a bearer token.

        Raises:
            MissingSecretError, InvalidTokenError
        """
        payload = self.decode_token(token)

        try:
            user_id = uuid.UUID(payload.user_id)
        except ValueError:
            raise InvalidTokenError()

        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            logger.warning(f"Token subject no longer exists: {payload.user_id}")
            raise InvalidTokenError()

        return payload, user
