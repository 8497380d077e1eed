"""
Authentication utilities for JWT token management and password hashing.
The signing secret is always passed in by the caller; nothing here reads global configuration.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import JWTError, jwt
from passlib.context import CryptContext
import uuid


# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class TokenPayload:
    """Decoded identity carried by an access token."""

    def __init__(self, user_id: str, email: str, name: Optional[str], exp: datetime):
        self.user_id = user_id
        self.email = email
        self.name = name
        self.exp = exp

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TokenPayload":
        """Create TokenPayload from a decoded claims dictionary."""
        return cls(
            user_id=data["sub"],
            email=data["email"],
            name=data.get("name"),
            exp=datetime.fromtimestamp(data["exp"], tz=timezone.utc)
        )

    def __repr__(self) -> str:
        return f"<TokenPayload(user_id={self.user_id}, email={self.email})>"


def create_access_token(
    user_id: uuid.UUID,
    email: str,
    name: str,
    secret_key: str,
    algorithm: str = "HS256",
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create JWT access token with user claims.

    Args:
        user_id: User's UUID
        email: User's email address
        name: User's display name
        secret_key: Signing secret
        algorithm: Signing algorithm
        expires_delta: Token lifetime (defaults to 60 minutes)

    Returns:
        Encoded JWT token string
    """
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=60))

    to_encode = {
        "sub": str(user_id),
        "email": email,
        "name": name,
        "exp": expire,
        "iat": now,
        "type": "access"
    }

    return jwt.encode(to_encode, secret_key, algorithm=algorithm)


def verify_token(token: str, secret_key: str, algorithm: str = "HS256") -> TokenPayload:
    """
    Verify and decode a JWT access token.

    Args:
        token: JWT token string
        secret_key: Signing secret
        algorithm: Expected signing algorithm

    Returns:
        Decoded TokenPayload

    Raises:
        JWTError: If the signature, expiry, type or claims are invalid
    """
    try:
        # jwt.decode rejects expired tokens on its own
        payload = jwt.decode(token, secret_key, algorithms=[algorithm])
    except JWTError:
        raise
    except Exception as e:
        raise JWTError(f"Token validation error: {str(e)}")

    if payload.get("type") != "access":
        raise JWTError("Invalid token type. Expected access")

    if not payload.get("sub") or not payload.get("email") or not payload.get("exp"):
        raise JWTError("Invalid token payload")

    return TokenPayload.from_dict(payload)


def hash_password(password: str) -> str:
    """
    Hash password using bcrypt.

    Raises:
        ValueError: If password is too short
    """
    if not password or len(password) < 8:
        raise ValueError("Password must be at least 8 characters long")

    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    return pwd_context.verify(plain_password, hashed_password)
