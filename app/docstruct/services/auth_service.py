"""
Credential storage and session token handling.

- CredentialStore: creates users and checks their passwords (argon2 via passlib)
- TokenService: issues and verifies signed, time-bound JWTs carrying the user id
"""

import logging
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..config import Settings
from ..models_db import User
from .exceptions import (
    InvalidCredentialsError,
    TokenValidationError,
    UsernameTakenError,
)

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


class CredentialStore:
    """User accounts keyed by unique username."""

    def __init__(self, db: Session):
        self.db = db

    def get_by_username(self, username: str) -> User | None:
        return self.db.scalar(select(User).where(User.username == username))

    def create_user(self, username: str, password: str) -> User:
        """
        Register a new user.

        Raises:
            UsernameTakenError: If the username is already registered.
        """
        if self.get_by_username(username) is not None:
            raise UsernameTakenError(username)

        user = User(username=username, password_hash=get_password_hash(password))
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError as e:
            # Concurrent signup won the unique constraint
            self.db.rollback()
            raise UsernameTakenError(username) from e
        self.db.refresh(user)

        logger.info("Created user %d", user.id)
        return user

    def authenticate(self, username: str, password: str) -> User:
        """
        Return the user matching the credentials.

        Raises:
            InvalidCredentialsError: On unknown username or wrong password.
        """
        user = self.get_by_username(username)
        if user is None or not verify_password(password, user.password_hash):
            logger.warning("Failed signin attempt")
            raise InvalidCredentialsError()
        return user


class TokenService:
    """
    Issues and verifies session tokens.

    Tokens are HMAC-signed JWTs with payload ``{"id": <user id>, "exp": ...}``.
    """

    def __init__(self, settings: Settings):
        self.secret = settings.jwt_secret
        self.algorithm = settings.jwt_algorithm
        self.ttl = timedelta(minutes=settings.access_token_expire_minutes)

    def issue(self, user_id: int, expires_delta: timedelta | None = None) -> str:
        expire = datetime.now(timezone.utc) + (expires_delta or self.ttl)
        payload = {"id": user_id, "exp": expire}
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> int:
        """
        Return the user id carried by a token.

        Raises:
            TokenValidationError: If the token is invalid, expired or has no user id.
        """
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as e:
            raise TokenValidationError(str(e)) from e

        user_id = payload.get("id")
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            raise TokenValidationError("Token carries no user id")
        return user_id
