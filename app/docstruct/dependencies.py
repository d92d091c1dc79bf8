"""
FastAPI dependencies shared by the routers.
"""

import logging
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.orm import Session

from .config import Settings, get_settings
from .database import get_db
from .services.auth_service import CredentialStore, TokenService
from .services.document_store import DocumentStore
from .services.exceptions import TokenValidationError
from .services.file_storage import FileStorage

logger = logging.getLogger(__name__)


def get_token_service(settings: Settings = Depends(get_settings)) -> TokenService:
    return TokenService(settings)


def get_file_storage(settings: Settings = Depends(get_settings)) -> FileStorage:
    return FileStorage(settings.upload_dir)


def get_credential_store(db: Session = Depends(get_db)) -> CredentialStore:
    return CredentialStore(db)


def get_document_store(db: Session = Depends(get_db)) -> DocumentStore:
    return DocumentStore(db)


async def get_current_user_id(
    authorization: Annotated[str | None, Header()] = None,
    token_service: TokenService = Depends(get_token_service),
) -> int:
    """
    Validate the bearer token and return the caller's user id.

    Args:
        authorization: Authorization header (``Bearer <token>``).
        token_service: Token verifier built from settings.

    Raises:
        HTTPException: 401 if no bearer token is sent, 403 if it does not verify.
    """
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        return token_service.verify(token.strip())
    except TokenValidationError as e:
        logger.info("Rejected session token: %s", e)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid token",
        ) from e
