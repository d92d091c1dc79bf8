"""
Router for account endpoints.

Handles:
- Signup (creates a user and returns a session token)
- Signin (checks credentials and returns a session token)
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from ..dependencies import get_credential_store, get_token_service
from ..models import CredentialsRequest, TokenResponse
from ..services.auth_service import CredentialStore, TokenService
from ..services.exceptions import InvalidCredentialsError, UsernameTakenError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/user", tags=["users"])


@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    request: CredentialsRequest,
    credentials: CredentialStore = Depends(get_credential_store),
    token_service: TokenService = Depends(get_token_service),
) -> TokenResponse:
    """
    Create an account.

    Returns:
        A session token for the new user.
    """
    try:
        user = credentials.create_user(request.username, request.password)
        token = token_service.issue(user.id)
    except UsernameTakenError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User already exists",
        )
    except Exception:
        logger.exception("Signup failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error.",
        )

    return TokenResponse(token=token, message="Account created successfully.")


@router.post("/signin", response_model=TokenResponse)
async def signin(
    request: CredentialsRequest,
    credentials: CredentialStore = Depends(get_credential_store),
    token_service: TokenService = Depends(get_token_service),
) -> TokenResponse:
    """Sign in with username and password."""
    try:
        user = credentials.authenticate(request.username, request.password)
        token = token_service.issue(user.id)
    except InvalidCredentialsError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )
    except Exception:
        logger.exception("Signin failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal Server Error",
        )

    return TokenResponse(token=token, message="Logged in successfully.")
