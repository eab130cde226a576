"""Account signup and login endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from ..core.dependencies import get_auth_service
from ..models.account import Account
from ..schemas.auth import AccountSummary, AuthResponse, CredentialsRequest
from ..services.auth_service import AuthService

router = APIRouter(tags=["auth"])


def _auth_response(account: Account, message: str, status_code: int) -> JSONResponse:
    response_data = AuthResponse(
        message=message,
        user=AccountSummary(email=account.email, id=account.id),
    )
    return JSONResponse(status_code=status_code, content=response_data.model_dump(mode="json"))


@router.post("/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    credentials: Optional[CredentialsRequest] = None,
    service: AuthService = Depends(get_auth_service),
) -> JSONResponse:
    """Register a new account. The email is stored lowercased."""
    credentials = credentials or CredentialsRequest()
    account = await service.signup(credentials.email, credentials.password)
    return _auth_response(account, "Signup successful", status.HTTP_201_CREATED)


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: Optional[CredentialsRequest] = None,
    service: AuthService = Depends(get_auth_service),
) -> JSONResponse:
    """Confirm an email/password pair. No token is issued."""
    credentials = credentials or CredentialsRequest()
    account = await service.login(credentials.email, credentials.password)
    return _auth_response(account, "Login successful", status.HTTP_200_OK)
