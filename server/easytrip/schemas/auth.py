"""Account signup and login schemas."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field


class CredentialsRequest(BaseModel):
    """
    Email/password body for signup and login.

    Both fields are optional at the schema level so a missing value is
    reported with the auth flow's own message rather than a generic one.
    """

    email: Optional[str] = Field(None, description="Account email")
    password: Optional[str] = Field(None, description="Cleartext password")


class AccountSummary(BaseModel):
    """Public view of an account."""

    email: str
    id: UUID


class AuthResponse(BaseModel):
    """Envelope for successful signup or login."""

    success: bool = True
    message: str
    user: AccountSummary
