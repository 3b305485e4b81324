"""Pydantic v2 request/response schemas for admin authentication."""

from pydantic import BaseModel, Field


class AdminLoginRequest(BaseModel):
    """Schema for the back-office password login."""

    password: str = Field(..., min_length=1, max_length=256)


class TokenResponse(BaseModel):
    """Admin access token returned on successful login."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int
