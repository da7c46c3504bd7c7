"""
Authorization Schemas
"""

from pydantic import BaseModel, Field


class AuthorizationRequest(BaseModel):
    """Schema for adding an identity to the allow-list."""

    identity: str = Field(..., description="Identity to authorize")


class AuthorizationStatus(BaseModel):
    identity: str
    authorized: bool
    is_owner: bool
