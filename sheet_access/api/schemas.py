"""Request models for the HTTP transport."""

from pydantic import BaseModel, Field


class Credentials(BaseModel):
    username: str = Field(..., min_length=1, description="Account name")
    password: str = Field(..., min_length=1, description="Plaintext password")


class SessionRequest(BaseModel):
    username: str = Field(..., min_length=1)


class ShareRequest(BaseModel):
    username: str = Field(..., min_length=1, description="Sheet owner")
    target_user: str = Field(..., min_length=1, description="Account receiving the role")
    role: str = Field(..., description="'collaborator' or 'viewer'")


class RevokeRequest(BaseModel):
    username: str = Field(..., min_length=1, description="Sheet owner")
    target_user: str = Field(..., min_length=1, description="Account losing access")
