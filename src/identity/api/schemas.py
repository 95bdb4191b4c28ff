"""Pydantic request/response schemas for the Identity API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Request Schemas ---


class SignupRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"email": "amina@example.com", "password": "s3cret-pass", "name": "Amina Khan"}]
        }
    }

    email: str = Field(..., max_length=254)
    password: str = Field(..., max_length=128)
    name: str = Field(..., max_length=100)


class LoginRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"email": "amina@example.com", "password": "s3cret-pass"}]}}

    email: str = Field(..., max_length=254)
    password: str = Field(..., max_length=128)


# --- Response Schemas ---


class UserResponse(BaseModel):
    id: str
    name: str
    email: str
    created_at: datetime


class SessionResponse(BaseModel):
    token: str
    user: UserResponse


class StatusResponse(BaseModel):
    status: str = "ok"
