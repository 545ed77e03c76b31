"""
Journal Backend — Authentication Schemas
========================================

What:  Request/response models for sign-up and sign-in, and the identity
       carried inside a session token.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Credentials(BaseModel):
    """
    Body of POST /api/auth/sign-up.

    Optional so a missing field becomes our own 400 instead of a schema error.
    """
    username: Optional[str] = None
    password: Optional[str] = None


class SignInCredentials(BaseModel):
    """
    Body of POST /api/auth/sign-in.

    Untyped so that any malformed credential (missing, empty, or not a string)
    ends in the same 401 "invalid login" as a wrong password.
    """
    username: Any = None
    password: Any = None


class SessionUser(_CamelModel):
    """
    What:  The identity asserted by a session token: `{userId, username}`.
    Who:   Produced by sign-in and by the authorization gate; consumed by handlers.
    """
    user_id: int = Field(description="Authenticated user's id")
    username: str


class SignUpResponse(_CamelModel):
    """Returned by POST /api/auth/sign-up with HTTP 201."""
    user_id: int
    username: str
    created_at: datetime


class SignInResponse(BaseModel):
    """Returned by POST /api/auth/sign-in: the bearer token and who it is for."""
    token: str = Field(description="Signed session token for the Authorization header")
    user: SessionUser
