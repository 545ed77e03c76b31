"""
Journal Backend — Auth Route Handlers
=====================================

What:  POST /api/auth/sign-up and POST /api/auth/sign-in.
How:   Thin wrappers: parse the JSON body, delegate to AuthService, pick the
       status code. Neither endpoint requires a token.
"""

from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from journal.database import get_db_session
from journal.dependencies import get_auth_service
from journal.schemas.auth import (
    Credentials,
    SignInCredentials,
    SignInResponse,
    SignUpResponse,
)
from journal.schemas.common import ErrorResponse
from journal.services.auth_service import AuthService

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post(
    "/sign-up",
    response_model=SignUpResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Missing fields or username taken", "model": ErrorResponse}},
    summary="Create an account",
)
async def sign_up(
    payload: Optional[Credentials] = None,
    auth_service: AuthService = Depends(get_auth_service),
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> SignUpResponse:
    """Returns `{userId, username, createdAt}`; the password hash is never echoed."""
    return await auth_service.sign_up(db, payload or Credentials())


@router.post(
    "/sign-in",
    response_model=SignInResponse,
    responses={401: {"description": "invalid login", "model": ErrorResponse}},
    summary="Exchange credentials for a session token",
)
async def sign_in(
    payload: Optional[SignInCredentials] = None,
    auth_service: AuthService = Depends(get_auth_service),
    db: AsyncSession = Depends(get_db_session, scope="function"),
) -> SignInResponse:
    """Any unusable credential, including a non-string field, is a 401 "invalid login"."""
    return await auth_service.sign_in(db, payload or SignInCredentials())
