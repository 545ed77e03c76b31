"""
Journal Backend — Request Dependencies (Authorization Gate)
===========================================================

What:  FastAPI dependencies that hand route handlers their collaborators and
       the caller's identity.
Why:   The gate is a pure pre-condition: it reads the bearer token, verifies it,
       and either yields a SessionUser or raises AuthenticationError (401).
       Nothing is stored server-side.
How:   Collaborators (settings, credential service, auth service) live on
       app.state and are looked up from the request, never from module globals.

Header format:
    Authorization: Bearer <token>
"""

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from journal.config import Settings
from journal.exceptions import AuthenticationError
from journal.schemas.auth import SessionUser
from journal.services.auth_service import AuthService
from journal.services.credential_service import CredentialService, InvalidTokenError

logger = logging.getLogger(__name__)

# auto_error=False: a missing/non-bearer header comes back as None so the
# 401 body is ours, not FastAPI's default 403
bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_credential_service(request: Request) -> CredentialService:
    return request.app.state.credential_service


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    credential_service: CredentialService = Depends(get_credential_service),
) -> SessionUser:
    """
    Resolve the caller from `Authorization: Bearer <token>`.

    Raises:
        AuthenticationError: header missing, not a bearer token, or token invalid
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("authentication required")
    try:
        return credential_service.verify_session(credentials.credentials)
    except InvalidTokenError as e:
        # Reason is logged only; the client just learns the token was rejected
        logger.info("Rejected session token: %s", str(e))
        raise AuthenticationError("invalid token")


async def get_entry_owner(
    settings: Settings = Depends(get_settings),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    credential_service: CredentialService = Depends(get_credential_service),
) -> Optional[int]:
    """
    The userId that entry operations are scoped to.

    Scoped mode: runs the authorization gate and returns the caller's userId.
    Unscoped mode: returns None without requiring a token.
    """
    if not settings.scope_entries_to_user:
        return None
    user = await get_current_user(
        credentials=credentials,
        credential_service=credential_service,
    )
    return user.user_id
