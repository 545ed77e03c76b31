"""
Journal Backend — Auth Service (Sign-up & Sign-in)
==================================================

What:  Creates user accounts and exchanges credentials for session tokens.
Who:   Called by the /api/auth route handlers.
How:   Composes CredentialService (hashing, token signing) with parameterized
       SQLAlchemy statements against the `users` table.

Sign-in failure policy:
    Missing fields, unknown username and wrong password all produce the same
    AuthenticationError("invalid login") so the response never reveals which
    usernames exist.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from journal.exceptions import AuthenticationError, DatabaseError, ValidationError
from journal.models.user import User
from journal.schemas.auth import (
    Credentials,
    SessionUser,
    SignInCredentials,
    SignInResponse,
    SignUpResponse,
)
from journal.services.credential_service import CredentialService
from journal.services.validation import require_sign_up_fields

logger = logging.getLogger(__name__)


class AuthService:
    """
    Account creation and credential exchange.

    Holds only the CredentialService it was built with; the database session
    is passed per call so each request keeps its own transaction.
    """

    def __init__(self, credentials: CredentialService):
        self.credentials = credentials

    async def sign_up(self, db: AsyncSession, payload: Credentials) -> SignUpResponse:
        """
        Register a new user.

        Raises:
            ValidationError: missing username/password, or username already taken
            DatabaseError: insert failed for any other storage reason
        """
        require_sign_up_fields(payload)

        user = User(
            username=payload.username,
            hashed_password=self.credentials.hash_password(payload.password),
        )
        try:
            db.add(user)
            await db.flush()
        except IntegrityError:
            logger.info("Sign-up rejected: username %r already exists", payload.username)
            raise ValidationError("username is already taken", field="username")
        except SQLAlchemyError as e:
            logger.error("Database error during sign-up: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

        logger.info("User %s signed up (userId=%d)", user.username, user.user_id)
        return SignUpResponse(
            user_id=user.user_id,
            username=user.username,
            created_at=user.created_at,
        )

    async def sign_in(self, db: AsyncSession, payload: SignInCredentials) -> SignInResponse:
        """
        Verify credentials and issue a session token.

        Raises:
            AuthenticationError: missing or non-string fields, unknown user,
                or wrong password
            DatabaseError: lookup failed
        """
        username, password = payload.username, payload.password
        if not isinstance(username, str) or not isinstance(password, str):
            raise AuthenticationError("invalid login")
        if not username or not password:
            raise AuthenticationError("invalid login")

        try:
            result = await db.execute(
                select(User).where(User.username == username)
            )
            user = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error during sign-in: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

        if user is None:
            raise AuthenticationError("invalid login")
        if not self.credentials.verify_password(user.hashed_password, password):
            raise AuthenticationError("invalid login")

        session_user = SessionUser(user_id=user.user_id, username=user.username)
        token = self.credentials.sign_session(session_user)
        logger.info("User %s signed in", user.username)
        return SignInResponse(token=token, user=session_user)
