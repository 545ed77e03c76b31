"""
Journal Backend — Credential Service
====================================

What:  Password hashing/verification and session token signing/verification.
Why:   Keeps every cryptographic call behind one small object that is built
       with the signing secret, so handlers and tests never touch a global key.
How:   werkzeug.security for salted password hashes, python-jose for HS256 JWTs.
Who:   Built once by create_app() and stored on app.state; used by AuthService
       (sign-up, sign-in) and by the authorization gate (every protected request).

Token format:
    Header:  {"alg": "HS256", "typ": "JWT"}
    Payload: {"userId": 1, "username": "alice", "iat": 1700000000}
             plus "exp" only when token_expire_minutes is configured.
    Tokens are stateless: nothing is stored server-side.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from werkzeug.security import check_password_hash, generate_password_hash

from journal.schemas.auth import SessionUser

ALGORITHM = "HS256"


class InvalidTokenError(Exception):
    """A session token failed signature, expiry, or payload checks."""


class CredentialService:
    """
    Stateless transform over passwords and session tokens.

    Args:
        secret: HMAC key for session tokens. Must be non-empty.
        expire_minutes: Token lifetime; None issues tokens without expiry.
    """

    def __init__(self, secret: str, expire_minutes: Optional[int] = None):
        if not secret:
            raise ValueError("A token secret is required to sign session tokens")
        self._secret = secret
        self._expire_minutes = expire_minutes

    # ── Passwords ─────────────────────────────────────────────────────────

    def hash_password(self, password: str) -> str:
        return generate_password_hash(password)

    def verify_password(self, hashed: str, password: str) -> bool:
        """
        Check a plaintext password against a stored hash.

        Returns False on mismatch. Raises ValueError only when the stored hash
        is not in werkzeug's `method$salt$hash` format or names an unknown method.
        """
        if hashed.count("$") < 2:
            raise ValueError("Malformed password hash")
        return check_password_hash(hashed, password)

    # ── Session Tokens ────────────────────────────────────────────────────

    def sign_session(self, user: SessionUser) -> str:
        now = datetime.now(timezone.utc)
        claims = {
            "userId": user.user_id,
            "username": user.username,
            "iat": now,
        }
        if self._expire_minutes:
            claims["exp"] = now + timedelta(minutes=self._expire_minutes)
        return jwt.encode(claims, self._secret, algorithm=ALGORITHM)

    def verify_session(self, token: str) -> SessionUser:
        """
        Decode and verify a session token.

        Raises:
            InvalidTokenError: bad signature, malformed token, expired token,
                or a payload without an integer userId and string username.
        """
        try:
            payload = jwt.decode(token, self._secret, algorithms=[ALGORITHM])
        except JWTError as e:
            raise InvalidTokenError(str(e)) from e

        user_id = payload.get("userId")
        username = payload.get("username")
        # bool is an int subclass; a token saying userId=true is not an identity
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            raise InvalidTokenError("Token payload has no valid userId")
        if not isinstance(username, str) or not username:
            raise InvalidTokenError("Token payload has no valid username")
        return SessionUser(user_id=user_id, username=username)
