"""Caller identity.

Sessions are handled by an external identity provider that issues JWTs with
the user id in the 'sub' claim. We only verify the token and hand the user id
to the handlers as a request-scoped dependency.
"""

from datetime import datetime, timedelta, timezone

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from loguru import logger

from carnet.core.config import settings
from carnet.core.errors import Unauthenticated

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token", auto_error=False)

# Cookie the provider sets for browser sessions
SESSION_COOKIE = "__session"


def create_access_token(user_id: str, expires_in: timedelta = timedelta(days=7)) -> str:
    """Mint a token the way the identity provider does (development and tests)."""
    if not user_id:
        raise ValueError("user_id cannot be empty")

    now = datetime.now(timezone.utc)
    payload = {"sub": str(user_id), "iat": now, "exp": now + expires_in}
    if settings.auth_issuer:
        payload["iss"] = settings.auth_issuer
    if settings.auth_audience:
        payload["aud"] = settings.auth_audience
    return jwt.encode(payload, settings.auth_secret_key, algorithm=settings.auth_algorithm)


def decode_access_token(token: str) -> str:
    """Verify `token` and return its user id.

    Raises ValueError if the token is invalid, expired or has no subject.
    """
    options = {"verify_aud": settings.auth_audience is not None}
    try:
        payload = jwt.decode(
            token,
            settings.auth_secret_key,
            algorithms=[settings.auth_algorithm],
            audience=settings.auth_audience,
            issuer=settings.auth_issuer,
            options=options,
        )
    except JWTError as e:
        raise ValueError("Invalid or expired token") from e

    user_id = payload.get("sub")
    if not user_id:
        raise ValueError("Token missing user ID")
    return str(user_id)


def get_current_user_id(request: Request, token: str | None = Depends(oauth2_scheme)) -> str:
    """FastAPI dependency returning the authenticated caller's user id.

    Reads the Bearer token from the Authorization header, falling back to the
    provider's session cookie. Raises Unauthenticated (401) otherwise.
    """
    auth_token = token or request.cookies.get(SESSION_COOKIE)
    if not auth_token:
        logger.warning(f"Auth failed: missing token, {request.method} {request.url.path}")
        raise Unauthenticated()

    try:
        return decode_access_token(auth_token)
    except ValueError as e:
        logger.warning(f"Auth failed: {e}, {request.method} {request.url.path}")
        raise Unauthenticated(str(e)) from e
