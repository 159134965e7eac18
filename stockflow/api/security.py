"""
Bearer token guard for the HTTP surface.

Tokens are opaque strings listed in ``AUTH_API_TOKENS``; issuing and
rotating them happens outside this service. The caller identity bound to
the request context is a short fingerprint of the token, never the token.
"""

import hashlib
import secrets

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from stockflow.api.dependencies import get_app_settings
from stockflow.config import Settings, bind_request_context, get_logger
from stockflow.core.exceptions import AuthenticationError

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def token_fingerprint(token: str) -> str:
    return "token:" + hashlib.sha256(token.encode()).hexdigest()[:12]


async def require_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_app_settings),
) -> str:
    """Reject the request unless it carries a configured bearer token."""
    if not settings.auth.enabled:
        bind_request_context(actor="anonymous")
        return "anonymous"

    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationError("Missing bearer token")

    token = credentials.credentials
    if not any(
        secrets.compare_digest(token.encode(), allowed.encode())
        for allowed in settings.auth.api_tokens
    ):
        logger.warning("authentication_failed", reason="unknown_token")
        raise AuthenticationError("Invalid bearer token")

    actor = token_fingerprint(token)
    bind_request_context(actor=actor)
    return actor
