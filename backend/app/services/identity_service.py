"""
CascadeBlog Backend - Identity Verification Service
====================================================

What:  Verifies bearer ID tokens with an external identity provider and turns
       the decoded claims into a Principal.
Why:   Blog authoring and wishlist reads must be tied to a real user; the
       provider (Google or Firebase) owns the signing keys, we only verify.
How:   google-auth's id_token helpers check signature, expiry and audience
       against the provider's published certificates. The check is blocking
       (certificate fetch over HTTP), so it runs in the threadpool.
Who:   Called by the auth dependencies in app/dependencies.py.
When:  Once per request on protected routes, before the handler runs.

Provider strategy:
    IdentityVerifier (abstract)
    └── GoogleIdentityVerifier   provider="google"   → verify_oauth2_token
                                 provider="firebase" → verify_firebase_token
    Tests substitute their own IdentityVerifier through dependency overrides.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from fastapi.concurrency import run_in_threadpool
from google.auth import exceptions as google_auth_exceptions
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token

from app.config import settings
from app.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Principal:
    """The verified identity behind a request."""

    subject: str
    email: str
    claims: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)


class IdentityVerifier(ABC):
    """
    Contract for bearer token verification.

    Implementations raise AuthenticationError for any token they do not
    accept; they never return a partial Principal.
    """

    @abstractmethod
    async def verify(self, token: str) -> Principal:
        ...


class GoogleIdentityVerifier(IdentityVerifier):
    """
    Verifies Google OAuth2 or Firebase ID tokens with google-auth.

    Args:
        provider: "google" or "firebase"
        audience: expected `aud` claim (OAuth client id or Firebase project id)
    """

    def __init__(self, provider: str, audience: str):
        self.provider = provider
        self.audience = audience
        # Reused transport: keeps the HTTP session (and its cert cache) warm
        self._request = google_requests.Request()

    def _decode(self, token: str) -> Dict[str, Any]:
        if self.provider == "firebase":
            return id_token.verify_firebase_token(token, self._request, audience=self.audience)
        return id_token.verify_oauth2_token(token, self._request, self.audience)

    async def verify(self, token: str) -> Principal:
        if not self.audience:
            logger.error("AUTH_AUDIENCE is not configured; rejecting bearer token")
            raise AuthenticationError(message="Authentication is not configured on this server")

        try:
            claims = await run_in_threadpool(self._decode, token)
        except (ValueError, google_auth_exceptions.GoogleAuthError) as e:
            # Token text is never logged
            logger.warning("Token validation failed (%s): %s", self.provider, str(e))
            raise AuthenticationError(
                message="Invalid or expired token",
                context={"provider": self.provider, "reason": type(e).__name__},
            )

        email = claims.get("email")
        if not email:
            logger.warning("Verified token carries no email claim (sub=%s)", claims.get("sub"))
            raise AuthenticationError(message="Token does not carry an email address")

        # Self-registered accounts may claim any address until it is verified
        if claims.get("email_verified") is not True:
            logger.warning("Token email is not verified (sub=%s)", claims.get("sub"))
            raise AuthenticationError(message="Token email address is not verified")

        return Principal(subject=str(claims.get("sub", "")), email=email, claims=claims)


_verifier: Optional[IdentityVerifier] = None


def get_identity_verifier() -> IdentityVerifier:
    """FastAPI dependency returning the process-wide verifier."""
    global _verifier
    if _verifier is None:
        _verifier = GoogleIdentityVerifier(
            provider=settings.identity_provider,
            audience=settings.auth_audience,
        )
    return _verifier
