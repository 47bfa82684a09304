"""
CascadeBlog Backend - Route Access Policies
============================================

What:  FastAPI dependencies that declare who may call a route.
Why:   Access rules live in the route declaration (`Depends(...)`), so the auth
       coverage of the whole API can be audited from the routers alone.
How:   HTTPBearer extracts the token (auto_error disabled so that a missing or
       non-Bearer header becomes our 401, not FastAPI's default), the
       IdentityVerifier decodes it, the Principal is attached to request.state.

Policies:
    require_principal        any verified user            → 401 otherwise
    require_wishlist_owner   verified user whose email
                             equals the {userEmail} path  → 401 / 403 otherwise
"""

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.exceptions import AuthenticationError, ForbiddenError
from app.services.identity_service import (
    IdentityVerifier,
    Principal,
    get_identity_verifier,
)

logger = logging.getLogger(__name__)

bearer = HTTPBearer(auto_error=False, description="Google or Firebase ID token (JWT)")


async def require_principal(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    verifier: IdentityVerifier = Depends(get_identity_verifier),
) -> Principal:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError(message="Missing bearer token")

    principal = await verifier.verify(credentials.credentials)
    request.state.principal = principal
    return principal


async def require_wishlist_owner(
    userEmail: str,
    principal: Principal = Depends(require_principal),
) -> Principal:
    """Ownership check for per-user resources keyed by email in the path."""
    if principal.email != userEmail:
        logger.warning("Principal %s denied access to wishlist of %s", principal.email, userEmail)
        raise ForbiddenError(
            message="You can only access your own wishlist",
            context={"principal": principal.email, "requested": userEmail},
        )
    return principal
