"""
Bearer token gate for write operations.

Creating, updating and deleting products requires an
``Authorization: Bearer <token>`` header whose token is one of the
values configured through ``API_TOKENS``.  Reads are public.  Tokens
are compared in constant time.  The accepted tokens are taken from the
settings attached to the running application, so tests can build apps
with their own token lists.
"""

import hmac
import logging
from typing import Dict, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import Settings, settings as default_settings
from .errors import UnauthorizedError

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def is_token_accepted(token: str, app_settings: Settings) -> bool:
    """Return ``True`` if ``token`` matches one of the configured tokens."""
    candidate = (token or "").strip()
    if not candidate:
        return False
    # compare_digest rejects non-ASCII str, so compare encoded bytes
    encoded = candidate.encode("utf-8")
    return any(hmac.compare_digest(encoded, t.encode("utf-8")) for t in app_settings.token_list())


def require_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Dict[str, str]:
    """Dependency that lets only holders of a configured token through.

    Raises ``UnauthorizedError`` when the header is missing or the
    token is unknown.  On success returns a small context dictionary
    describing the caller.
    """
    if credentials is None:
        raise UnauthorizedError("Not authenticated")
    app_settings = getattr(request.app.state, "settings", default_settings)
    if not is_token_accepted(credentials.credentials, app_settings):
        logger.warning("Rejected token for %s %s", request.method, request.url.path)
        raise UnauthorizedError("Invalid token")
    return {"sub": "api_token"}
