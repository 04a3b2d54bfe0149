"""HTTP token authentication.

Every protected request is authenticated on its own from the
``Authorization`` header; no user id is kept in a cookie session.

Accepted header forms::

    Authorization: Bearer <token>
    Authorization: Token token="<token>"
    Authorization: Token <token>
"""

import logging
import re
from typing import Optional

from errors import error_response
from extensions import login_manager
from modules.users.store import UserStore

logger = logging.getLogger(__name__)

TOKEN_SCHEMES = ("bearer", "token")
REALM = "Application"

_TOKEN_PARAM_RE = re.compile(r'^token\s*=\s*"?([^",\s]+)"?')


def parse_authorization(header: Optional[str]) -> Optional[str]:
    """Extract the token from an ``Authorization`` header, or ``None``."""
    if not header:
        return None
    parts = header.strip().split(None, 1)
    if len(parts) != 2 or parts[0].lower() not in TOKEN_SCHEMES:
        return None

    credentials = parts[1].strip()
    match = _TOKEN_PARAM_RE.match(credentials)
    if match:
        return match.group(1)
    if " " in credentials or "=" in credentials or '"' in credentials:
        return None
    return credentials or None


@login_manager.request_loader
def load_user_from_request(req):
    token = parse_authorization(req.headers.get("Authorization"))
    if token is None:
        return None
    user = UserStore().find_by_token(token)
    if user is None:
        logger.debug("Rejected auth token for %s %s", req.method, req.path)
    return user


@login_manager.unauthorized_handler
def unauthorized():
    response, status = error_response(401, "unauthorized", "A valid auth token is required.")
    response.headers["WWW-Authenticate"] = f'Token realm="{REALM}"'
    return response, status

