"""
Bearer token handling.

Tokens are issued by the external authentication provider; this module
only validates them and extracts the owner id from the ``sub`` claim.
"""

from typing import Optional

import jwt
from fastapi.security import OAuth2PasswordBearer

from app.core.config import settings

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/token", auto_error=False)


def decode_access_token(token: Optional[str]) -> Optional[str]:
    """Return the ``sub`` claim of a valid token, ``None`` otherwise."""
    if not token:
        return None
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except jwt.PyJWTError:
        return None
    subject = payload.get("sub")
    return str(subject) if subject is not None else None
