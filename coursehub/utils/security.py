import os
import time
from typing import Any, Dict, Optional

from jose import JWTError, jwt


def _public_key() -> Optional[str]:
    key = os.getenv("CLERK_JWT_KEY")
    if not key:
        return None
    # .env files usually carry the PEM on one line with literal \n
    return key.replace("\\n", "\n")


def verify_session_token(token: str) -> Optional[Dict[str, Any]]:
    """
    Verifies a Clerk session JWT (RS256) against the instance public key.
    Returns the claims, or None when the token cannot be trusted.
    """
    key = _public_key()
    if not key:
        return None
    try:
        claims = jwt.decode(token, key, algorithms=["RS256"], options={"verify_aud": False})
    except JWTError:
        return None
    if not claims.get("sub"):
        return None
    return claims


def seconds_until_expiry(claims: Dict[str, Any]) -> int:
    exp = claims.get("exp")
    if exp is None:
        return int(os.getenv("SESSION_TTL_SECONDS", "60"))
    return max(0, int(exp) - int(time.time()))
