from datetime import timedelta
from typing import Any, Dict, Optional

from jose import JWTError, jwt

from chatbot_blocks.configs.settings import settings
from chatbot_blocks.utils.time import utc_now


def create_access_token(user_id: int, extra_claims: Optional[Dict[str, Any]] = None, expires_delta: Optional[timedelta] = None) -> str:
    """
    Sign a bearer token whose subject is the user id.

    Login lives in another service; this is kept for operators and tests.
    """
    to_encode = dict(extra_claims or {})
    expire = utc_now() + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"sub": str(user_id), "exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Optional[int]:
    """
    Return the user id carried by a valid token, or None.

    Signature and expiry are checked by python-jose.
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None

    subject = payload.get("sub")
    if subject is None or not str(subject).isdigit():
        return None
    return int(subject)
