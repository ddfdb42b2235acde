from jose import JWTError, jwt

from config.settings import settings
from .exceptions import InvalidOrExpiredToken

# Both claims must be present; jose checks the signature and that exp is in the future
DECODE_OPTIONS = {"require_exp": True, "require_sub": True}


def decode_access_token(token: str, secret_key: str = None, algorithm: str = None) -> int:
    """Verifies a JWT and returns the user id carried in its ``sub`` claim."""
    try:
        payload = jwt.decode(
            token,
            secret_key or settings.SECRET_KEY,
            algorithms=[algorithm or settings.ALGORITHM],
            options=DECODE_OPTIONS,
        )
    except JWTError as e:
        raise InvalidOrExpiredToken() from e

    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidOrExpiredToken() from e
