from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt

from .error_handlers import TokenExpired, TokenMalformed

ALGORITHM = "HS256"


def create_access_token(data: dict, secret_key: str, expires_delta: timedelta) -> str:
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    to_encode.update({"iat": now, "exp": now + expires_delta})
    return jwt.encode(to_encode, secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str, secret_key: str) -> dict:
    """Return the token's claims, or raise TokenExpired / TokenMalformed."""
    try:
        return jwt.decode(token, secret_key, algorithms=[ALGORITHM])
    except ExpiredSignatureError as e:
        raise TokenExpired() from e
    except JWTError as e:
        raise TokenMalformed() from e
