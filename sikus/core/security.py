"""
security.py

Password hashing and JWT issue/verify helpers.

Only low-level security primitives live here; routers and
business rules are elsewhere.

Main features:
- password hashing and verification (bcrypt)
- access token creation (24h by default)
- access token verification returning claims or None

Design principles:
- the signing key and expiry always come from the Settings object
  passed in by the caller
- verification never raises into business code; every failure
  (missing, malformed, expired, bad signature, wrong type, unknown
  role) collapses into None
- expiry (exp) is computed in UTC

Related files:
- sikus.core.config        : SECRET_KEY / ALGORITHM / expiry
- sikus.core.deps          : bearer token guard
- sikus.services.accounts  : login

"""

from datetime import datetime, timedelta, timezone
from typing import NamedTuple, Optional

from jose import jwt, JWTError
from passlib.context import CryptContext

from sikus.core.config import Settings
from sikus.models.user import Role


# bcrypt hashing context
# deprecated="auto" so the scheme can be swapped later

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

ACCESS_TOKEN_TYPE = "access"


class TokenClaims(NamedTuple):
    user_id: int
    role: Role


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


"""
Access token creation

- sub  : user id (string)
- role : user role at issuance time
- exp  : issuance + ACCESS_TOKEN_EXPIRE_HOURS unless expires_delta is given

"""

def create_access_token(
    user_id: int,
    role: Role,
    settings: Settings,
    expires_delta: Optional[timedelta] = None,
) -> str:
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(hours=settings.ACCESS_TOKEN_EXPIRE_HOURS))
    payload = {
        "sub": str(user_id),
        "role": Role(role).value,
        "type": ACCESS_TOKEN_TYPE,
        "iat": int(now.timestamp()),
        "exp": int(expire.timestamp()),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


"""
Access token verification

- returns TokenClaims on success
- returns None for any invalid token

"""

def verify_access_token(token: str | None, settings: Settings) -> TokenClaims | None:
    if not token:
        return None
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        if payload.get("type") != ACCESS_TOKEN_TYPE:
            return None
        return TokenClaims(user_id=int(payload["sub"]), role=Role(payload["role"]))
    except (JWTError, KeyError, TypeError, ValueError):
        return None
