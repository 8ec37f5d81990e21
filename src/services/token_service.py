"""Token service: issues and verifies signed bearer tokens.

Tokens are HS256 JWTs carrying the subject id and email. Verification is
stateless: no store is consulted, and nothing revokes a token before its
expiry (a password change leaves outstanding tokens valid).
"""

import logging
import re
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from domain.model.errors import AuthError
from domain.model.identity import Identity

logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM = "HS256"
DEFAULT_EXPIRES_IN = 3600

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_UNIT_SECONDS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400}


def parse_expires_in(value: str | int | None) -> int:
    """Parse a token lifetime into seconds.

    Accepts a plain number of seconds or a number with a unit suffix.

    Example:
        parse_expires_in("1h") → 3600
        parse_expires_in("30m") → 1800
        parse_expires_in(90) → 90
    """
    if value is None or value == "":
        return DEFAULT_EXPIRES_IN
    if isinstance(value, int):
        seconds = value
    else:
        match = _DURATION_RE.match(value.lower())
        if not match:
            raise ValueError(f"Invalid token lifetime: {value!r}")
        seconds = int(match.group(1)) * _UNIT_SECONDS[match.group(2)]
    if seconds <= 0:
        raise ValueError(f"Token lifetime must be positive: {value!r}")
    return seconds


class TokenService:
    def __init__(
        self,
        secret_key: str,
        expires_in: int | timedelta = DEFAULT_EXPIRES_IN,
        algorithm: str = DEFAULT_ALGORITHM,
    ):
        if not secret_key:
            raise ValueError("secret_key is required")
        self.secret_key = secret_key
        self.algorithm = algorithm
        if isinstance(expires_in, timedelta):
            self.expires_in = expires_in
        else:
            self.expires_in = timedelta(seconds=expires_in)

    def issue(self, subject_id: str, email: str) -> str:
        """Create a signed token for the subject."""
        now = datetime.now(timezone.utc)
        payload = {
            "sub": subject_id,
            "email": email,
            "iat": now,
            "exp": now + self.expires_in,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> Identity:
        """Verify a token and return its identity.

        Raises:
            AuthError: bad signature, malformed token, missing claims, or expired
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            logger.debug(f"JWT verification failed: {e}")
            raise AuthError("Invalid or expired token") from e

        subject_id = payload.get("sub")
        email = payload.get("email")
        if not subject_id or not email:
            raise AuthError("Invalid or expired token")
        return Identity(subject_id=subject_id, email=email)
