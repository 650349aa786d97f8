import logging
import time

from argon2 import PasswordHasher
from argon2.exceptions import VerifyMismatchError
from jose import JWTError, jwt

from jobly.config import settings
from jobly.schemas.auth import CurrentUser

logger = logging.getLogger(__name__)

ph = PasswordHasher(
    time_cost=settings.password_time_cost,
    memory_cost=settings.password_memory_cost,
    parallelism=4,
)


def hash_password(password: str) -> str:
    return ph.hash(password)


def verify_password(stored_hash: str, password: str) -> bool:
    try:
        return ph.verify(stored_hash, password)
    except VerifyMismatchError:
        return False


class TokenService:
    """Signs and verifies bearer tokens carrying ``{username, isAdmin}``.

    The signing key is handed in at construction; nothing here reads global
    configuration.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256", ttl_seconds: int = 0):
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._ttl_seconds = ttl_seconds

    def create_token(self, username: str, is_admin: bool = False) -> str:
        now = int(time.time())
        claims = {"username": username, "isAdmin": bool(is_admin), "iat": now}
        if self._ttl_seconds:
            claims["exp"] = now + self._ttl_seconds
        return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)

    def decode(self, token: str) -> CurrentUser | None:
        """Return the identity in ``token``, or None if it does not verify."""
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except JWTError as exc:
            logger.debug("Rejected bearer token: %s", exc)
            return None

        username = payload.get("username")
        if not isinstance(username, str):
            return None
        return CurrentUser(username=username, is_admin=bool(payload.get("isAdmin", False)))
