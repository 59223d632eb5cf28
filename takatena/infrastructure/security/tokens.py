"""HS256 JWT access tokens carrying the user id as ``sub``."""
import time

import jwt
import structlog

from takatena.application.interfaces.security import TokenIssuer

logger = structlog.get_logger(__name__)

_TOKEN_TYPE = "access"


class JwtTokenIssuer(TokenIssuer):
    def __init__(
        self,
        secret: str,
        *,
        algorithm: str = "HS256",
        ttl_seconds: int = 60 * 60 * 24 * 7,
    ) -> None:
        self._secret = secret
        self._algorithm = algorithm
        self._ttl_seconds = ttl_seconds

    @property
    def ttl_seconds(self) -> int:
        return self._ttl_seconds

    def issue(self, user_id: str) -> str:
        now = int(time.time())
        payload = {
            "sub": user_id,
            "iat": now,
            "exp": now + self._ttl_seconds,
            "type": _TOKEN_TYPE,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def read_subject(self, token: str) -> str | None:
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except jwt.InvalidTokenError as exc:
            logger.info("token_rejected", reason=type(exc).__name__)
            return None
        if payload.get("type") != _TOKEN_TYPE:
            return None
        subject = payload.get("sub")
        return subject if isinstance(subject, str) and subject else None
