"""HS256 access tokens."""

from datetime import timedelta

import jwt

from cryptoquotes.domain.models import AuthContext
from cryptoquotes.domain.ports import TokenService
from cryptoquotes.exceptions import InvalidTokenError
from cryptoquotes.timeutils import Clock, utc_now

ALGORITHM = "HS256"


class JWTService(TokenService):
    def __init__(
        self,
        secret: str,
        ttl: timedelta = timedelta(minutes=60),
        issuer: str = "cryptoquotes",
        clock: Clock = utc_now,
    ) -> None:
        self._secret = secret
        self._ttl = ttl if ttl > timedelta(0) else timedelta(minutes=60)
        self._issuer = issuer
        self._clock = clock

    def generate(self, user_id: int, email: str) -> str:
        now = self._clock()
        claims = {
            "sub": str(user_id),
            "email": email,
            "iss": self._issuer,
            "iat": int(now.timestamp()),
            "exp": int((now + self._ttl).timestamp()),
        }
        return jwt.encode(claims, self._secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> AuthContext:
        try:
            claims = jwt.decode(token, self._secret, algorithms=[ALGORITHM], options={"require": ["exp", "sub"]})
        except jwt.PyJWTError as e:
            raise InvalidTokenError(str(e)) from e

        try:
            user_id = int(claims["sub"])
        except (TypeError, ValueError):
            raise InvalidTokenError("sub is not a user id") from None

        email = claims.get("email")
        if user_id <= 0 or not isinstance(email, str) or not email:
            raise InvalidTokenError("missing identity claims")
        return AuthContext(user_id=user_id, email=email)
