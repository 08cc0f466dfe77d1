"""Bearer token creation and validation."""

from datetime import datetime, timedelta, timezone
from functools import lru_cache

from jose import jwt
from jose.exceptions import JWTError
from pydantic import BaseModel

from app.config import settings


class Identity(BaseModel):
    """The account a request acts on behalf of."""

    id: str


class TokenError(Exception):
    """Base class for token decode failures."""


class MalformedToken(TokenError):
    """Token structure cannot be parsed at all."""


class InvalidToken(TokenError):
    """Token parsed but failed signature, expiry or payload checks."""


class TokenCodec:
    """Encodes an identity into a signed, time-bounded token and back."""

    def __init__(self, secret: str, algorithm: str = "HS256", expires_in: int = 360000):
        self.secret = secret
        self.algorithm = algorithm
        self.expires_in = timedelta(seconds=expires_in)

    def issue(self, user_id: str) -> str:
        """Create a signed token for the given owner id."""
        now = datetime.now(timezone.utc)
        payload = {
            "user": {"id": str(user_id)},
            "iat": now,
            "exp": now + self.expires_in,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode(self, token: str) -> Identity:
        """
        Verify a token and return the identity embedded at issuance.

        Raises:
            MalformedToken: header or claims segment is not decodable
            InvalidToken: bad signature, tampered payload, expired, or no user id
        """
        try:
            jwt.get_unverified_header(token)
            jwt.get_unverified_claims(token)
        except JWTError as exc:
            raise MalformedToken(str(exc)) from exc

        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as exc:
            raise InvalidToken(str(exc)) from exc

        user = payload.get("user")
        if not isinstance(user, dict) or not user.get("id"):
            raise InvalidToken("Token payload has no user id")

        return Identity(id=str(user["id"]))


@lru_cache
def get_token_codec() -> TokenCodec:
    """Get the process-wide codec built from settings."""
    return TokenCodec(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        expires_in=settings.jwt_expire_seconds,
    )
