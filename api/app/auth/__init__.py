"""Authentication utilities for the DevConnector API."""

from app.auth.dependencies import get_current_identity
from app.auth.jwt import (
    Identity,
    InvalidToken,
    MalformedToken,
    TokenCodec,
    TokenError,
    get_token_codec,
)

__all__ = [
    "Identity",
    "TokenCodec",
    "TokenError",
    "MalformedToken",
    "InvalidToken",
    "get_token_codec",
    "get_current_identity",
]
