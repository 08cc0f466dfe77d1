"""Authentication dependencies for FastAPI endpoints."""

from fastapi import Depends, Request

from app.auth.jwt import Identity, TokenCodec, TokenError, get_token_codec
from app.config import settings
from app.errors import Unauthorized
from app.logging import get_logger

logger = get_logger("app.auth")

NO_TOKEN_MESSAGE = "No token, authorization denied"
INVALID_TOKEN_MESSAGE = "Token is not valid"


async def get_current_identity(
    request: Request,
    codec: TokenCodec = Depends(get_token_codec),
) -> Identity:
    """
    Validate the bearer token header and return the caller's identity.

    The token is read verbatim from the configured header (no scheme prefix).
    Every decode failure yields the same client message; the failure kind is
    only logged.

    Raises:
        Unauthorized: 401 if the token is missing or not valid
    """
    token = request.headers.get(settings.auth_header_name)
    if not token:
        raise Unauthorized(NO_TOKEN_MESSAGE)

    try:
        identity = codec.decode(token)
    except TokenError as exc:
        logger.warning(
            "token_rejected",
            reason=type(exc).__name__,
            detail=str(exc),
            path=request.url.path,
        )
        raise Unauthorized(INVALID_TOKEN_MESSAGE) from exc

    request.state.user = identity
    return identity
