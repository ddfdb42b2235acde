import logging
from typing import Callable, Mapping, Optional, Sequence

from fastapi import Request

from .exceptions import InvalidOrExpiredToken, MissingCredentials
from .utils import decode_access_token

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "

TokenExtractor = Callable[[Mapping[str, str], Mapping[str, str]], Optional[str]]


def token_from_header(headers: Mapping[str, str], query_params: Mapping[str, str]) -> Optional[str]:
    """``Authorization: Bearer <token>``; the prefix is optional."""
    auth_header = headers.get("authorization")
    if not auth_header:
        return None
    if auth_header.startswith(BEARER_PREFIX):
        return auth_header[len(BEARER_PREFIX):]
    return auth_header


def token_from_query(headers: Mapping[str, str], query_params: Mapping[str, str]) -> Optional[str]:
    """``?auth=<token>``, for preview links rendered by <img> and <iframe> tags."""
    return query_params.get("auth") or None


# Tried in order, first hit wins
TOKEN_EXTRACTORS: Sequence[TokenExtractor] = (token_from_header, token_from_query)


def extract_token(
    headers: Mapping[str, str],
    query_params: Mapping[str, str],
    extractors: Sequence[TokenExtractor] = TOKEN_EXTRACTORS,
) -> str:
    for extractor in extractors:
        token = extractor(headers, query_params)
        if token is not None:
            return token
    raise MissingCredentials()


def authenticate(headers: Mapping[str, str], query_params: Mapping[str, str]) -> int:
    """Resolves the caller's user id from request headers or query parameters.

    Raises MissingCredentials when no transport carries a token and
    InvalidOrExpiredToken when the token fails verification.
    """
    token = extract_token(headers, query_params)
    return decode_access_token(token)


async def get_current_user_id(request: Request) -> int:
    try:
        return authenticate(request.headers, request.query_params)
    except MissingCredentials:
        logger.debug(f"No credentials on {request.method} {request.url.path}")
        raise
    except InvalidOrExpiredToken:
        logger.info(f"Rejected token on {request.method} {request.url.path}")
        raise
