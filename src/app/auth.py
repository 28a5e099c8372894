"""Extraction of the Notion token from request headers."""

from typing import Callable, List, Mapping, Optional

from loguru import logger

TokenStrategy = Callable[[Mapping[str, str]], Optional[str]]


def bearer_token(headers: Mapping[str, str]) -> Optional[str]:
    """``Authorization: Bearer <token>``."""
    value = headers.get("authorization")
    if not value:
        return None
    scheme, _, token = value.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


def auth_header_token(headers: Mapping[str, str]) -> Optional[str]:
    """Fallback ``Auth: <token>`` header."""
    value = headers.get("auth")
    if value is None:
        return None
    if not value.isprintable():
        logger.warning("failed to read Auth header as text")
        return None
    return value.strip() or None


# Tried in order; the first strategy to produce a token wins.
TOKEN_STRATEGIES: List[TokenStrategy] = [bearer_token, auth_header_token]


def token_from_headers(
    headers: Mapping[str, str], strategies: Optional[List[TokenStrategy]] = None
) -> Optional[str]:
    for strategy in strategies if strategies is not None else TOKEN_STRATEGIES:
        token = strategy(headers)
        if token:
            return token
    return None
