"""Inspect bearer tokens passed to an action."""

import time
from collections.abc import Callable, Mapping
from datetime import UTC, datetime
from typing import Any

import structlog
from jose import jwt
from jose.exceptions import JWTError
from pydantic import BaseModel, ConfigDict, Field


logger = structlog.get_logger()

BEARER_PREFIX = "Bearer "
DEFAULT_TOKEN_LIFETIME_MS = 24 * 60 * 60 * 1000


class BearerTokenInfo(BaseModel):
    """Details about a bearer token."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    token: str | None
    token_length: int = Field(ge=0)
    is_valid: bool
    expiry: str | None = Field(description="ISO 8601 expiry time, UTC")
    time_until_expiry: int | None = Field(description="Milliseconds until expiry")


class BearerToken:
    """Extracts and describes bearer tokens.

    Expiry is read from a JWT payload (``expires_in`` in milliseconds from
    now, or ``exp`` in Unix seconds). Opaque tokens and JWTs without either
    claim are assumed to live for 24 hours.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        """Initialize the inspector.

        Args:
            clock: Returns the current Unix time in seconds.
        """
        self._clock = clock

    def extract(self, params: Mapping[str, Any]) -> BearerTokenInfo:
        """Read the token from ``params["__ow_headers"]["authorization"]``.

        Args:
            params: Action input parameters.

        Returns:
            Token details; ``token`` is None when no bearer header is present.
        """
        headers = params.get("__ow_headers")
        authorization = headers.get("authorization") if isinstance(headers, Mapping) else None

        token = None
        if isinstance(authorization, str) and authorization.startswith(BEARER_PREFIX):
            token = authorization[len(BEARER_PREFIX) :]

        return self.info(token)

    def info(self, token: str | None) -> BearerTokenInfo:
        """Describe a token."""
        now_ms = int(self._clock() * 1000)
        expiry_ms = self._expiry_ms(token, now_ms)

        return BearerTokenInfo(
            token=token,
            token_length=len(token) if token else 0,
            is_valid=bool(token) and (expiry_ms is None or now_ms < expiry_ms),
            expiry=_iso(expiry_ms) if expiry_ms is not None else None,
            time_until_expiry=max(0, expiry_ms - now_ms) if expiry_ms is not None else None,
        )

    def _expiry_ms(self, token: str | None, now_ms: int) -> int | None:
        if not token:
            return None

        parts = token.split(".")
        if len(parts) == 3:  # noqa: PLR2004
            try:
                payload = jwt.get_unverified_claims(token)
            except JWTError as e:
                logger.warning("bearer_token_expiry_unreadable", error=str(e))
                return now_ms + DEFAULT_TOKEN_LIFETIME_MS

            if isinstance(payload, dict):
                if payload.get("expires_in"):
                    try:
                        return now_ms + int(payload["expires_in"])
                    except (TypeError, ValueError):
                        logger.warning("bearer_token_expiry_unreadable")
                        return now_ms + DEFAULT_TOKEN_LIFETIME_MS
                if isinstance(payload.get("exp"), int | float):
                    return int(payload["exp"] * 1000)

        return now_ms + DEFAULT_TOKEN_LIFETIME_MS


def _iso(epoch_ms: int) -> str:
    moment = datetime.fromtimestamp(epoch_ms / 1000, tz=UTC)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")
