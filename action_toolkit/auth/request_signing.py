"""OAuth 1.0a request signing with HMAC-SHA256.

Every request is signed with a fresh timestamp and nonce, so signatures are
single-use and nothing is cached.
"""

import base64
import hashlib
import hmac
import secrets
import string
import time
from collections.abc import Callable
from urllib.parse import parse_qsl, quote, urlsplit, urlunsplit

import httpx
import structlog


logger = structlog.get_logger()

SIGNATURE_METHOD = "HMAC-SHA256"
OAUTH_VERSION = "1.0"
NONCE_LENGTH = 32

_NONCE_ALPHABET = string.ascii_letters + string.digits


def percent_encode(value: str) -> str:
    """RFC 3986 percent-encoding as required by OAuth 1.0a."""
    return quote(value, safe="-._~")


def generate_nonce() -> str:
    """Return a random alphanumeric nonce."""
    return "".join(secrets.choice(_NONCE_ALPHABET) for _ in range(NONCE_LENGTH))


def _base_url(url: str) -> str:
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    netloc = parts.netloc.lower()
    if (scheme, parts.port) in {("http", 80), ("https", 443)}:
        netloc = netloc.rsplit(":", 1)[0]
    return urlunsplit((scheme, netloc, parts.path or "/", "", ""))


def signature_base_string(
    method: str, url: str, params: list[tuple[str, str]]
) -> str:
    """Build the OAuth signature base string.

    Args:
        method: HTTP method.
        url: Request URL; its query parameters are signed too.
        params: OAuth protocol parameters.

    Returns:
        ``METHOD&encoded-base-url&encoded-parameter-string``.
    """
    query = parse_qsl(urlsplit(url).query, keep_blank_values=True)
    encoded = sorted(
        (percent_encode(key), percent_encode(value)) for key, value in [*params, *query]
    )
    parameter_string = "&".join(f"{key}={value}" for key, value in encoded)
    return "&".join(
        [
            method.upper(),
            percent_encode(_base_url(url)),
            percent_encode(parameter_string),
        ]
    )


class RequestSigningStrategy:
    """Authorizes requests with a per-request OAuth 1.0a signature."""

    def __init__(
        self,
        consumer_key: str,
        consumer_secret: str,
        access_token: str,
        access_token_secret: str,
        clock: Callable[[], float] = time.time,
        nonce_factory: Callable[[], str] = generate_nonce,
        log: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the strategy.

        Args:
            consumer_key: Integration consumer key.
            consumer_secret: Integration consumer secret.
            access_token: Integration access token.
            access_token_secret: Integration access token secret.
            clock: Returns the current Unix time in seconds.
            nonce_factory: Returns a fresh nonce per signature.
            log: Logger to use; defaults to the module logger.
        """
        self._consumer_key = consumer_key
        self._consumer_secret = consumer_secret
        self._access_token = access_token
        self._access_token_secret = access_token_secret
        self._clock = clock
        self._nonce_factory = nonce_factory
        self._log = (log or logger).bind(component="auth", strategy="request_signing")

    def authorize(self, request: httpx.Request) -> httpx.Request:
        """Sign the request and attach the ``Authorization`` header."""
        request.headers.update(self.sign(request.method, str(request.url)))
        return request

    def sign(self, method: str, url: str) -> dict[str, str]:
        """Compute the OAuth ``Authorization`` header for one request.

        Args:
            method: HTTP method.
            url: Absolute request URL.

        Returns:
            Header mapping with a single ``Authorization`` entry.
        """
        oauth_params = [
            ("oauth_consumer_key", self._consumer_key),
            ("oauth_nonce", self._nonce_factory()),
            ("oauth_signature_method", SIGNATURE_METHOD),
            ("oauth_timestamp", str(int(self._clock()))),
            ("oauth_token", self._access_token),
            ("oauth_version", OAUTH_VERSION),
        ]

        base_string = signature_base_string(method, url, oauth_params)
        oauth_params.append(("oauth_signature", self._signature(base_string)))

        header = ", ".join(
            f'{percent_encode(key)}="{percent_encode(value)}"'
            for key, value in sorted(oauth_params)
        )
        self._log.debug("request_signed", method=method.upper())
        return {"Authorization": f"OAuth {header}"}

    def _signature(self, base_string: str) -> str:
        key = (
            f"{percent_encode(self._consumer_secret)}&"
            f"{percent_encode(self._access_token_secret)}"
        )
        digest = hmac.new(
            key.encode(), base_string.encode(), hashlib.sha256
        ).digest()
        return base64.b64encode(digest).decode()
