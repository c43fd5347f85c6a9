"""Redaction of credentials before headers and URLs reach the logs."""

import re
from collections.abc import Mapping
from typing import Final


# Bearer tokens, OAuth 1.0a signatures, API keys and org identifiers
SENSITIVE_HEADERS: Final = frozenset(
    {
        "authorization",
        "proxy-authorization",
        "x-api-key",
        "x-gw-ims-org-id",
        "cookie",
        "set-cookie",
    }
)

# Query parameters that carry secrets in token and callback URLs
SENSITIVE_QUERY_PARAMS: Final = frozenset(
    {"access_token", "client_secret", "password", "token"}
)

REDACTED_VALUE: Final = "[REDACTED]"

_USERINFO = re.compile(r"(https?://)[^/@\s]+@")
_QUERY_PARAM = re.compile(r"([?&])([^=&#]+)=([^&#]*)")


def redact_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Copy ``headers`` with credential-bearing values replaced.

    Accepts plain dicts and ``httpx.Headers``; names are matched
    case-insensitively and keep their original spelling.
    """
    return {
        name: REDACTED_VALUE if name.lower() in SENSITIVE_HEADERS else value
        for name, value in headers.items()
    }


def redact_url_credentials(url: str) -> str:
    """Hide ``user:password@`` userinfo and secret query parameters in ``url``."""
    url = _USERINFO.sub(rf"\1{REDACTED_VALUE}:{REDACTED_VALUE}@", url)

    def _mask(match: re.Match[str]) -> str:
        separator, name, value = match.groups()
        if name.lower() in SENSITIVE_QUERY_PARAMS:
            value = REDACTED_VALUE
        return f"{separator}{name}={value}"

    return _QUERY_PARAM.sub(_mask, url)
