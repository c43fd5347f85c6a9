"""Shared plumbing for the I/O Events resource managers."""

from typing import Any, Self
from urllib.parse import quote

import structlog

from action_toolkit.errors import ApiError, ErrorCode, ErrorNormalizer, StatusMessages
from action_toolkit.http.constants import (
    HAL_JSON,
    HTTP_STATUS_BAD_REQUEST,
    HTTP_STATUS_INTERNAL_SERVER_ERROR,
)
from action_toolkit.http.pagination import PaginatedCollectionFetcher
from action_toolkit.http.rest_client import RestClient
from action_toolkit.io_events.constants import BASE_URL
from action_toolkit.io_events.models import WorkspaceCredentials
from action_toolkit.settings.app import AppSettings


logger = structlog.get_logger()


def require(value: str | None, name: str) -> str:
    """Return ``value`` stripped, or raise the standard "is required" error.

    Raises:
        ValueError: If the value is missing or blank.
    """
    if value is None or not value.strip():
        msg = f"{name} is required and cannot be empty"
        raise ValueError(msg)
    return value.strip()


def validation_error(message: str) -> ApiError:
    """Build a 400 VALIDATION_ERROR."""
    return ApiError(message, HTTP_STATUS_BAD_REQUEST, ErrorCode.VALIDATION_ERROR)


class IoEventsResource:
    """Base class holding credentials, transport and error normalization.

    Subclasses set ``messages`` and ``items_key``.
    """

    messages: StatusMessages
    items_key: str

    def __init__(
        self,
        credentials: WorkspaceCredentials,
        rest_client: RestClient | None = None,
        base_url: str = BASE_URL,
        max_pages: int | None = None,
        detect_cycles: bool = False,
        log: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the manager.

        Args:
            credentials: Workspace identifiers and access token.
            rest_client: REST transport; a default one is created if omitted.
            base_url: API base URL.
            max_pages: Page bound for list operations, None for no bound.
            detect_cycles: Fail list operations on repeated next links.
            log: Logger to use; defaults to the module logger.

        Raises:
            ApiError: If any credential field is blank (400, VALIDATION_ERROR).
        """
        for name in ("client_id", "consumer_id", "project_id", "workspace_id", "access_token"):
            if not getattr(credentials, name).strip():
                raise validation_error(f"{_camel(name)} is required and cannot be empty")

        self._credentials = credentials
        self._base_url = base_url.rstrip("/")
        self._log = (log or logger).bind(
            component="io_events", resource=self.messages.resource_label.lower()
        )
        self._rest_client = rest_client or RestClient(log=self._log)
        self._normalizer = ErrorNormalizer(self.messages)
        self._fetcher = PaginatedCollectionFetcher(
            self._rest_client,
            self.items_key,
            max_pages=max_pages,
            detect_cycles=detect_cycles,
            log=self._log,
        )

    @classmethod
    def from_settings(
        cls,
        credentials: WorkspaceCredentials,
        settings: AppSettings,
        **kwargs: Any,
    ) -> Self:
        """Build a manager whose list operations honor ``PAGINATION_MAX_PAGES``."""
        return cls(credentials, max_pages=settings.pagination_max_pages, **kwargs)

    @property
    def normalizer(self) -> ErrorNormalizer:
        """Get the error normalizer for this resource."""
        return self._normalizer

    def _headers(self, with_body: bool = False) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self._credentials.access_token}",
            "x-api-key": self._credentials.client_id,
            "Accept": HAL_JSON,
        }
        if with_body:
            headers["Content-Type"] = "application/json"
        return headers

    def _workspace_url(self, *segments: str) -> str:
        """Build ``/events/{consumer}/{project}/{workspace}/...``."""
        creds = self._credentials
        parts = [
            "events",
            creds.consumer_id,
            creds.project_id,
            creds.workspace_id,
            *(quote(segment, safe="") for segment in segments),
        ]
        return f"{self._base_url}/{'/'.join(parts)}"


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def invalid_response(message: str) -> ApiError:
    """Build a 500 PARSE_ERROR for a response with an unexpected shape."""
    return ApiError(message, HTTP_STATUS_INTERNAL_SERVER_ERROR, ErrorCode.PARSE_ERROR)
