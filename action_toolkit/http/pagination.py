"""Walk HAL ``_links.next`` chains and collect every embedded item.

Each page must look like::

    {"_embedded": {"<items_key>": [...]}, "_links": {"next": {"href": "..."}}}
"""

from collections.abc import Mapping
from typing import Any

import structlog

from action_toolkit.errors.api_error import ApiError, ErrorCode
from action_toolkit.http.constants import HTTP_STATUS_INTERNAL_SERVER_ERROR
from action_toolkit.http.redact import redact_url_credentials
from action_toolkit.http.rest_client import RestClient


logger = structlog.get_logger()


class PaginationLimitError(ApiError):
    """Pagination stopped by the page bound or by a repeated next link."""

    def __init__(self, message: str, url: str) -> None:
        super().__init__(
            message,
            HTTP_STATUS_INTERNAL_SERVER_ERROR,
            ErrorCode.PARSE_ERROR,
            {"url": url},
        )


class PaginatedCollectionFetcher:
    """Fetches every page of one HAL collection.

    Pages are requested in link order, each at most once per chain. With the
    default arguments there is no bound on the number of pages; ``max_pages``
    and ``detect_cycles`` turn a runaway chain into PaginationLimitError.
    """

    def __init__(
        self,
        rest_client: RestClient,
        items_key: str,
        max_pages: int | None = None,
        detect_cycles: bool = False,
        log: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            rest_client: Client used for every page request.
            items_key: Key of the item array under ``_embedded``.
            max_pages: Maximum pages to fetch, or None for no bound.
            detect_cycles: Fail when a next link repeats an earlier URL.
            log: Logger to use; defaults to the module logger.

        Raises:
            ValueError: If max_pages is less than 1.
        """
        if max_pages is not None and max_pages < 1:
            msg = "max_pages must be at least 1"
            raise ValueError(msg)

        self._rest_client = rest_client
        self._items_key = items_key
        self._max_pages = max_pages
        self._detect_cycles = detect_cycles
        self._log = (log or logger).bind(component="pagination", items_key=items_key)

    def fetch_all(self, start_url: str, headers: dict[str, str]) -> list[Any]:
        """Fetch all pages starting at ``start_url``.

        Args:
            start_url: URL of the first page.
            headers: Headers sent with every page request.

        Returns:
            Items from all pages, in page order.

        Raises:
            ApiError: If a page is not a valid collection page (500, PARSE_ERROR).
            PaginationLimitError: If a configured bound is hit.
            HttpError: If a page request returns a non-2xx status.
        """
        items: list[Any] = []
        seen: set[str] = set()
        url: str | None = start_url
        pages = 0

        while url is not None:
            if self._detect_cycles:
                if url in seen:
                    msg = f"Pagination cycle detected at {redact_url_credentials(url)}"
                    raise PaginationLimitError(msg, url)
                seen.add(url)

            if self._max_pages is not None and pages >= self._max_pages:
                msg = f"Pagination exceeded {self._max_pages} pages"
                raise PaginationLimitError(msg, url)

            page = self._rest_client.get(url, headers)
            items.extend(self._page_items(page))
            pages += 1
            url = _next_href(page)

        self._log.debug("pagination_complete", pages=pages, items=len(items))
        return items

    def _page_items(self, page: Any) -> list[Any]:
        if not isinstance(page, Mapping):
            msg = "Invalid response format: Expected object"
            raise ApiError(msg, HTTP_STATUS_INTERNAL_SERVER_ERROR, ErrorCode.PARSE_ERROR)

        embedded = page.get("_embedded")
        page_items = (
            embedded.get(self._items_key) if isinstance(embedded, Mapping) else None
        )
        if not isinstance(page_items, list):
            msg = f"Invalid response format: Expected {self._items_key} array"
            raise ApiError(msg, HTTP_STATUS_INTERNAL_SERVER_ERROR, ErrorCode.PARSE_ERROR)

        return page_items


def _next_href(page: Mapping[str, Any]) -> str | None:
    links = page.get("_links")
    if not isinstance(links, Mapping):
        return None
    next_link = links.get("next")
    if not isinstance(next_link, Mapping):
        return None
    href = next_link.get("href")
    return href if isinstance(href, str) and href else None
