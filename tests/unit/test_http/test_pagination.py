"""Unit tests for PaginatedCollectionFetcher."""

import httpx
import pytest

from action_toolkit.errors import ApiError, ErrorCode
from action_toolkit.http import (
    HttpError,
    PaginatedCollectionFetcher,
    PaginationLimitError,
    RestClient,
)


BASE = "https://api.example.com/items"


def _page(items: list[int], next_href: str | None = None) -> dict:
    links: dict = {"self": {"href": "ignored"}}
    if next_href:
        links["next"] = {"href": next_href}
    return {"_embedded": {"things": items}, "_links": links}


def _fetcher(pages: dict[str, object], **kwargs: object) -> tuple[PaginatedCollectionFetcher, list[str]]:
    requested: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        requested.append(url)
        if url not in pages:
            return httpx.Response(404)
        return httpx.Response(200, json=pages[url])

    rest = RestClient(transport=httpx.MockTransport(handler))
    return PaginatedCollectionFetcher(rest, "things", **kwargs), requested  # type: ignore[arg-type]


class TestPaginatedCollectionFetcher:
    """Tests for fetch_all."""

    def test_follows_next_links_in_order(self) -> None:
        """Should concatenate items from every page in link order."""
        fetcher, requested = _fetcher(
            {
                BASE: _page([1, 2], f"{BASE}?page=2"),
                f"{BASE}?page=2": _page([3], f"{BASE}?page=3"),
                f"{BASE}?page=3": _page([4, 5]),
            }
        )

        items = fetcher.fetch_all(BASE, {"Accept": "application/hal+json"})

        assert items == [1, 2, 3, 4, 5]
        assert requested == [BASE, f"{BASE}?page=2", f"{BASE}?page=3"]

    def test_single_page(self) -> None:
        """Should stop when there is no next link."""
        fetcher, requested = _fetcher({BASE: _page([])})

        assert fetcher.fetch_all(BASE, {}) == []
        assert len(requested) == 1

    def test_sends_headers_on_every_page(self) -> None:
        """Should reuse the same headers for each page."""
        seen: list[str | None] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request.headers.get("x-api-key"))
            if request.url.params.get("page") == "2":
                return httpx.Response(200, json=_page([2]))
            return httpx.Response(200, json=_page([1], f"{BASE}?page=2"))

        fetcher = PaginatedCollectionFetcher(
            RestClient(transport=httpx.MockTransport(handler)), "things"
        )

        fetcher.fetch_all(BASE, {"x-api-key": "client"})

        assert seen == ["client", "client"]

    @pytest.mark.parametrize("body", [None, [1, 2], "text"])
    def test_non_object_page_is_parse_error(self, body: object) -> None:
        """Should reject pages that are not JSON objects."""
        fetcher, _ = _fetcher({BASE: body})

        with pytest.raises(ApiError) as exc_info:
            fetcher.fetch_all(BASE, {})

        assert exc_info.value.status_code == 500
        assert exc_info.value.error_code == ErrorCode.PARSE_ERROR.value
        assert exc_info.value.message == "Invalid response format: Expected object"

    def test_missing_embedded_array_is_parse_error(self) -> None:
        """Should reject a page without the embedded array rather than treat it as empty."""
        fetcher, _ = _fetcher({BASE: {"_embedded": {"other": []}}})

        with pytest.raises(ApiError, match="Expected things array"):
            fetcher.fetch_all(BASE, {})

    def test_http_error_propagates(self) -> None:
        """Should let HttpError from a page request propagate."""
        fetcher, _ = _fetcher({BASE: _page([1], f"{BASE}?page=2")})

        with pytest.raises(HttpError, match="status: 404"):
            fetcher.fetch_all(BASE, {})

    def test_max_pages_bound(self) -> None:
        """Should stop with PaginationLimitError beyond max_pages."""
        fetcher, requested = _fetcher(
            {
                BASE: _page([1], f"{BASE}?page=2"),
                f"{BASE}?page=2": _page([2], f"{BASE}?page=3"),
            },
            max_pages=2,
        )

        with pytest.raises(PaginationLimitError) as exc_info:
            fetcher.fetch_all(BASE, {})

        assert len(requested) == 2
        assert exc_info.value.status_code == 500
        assert exc_info.value.error_code == ErrorCode.PARSE_ERROR.value

    def test_cycle_detection(self) -> None:
        """Should stop when a next link returns to an earlier page."""
        fetcher, requested = _fetcher(
            {
                BASE: _page([1], f"{BASE}?page=2"),
                f"{BASE}?page=2": _page([2], BASE),
            },
            detect_cycles=True,
        )

        with pytest.raises(PaginationLimitError, match="cycle"):
            fetcher.fetch_all(BASE, {})

        assert requested == [BASE, f"{BASE}?page=2"]

    def test_rejects_non_positive_max_pages(self) -> None:
        """Should validate max_pages at construction."""
        with pytest.raises(ValueError, match="max_pages"):
            PaginatedCollectionFetcher(RestClient(), "things", max_pages=0)
