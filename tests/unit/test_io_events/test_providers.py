"""Unit tests for ProviderManager."""

import json
from collections.abc import Callable

import httpx
import pytest

from action_toolkit.errors import ApiError, ErrorCode
from action_toolkit.http import RestClient
from action_toolkit.io_events import ProviderInput, ProviderManager, WorkspaceCredentials
from action_toolkit.settings import AppSettings


CREDENTIALS = WorkspaceCredentials(
    client_id="client",
    consumer_id="org",
    project_id="proj",
    workspace_id="ws",
    access_token="token",
)
API = "https://api.adobe.io"

Handler = Callable[[httpx.Request], httpx.Response]


def _manager(handler: Handler, **kwargs: object) -> ProviderManager:
    rest = RestClient(transport=httpx.MockTransport(handler))
    return ProviderManager(CREDENTIALS, rest_client=rest, **kwargs)  # type: ignore[arg-type]


def _hal(providers: list[dict], next_href: str | None = None) -> dict:
    links = {"next": {"href": next_href}} if next_href else {}
    return {"_embedded": {"providers": providers}, "_links": links}


class TestProviderManagerConstruction:
    """Tests for credential validation."""

    @pytest.mark.parametrize(
        ("field", "label"),
        [
            ("client_id", "clientId"),
            ("consumer_id", "consumerId"),
            ("workspace_id", "workspaceId"),
            ("access_token", "accessToken"),
        ],
    )
    def test_blank_credentials_rejected(self, field: str, label: str) -> None:
        """Should reject blank credential fields before any request."""
        credentials = CREDENTIALS.model_copy(update={field: "  "})

        with pytest.raises(ApiError) as exc_info:
            ProviderManager(credentials)

        assert exc_info.value.status_code == 400
        assert exc_info.value.error_code == ErrorCode.VALIDATION_ERROR.value
        assert exc_info.value.message == f"{label} is required and cannot be empty"


class TestProviderList:
    """Tests for ProviderManager.list."""

    def test_follows_pagination_with_headers(self) -> None:
        """Should collect providers from every page with HAL headers."""
        requests: list[httpx.Request] = []
        second = f"{API}/events/org/providers?page=2"

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if str(request.url) == second:
                return httpx.Response(200, json=_hal([{"id": "p2"}]))
            return httpx.Response(200, json=_hal([{"id": "p1"}], second))

        providers = _manager(handler).list()

        assert [p["id"] for p in providers] == ["p1", "p2"]
        assert str(requests[0].url) == f"{API}/events/org/providers"
        assert requests[0].headers["Authorization"] == "Bearer token"
        assert requests[0].headers["x-api-key"] == "client"
        assert requests[0].headers["Accept"] == "application/hal+json"

    def test_query_parameters(self) -> None:
        """Should encode filters, repeating providerMetadataIds."""
        urls: list[httpx.URL] = []

        def handler(request: httpx.Request) -> httpx.Response:
            urls.append(request.url)
            return httpx.Response(200, json=_hal([]))

        _manager(handler).list(
            instance_id="inst", provider_metadata_ids=["a", "b"], eventmetadata=True
        )

        params = urls[0].params
        assert params.get_list("providerMetadataIds") == ["a", "b"]
        assert params["instanceId"] == "inst"
        assert params["eventmetadata"] == "true"

    def test_conflicting_filters_rejected(self) -> None:
        """Should reject providerMetadataId together with providerMetadataIds."""
        manager = _manager(lambda _: httpx.Response(500))

        with pytest.raises(ApiError) as exc_info:
            manager.list(provider_metadata_id="x", provider_metadata_ids=["y"])

        assert exc_info.value.status_code == 400
        assert exc_info.value.error_code == ErrorCode.VALIDATION_ERROR.value
        assert exc_info.value.message == (
            "Cannot specify both providerMetadataId and providerMetadataIds"
        )

    def test_unauthorized(self) -> None:
        """Should map 401 to the provider wording."""
        with pytest.raises(ApiError) as exc_info:
            _manager(lambda _: httpx.Response(401)).list()

        assert exc_info.value.status_code == 401
        assert exc_info.value.message == "Unauthorized: Invalid or expired access token"

    def test_timeout(self) -> None:
        """Should map transport timeouts to 408."""

        def handler(request: httpx.Request) -> httpx.Response:
            msg = "timed out"
            raise httpx.ReadTimeout(msg)

        with pytest.raises(ApiError) as exc_info:
            _manager(handler).list()

        assert exc_info.value.status_code == 408
        assert exc_info.value.error_code == ErrorCode.TIMEOUT_ERROR.value

    def test_repeated_next_link(self) -> None:
        """Should stop when a next link points back to a visited page."""
        loop = f"{API}/events/org/providers"

        manager = _manager(
            lambda _: httpx.Response(200, json=_hal([{"id": "p"}], loop)),
            detect_cycles=True,
        )

        with pytest.raises(ApiError) as exc_info:
            manager.list()

        assert exc_info.value.error_code == ErrorCode.PARSE_ERROR.value


class TestProviderGetCreateDelete:
    """Tests for single-provider operations."""

    def test_get_with_eventmetadata(self) -> None:
        """Should fetch the provider by ID."""
        urls: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            urls.append(str(request.url))
            return httpx.Response(200, json={"id": "p1"})

        provider = _manager(handler).get("p1", eventmetadata=True)

        assert provider == {"id": "p1"}
        assert urls == [f"{API}/events/providers/p1?eventmetadata=true"]

    def test_get_blank_id(self) -> None:
        """Should reject a blank provider ID."""
        with pytest.raises(ApiError, match="providerId is required"):
            _manager(lambda _: httpx.Response(200)).get(" ")

    def test_get_not_found(self) -> None:
        """Should map 404 to the provider not-found wording."""
        with pytest.raises(ApiError) as exc_info:
            _manager(lambda _: httpx.Response(404)).get("p1")

        assert exc_info.value.status_code == 404
        assert exc_info.value.message.startswith("Not Found: Provider")

    def test_create_posts_payload(self) -> None:
        """Should post only the provided fields to the workspace endpoint."""
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(201, json={"id": "new", "label": "Shop"})

        created = _manager(handler).create(ProviderInput(label="Shop", description="Events"))

        assert created["id"] == "new"
        request = requests[0]
        assert request.method == "POST"
        assert str(request.url) == f"{API}/events/org/proj/ws/providers"
        assert request.headers["Content-Type"] == "application/json"
        assert json.loads(request.content) == {"label": "Shop", "description": "Events"}

    def test_create_missing_id_is_parse_error(self) -> None:
        """Should reject a created provider without an id."""
        manager = _manager(lambda _: httpx.Response(200, json={"label": "Shop"}))

        with pytest.raises(ApiError) as exc_info:
            manager.create(ProviderInput(label="Shop"))

        assert exc_info.value.message == "Invalid response format: Missing provider id"
        assert exc_info.value.status_code == 500

    def test_create_blank_label(self) -> None:
        """Should validate the label before sending."""
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json={"id": "x"})

        with pytest.raises(ApiError) as exc_info:
            _manager(handler).create(ProviderInput(label=""))

        assert exc_info.value.status_code == 400
        assert calls == []

    def test_create_conflict(self) -> None:
        """Should report the conflicting provider ID."""
        manager = _manager(
            lambda _: httpx.Response(409, headers={"x-conflicting-id": "existing"})
        )

        with pytest.raises(ApiError) as exc_info:
            manager.create(ProviderInput(label="Shop"))

        assert exc_info.value.error_code == ErrorCode.CONFLICT_ERROR.value
        assert exc_info.value.message == "Provider already exists with conflicting ID: existing"

    def test_delete(self) -> None:
        """Should send DELETE to the provider URL."""
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(204)

        assert _manager(handler).delete("p1") is None
        assert requests[0].method == "DELETE"
        assert str(requests[0].url) == f"{API}/events/org/proj/ws/providers/p1"


class TestFromSettings:
    """Tests for building managers from settings."""

    def test_page_bound_from_settings(self) -> None:
        """Should stop after PAGINATION_MAX_PAGES pages."""
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(
                200, json=_hal([{"id": "p"}], f"{API}/events/org/providers?page={len(calls)}")
            )

        settings = AppSettings(_env_file=None, PAGINATION_MAX_PAGES=2)  # type: ignore[call-arg]
        manager = ProviderManager.from_settings(
            CREDENTIALS,
            settings,
            rest_client=RestClient(transport=httpx.MockTransport(handler)),
        )

        with pytest.raises(ApiError, match="Pagination exceeded 2 pages"):
            manager.list()

        assert len(calls) == 2
