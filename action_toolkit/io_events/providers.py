"""Event provider operations."""

from typing import Any
from urllib.parse import quote, urlencode

from action_toolkit.io_events.base import IoEventsResource, invalid_response, require
from action_toolkit.io_events.constants import PROVIDERS_KEY
from action_toolkit.io_events.messages import PROVIDER_MESSAGES
from action_toolkit.io_events.models import ProviderInput


class ProviderManager(IoEventsResource):
    """List, get, create and delete event providers.

    Every failure is raised as ApiError with the provider wording.
    """

    messages = PROVIDER_MESSAGES
    items_key = PROVIDERS_KEY

    def list(
        self,
        provider_metadata_id: str | None = None,
        instance_id: str | None = None,
        provider_metadata_ids: list[str] | None = None,
        eventmetadata: bool | None = None,
    ) -> list[dict[str, Any]]:
        """List every provider entitled to the consumer organization.

        Args:
            provider_metadata_id: Filter by provider metadata ID.
            instance_id: Filter by instance ID.
            provider_metadata_ids: Filter by several provider metadata IDs.
            eventmetadata: Include each provider's event metadata.

        Returns:
            Providers from all pages.

        Raises:
            ApiError: On invalid filters or any request failure.
        """
        try:
            if provider_metadata_id and provider_metadata_ids:
                msg = "Cannot specify both providerMetadataId and providerMetadataIds"
                raise ValueError(msg)

            query: list[tuple[str, str]] = []
            if provider_metadata_id:
                query.append(("providerMetadataId", provider_metadata_id))
            if instance_id:
                query.append(("instanceId", instance_id))
            for metadata_id in provider_metadata_ids or []:
                query.append(("providerMetadataIds", metadata_id))
            if eventmetadata is not None:
                query.append(("eventmetadata", str(eventmetadata).lower()))

            url = f"{self._base_url}/events/{self._credentials.consumer_id}/providers"
            if query:
                url = f"{url}?{urlencode(query)}"

            return self._fetcher.fetch_all(url, self._headers())
        except Exception as e:  # noqa: BLE001
            self._normalizer.raise_api_error(e)

    def get(self, provider_id: str, eventmetadata: bool | None = None) -> dict[str, Any]:
        """Fetch one provider by ID.

        Raises:
            ApiError: On a blank ID, a malformed response or a request failure.
        """
        try:
            provider_id = require(provider_id, "providerId")
            url = f"{self._base_url}/events/providers/{quote(provider_id, safe='')}"
            if eventmetadata is not None:
                url = f"{url}?{urlencode({'eventmetadata': str(eventmetadata).lower()})}"

            response = self._rest_client.get(url, self._headers())
            if not isinstance(response, dict):
                msg = "Invalid response format: Expected provider object"
                raise invalid_response(msg)
            return response
        except Exception as e:  # noqa: BLE001
            self._normalizer.raise_api_error(e)

    def create(self, provider: ProviderInput) -> dict[str, Any]:
        """Create a provider in the workspace.

        A 409 carrying ``x-conflicting-id`` is raised as CONFLICT_ERROR.

        Returns:
            The created provider.

        Raises:
            ApiError: On invalid input, a response without ``id`` or a
                request failure.
        """
        try:
            require(provider.label, "label")
            response = self._rest_client.post(
                self._workspace_url("providers"),
                self._headers(with_body=True),
                provider.model_dump(exclude_none=True),
            )
            if not isinstance(response, dict):
                msg = "Invalid response format: Expected provider object"
                raise invalid_response(msg)
            if not response.get("id"):
                msg = "Invalid response format: Missing provider id"
                raise invalid_response(msg)
        except Exception as e:  # noqa: BLE001
            self._normalizer.raise_api_error(e)

        self._log.info("provider_created", provider_id=response["id"])
        return response

    def delete(self, provider_id: str) -> None:
        """Delete a provider.

        Raises:
            ApiError: On a blank ID or a request failure.
        """
        try:
            provider_id = require(provider_id, "providerId")
            self._rest_client.delete(
                self._workspace_url("providers", provider_id), self._headers()
            )
        except Exception as e:  # noqa: BLE001
            self._normalizer.raise_api_error(e)

        self._log.info("provider_deleted", provider_id=provider_id)
