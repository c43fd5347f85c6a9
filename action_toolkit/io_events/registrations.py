"""Event registration operations."""

from typing import Any
from urllib.parse import urlencode

from action_toolkit.io_events.base import (
    IoEventsResource,
    invalid_response,
    validation_error,
)
from action_toolkit.io_events.constants import (
    DELIVERY_TYPES,
    MAX_FIELD_LENGTH,
    MAX_REGISTRATION_DESCRIPTION_LENGTH,
    MAX_WEBHOOK_URL_LENGTH,
    MIN_REGISTRATION_NAME_LENGTH,
    REGISTRATIONS_KEY,
)
from action_toolkit.io_events.messages import REGISTRATION_MESSAGES
from action_toolkit.io_events.models import RegistrationInput


def validate_registration(data: RegistrationInput) -> None:
    """Check registration input before sending it.

    Raises:
        ApiError: 400 VALIDATION_ERROR describing the first invalid field.
    """
    client_id = data.client_id.strip()
    if not client_id:
        raise validation_error("Client ID is required")
    if not MIN_REGISTRATION_NAME_LENGTH <= len(client_id) <= MAX_FIELD_LENGTH:
        raise validation_error("Client ID must be between 3 and 255 characters")

    name = data.name.strip()
    if not name:
        raise validation_error("Registration name is required")
    if not MIN_REGISTRATION_NAME_LENGTH <= len(name) <= MAX_FIELD_LENGTH:
        raise validation_error("Registration name must be between 3 and 255 characters")

    if data.description and len(data.description) > MAX_REGISTRATION_DESCRIPTION_LENGTH:
        raise validation_error("Description must not exceed 5000 characters")
    if data.webhook_url and len(data.webhook_url) > MAX_WEBHOOK_URL_LENGTH:
        raise validation_error("Webhook URL must not exceed 4000 characters")

    if not data.events_of_interest:
        raise validation_error("At least one event of interest is required")
    for index, event in enumerate(data.events_of_interest):
        if not event.provider_id.strip():
            raise validation_error(f"Provider ID is required for event at index {index}")
        if not event.event_code.strip():
            raise validation_error(f"Event code is required for event at index {index}")

    if not data.delivery_type.strip():
        raise validation_error("Delivery type is required")
    if data.delivery_type not in DELIVERY_TYPES:
        raise validation_error(f"Delivery type must be one of: {', '.join(DELIVERY_TYPES)}")

    if data.runtime_action and len(data.runtime_action) > MAX_FIELD_LENGTH:
        raise validation_error("Runtime action must not exceed 255 characters")


class RegistrationManager(IoEventsResource):
    """List, get, create and delete event registrations in a workspace."""

    messages = REGISTRATION_MESSAGES
    items_key = REGISTRATIONS_KEY

    def list(self, **query_params: Any) -> list[dict[str, Any]]:
        """List every registration in the workspace.

        Args:
            **query_params: Extra query parameters; None values are dropped.

        Raises:
            ApiError: On any request failure.
        """
        try:
            url = self._workspace_url(REGISTRATIONS_KEY)
            query = {
                key: str(value).lower() if isinstance(value, bool) else str(value)
                for key, value in query_params.items()
                if value is not None
            }
            if query:
                url = f"{url}?{urlencode(query)}"
            return self._fetcher.fetch_all(url, self._headers())
        except Exception as e:  # noqa: BLE001
            self._normalizer.raise_api_error(e)

    def get(self, registration_id: str) -> dict[str, Any]:
        """Fetch one registration by ID.

        Raises:
            ApiError: On a blank ID, a malformed response or a request failure.
        """
        try:
            if not registration_id or not registration_id.strip():
                raise validation_error("Registration ID is required")
            response = self._rest_client.get(
                self._workspace_url(REGISTRATIONS_KEY, registration_id.strip()),
                self._headers(),
            )
            if not isinstance(response, dict):
                raise invalid_response("Invalid response format: Expected object")
            return response
        except Exception as e:  # noqa: BLE001
            self._normalizer.raise_api_error(e)

    def create(self, data: RegistrationInput) -> dict[str, Any]:
        """Create a registration.

        Raises:
            ApiError: On invalid input (400, VALIDATION_ERROR), a malformed
                response or a request failure.
        """
        try:
            validate_registration(data)
            response = self._rest_client.post(
                self._workspace_url(REGISTRATIONS_KEY),
                self._headers(with_body=True),
                data.model_dump(exclude_none=True),
            )
            if not isinstance(response, dict):
                raise invalid_response("Invalid response format: Expected object")
        except Exception as e:  # noqa: BLE001
            self._normalizer.raise_api_error(e)

        self._log.info("registration_created", registration_id=response.get("registration_id"))
        return response

    def delete(self, registration_id: str) -> None:
        """Delete a registration.

        Raises:
            ApiError: On a blank ID or a request failure.
        """
        try:
            if not registration_id or not registration_id.strip():
                raise validation_error("Registration ID is required")
            self._rest_client.delete(
                self._workspace_url(REGISTRATIONS_KEY, registration_id.strip()),
                self._headers(),
            )
        except Exception as e:  # noqa: BLE001
            self._normalizer.raise_api_error(e)

        self._log.info("registration_deleted", registration_id=registration_id)
