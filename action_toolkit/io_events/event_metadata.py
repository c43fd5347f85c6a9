"""Event metadata operations for a provider."""

import base64
import json
from typing import Any

from action_toolkit.io_events.base import (
    IoEventsResource,
    invalid_response,
    require,
    validation_error,
)
from action_toolkit.io_events.constants import (
    EVENT_CODE_PATTERN,
    EVENT_METADATA_KEY,
    MAX_FIELD_LENGTH,
    MAX_SAMPLE_TEMPLATE_BASE64_LENGTH,
    TEXT_FIELD_PATTERN,
)
from action_toolkit.io_events.messages import EVENT_METADATA_MESSAGES
from action_toolkit.io_events.models import EventMetadataInput


def encode_sample_template(template: Any) -> str:
    """Return the base64 form of a sample event template.

    Raises:
        ValueError: If the template is not a JSON object or is too large.
    """
    if not isinstance(template, dict):
        msg = "sample_event_template must be a valid JSON object"
        raise ValueError(msg)

    try:
        serialized = json.dumps(template, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        msg = "sample_event_template must be a valid JSON object"
        raise ValueError(msg) from e

    encoded = base64.b64encode(serialized.encode("ascii")).decode("ascii")
    if len(encoded) > MAX_SAMPLE_TEMPLATE_BASE64_LENGTH:
        msg = "sample_event_template JSON object is too large when base64 encoded"
        raise ValueError(msg)
    return encoded


def validate_event_metadata(data: EventMetadataInput) -> None:
    """Check event metadata input before sending it.

    Raises:
        ValueError: Describing the first invalid field.
    """
    fields = {
        "description": require(data.description, "description"),
        "label": require(data.label, "label"),
        "event_code": require(data.event_code, "event_code"),
    }

    for name, value in fields.items():
        if len(value) > MAX_FIELD_LENGTH:
            msg = f"{name} cannot exceed {MAX_FIELD_LENGTH} characters"
            raise ValueError(msg)

    for name in ("description", "label"):
        if not TEXT_FIELD_PATTERN.match(fields[name]):
            msg = f"{name} contains invalid characters"
            raise ValueError(msg)

    if not EVENT_CODE_PATTERN.match(fields["event_code"]):
        msg = "event_code contains invalid characters"
        raise ValueError(msg)

    if data.sample_event_template is not None:
        encode_sample_template(data.sample_event_template)


class EventMetadataManager(IoEventsResource):
    """List, get, create and delete event metadata under a provider."""

    messages = EVENT_METADATA_MESSAGES
    items_key = EVENT_METADATA_KEY

    def list(self, provider_id: str) -> list[dict[str, Any]]:
        """List every event metadata entry of a provider.

        Raises:
            ApiError: On a blank provider ID or any request failure.
        """
        try:
            provider_id = require(provider_id, "providerId")
            url = self._workspace_url("providers", provider_id, EVENT_METADATA_KEY)
            return self._fetcher.fetch_all(url, self._headers())
        except Exception as e:  # noqa: BLE001
            self._normalizer.raise_api_error(e)

    def get(self, provider_id: str, event_code: str) -> dict[str, Any]:
        """Fetch one event metadata entry.

        Raises:
            ApiError: On blank arguments, a malformed response or a request failure.
        """
        try:
            provider_id = require(provider_id, "providerId")
            event_code = require(event_code, "eventCode")
            url = self._workspace_url(
                "providers", provider_id, EVENT_METADATA_KEY, event_code
            )
            response = self._rest_client.get(url, self._headers())
            if not isinstance(response, dict):
                raise invalid_response("Invalid response format: Expected object")
            return response
        except Exception as e:  # noqa: BLE001
            self._normalizer.raise_api_error(e)

    def create(self, provider_id: str, data: EventMetadataInput) -> dict[str, Any]:
        """Create event metadata under a provider.

        The sample event template is sent base64-encoded.

        Raises:
            ApiError: On invalid input (400, VALIDATION_ERROR), a malformed
                response or a request failure.
        """
        try:
            provider_id = require(provider_id, "providerId")
            validate_event_metadata(data)

            payload = data.model_dump(exclude={"sample_event_template"})
            if data.sample_event_template is not None:
                payload["sample_event_template"] = encode_sample_template(
                    data.sample_event_template
                )

            response = self._rest_client.post(
                self._workspace_url("providers", provider_id, EVENT_METADATA_KEY),
                self._headers(with_body=True),
                payload,
            )
            if not isinstance(response, dict):
                raise invalid_response("Invalid response format: Expected object")
        except Exception as e:  # noqa: BLE001
            self._normalizer.raise_api_error(e)

        self._log.info(
            "event_metadata_created", provider_id=provider_id, event_code=data.event_code
        )
        return response

    def delete(self, provider_id: str, event_code: str | None = None) -> None:
        """Delete one event metadata entry, or all of them when ``event_code`` is None.

        Raises:
            ApiError: On blank arguments or a request failure.
        """
        try:
            provider_id = require(provider_id, "providerId")
            segments = ["providers", provider_id, EVENT_METADATA_KEY]
            if event_code is not None:
                if not event_code.strip():
                    raise validation_error("eventCode cannot be empty when provided")
                segments.append(event_code.strip())

            self._rest_client.delete(self._workspace_url(*segments), self._headers())
        except Exception as e:  # noqa: BLE001
            self._normalizer.raise_api_error(e)

        self._log.info("event_metadata_deleted", provider_id=provider_id, event_code=event_code)
