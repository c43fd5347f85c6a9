"""Input models for I/O Events resources.

Field constraints are checked by the managers before any request is sent,
so these models only describe shape.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class WorkspaceCredentials(BaseModel):
    """Identifies the workspace and the caller for every request."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    client_id: str = Field(description="Developer Console client ID, sent as x-api-key")
    consumer_id: str = Field(description="Project organization ID")
    project_id: str
    workspace_id: str
    access_token: str = Field(description="Bearer token")


class ProviderInput(BaseModel):
    """Fields for creating an event provider."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    label: str
    description: str | None = None
    docs_url: str | None = None
    provider_metadata: str | None = Field(
        default=None, description="Defaults to 3rd_party_custom_events on the server"
    )
    instance_id: str | None = None
    data_residency_region: str | None = Field(
        default=None, description="va6 (US) or irl1 (Europe); server default va6"
    )


class EventMetadataInput(BaseModel):
    """Fields for creating event metadata under a provider.

    ``sample_event_template`` is sent base64-encoded.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    description: str
    label: str
    event_code: str
    sample_event_template: Any = None


class EventOfInterest(BaseModel):
    """A provider/event-code pair a registration subscribes to."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    provider_id: str
    event_code: str


class RegistrationInput(BaseModel):
    """Fields for creating an event registration."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    client_id: str
    name: str
    description: str | None = None
    webhook_url: str | None = None
    events_of_interest: list[EventOfInterest] = Field(default_factory=list)
    delivery_type: str
    runtime_action: str | None = None
    enabled: bool | None = None
