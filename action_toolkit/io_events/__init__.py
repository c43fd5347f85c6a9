"""Managers for I/O Events providers, event metadata and registrations.

All operations talk to the HAL+JSON API through RestClient, follow
pagination links for list calls, and raise ApiError for every failure.
"""

from action_toolkit.io_events.event_metadata import EventMetadataManager
from action_toolkit.io_events.models import (
    EventMetadataInput,
    EventOfInterest,
    ProviderInput,
    RegistrationInput,
    WorkspaceCredentials,
)
from action_toolkit.io_events.providers import ProviderManager
from action_toolkit.io_events.registrations import RegistrationManager


__all__ = [
    "EventMetadataInput",
    "EventMetadataManager",
    "EventOfInterest",
    "ProviderInput",
    "ProviderManager",
    "RegistrationInput",
    "RegistrationManager",
    "WorkspaceCredentials",
]
