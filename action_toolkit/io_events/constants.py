"""Constants for the I/O Events API."""

import re
from typing import Final


BASE_URL: Final = "https://api.adobe.io"

PROVIDERS_KEY: Final = "providers"
EVENT_METADATA_KEY: Final = "eventmetadata"
REGISTRATIONS_KEY: Final = "registrations"

# Event metadata input limits
MAX_FIELD_LENGTH = 255
MAX_SAMPLE_TEMPLATE_BASE64_LENGTH = 87382
TEXT_FIELD_PATTERN: Final = re.compile(r"^[\w\s\-_.(),:''`?#!]+$")
EVENT_CODE_PATTERN: Final = re.compile(r"^[\w\-_.]+$")

# Registration input limits
MIN_REGISTRATION_NAME_LENGTH = 3
MAX_REGISTRATION_DESCRIPTION_LENGTH = 5000
MAX_WEBHOOK_URL_LENGTH = 4000
DELIVERY_TYPES: Final[tuple[str, ...]] = (
    "webhook",
    "webhook_batch",
    "journal",
    "aws_eventbridge",
)
