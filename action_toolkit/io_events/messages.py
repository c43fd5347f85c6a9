"""Per-resource wording used when normalizing I/O Events API failures."""

from action_toolkit.errors.normalizer import StatusMessages


PROVIDER_MESSAGES = StatusMessages(
    resource_label="Provider",
    bad_request="API Error: HTTP 400",
    unauthorized="Unauthorized: Invalid or expired access token",
    forbidden="Forbidden: Insufficient permissions or invalid API key",
    not_found=(
        "Not Found: Provider associated with the consumerOrgId, "
        "providerMetadataId or instanceID does not exist"
    ),
    conflict="Conflict: Provider already exists",
    internal_error="Internal Server Error: Adobe I/O Events service is temporarily unavailable",
    timeout="Request timeout: Adobe I/O Events API did not respond in time",
)

EVENT_METADATA_MESSAGES = StatusMessages(
    resource_label="Event metadata",
    bad_request="Invalid request parameters for listing event metadata",
    unauthorized="Authentication failed. Please check your access token",
    forbidden="Access forbidden. You do not have permission to access event metadata",
    not_found="Provider not found or no event metadata available",
    conflict="Event metadata with this event code already exists",
    internal_error="Internal server error occurred while listing event metadata",
    timeout="Request timeout while listing event metadata",
    default="Unexpected error occurred: HTTP {status_code}",
)

REGISTRATION_MESSAGES = StatusMessages(
    resource_label="Registration",
    bad_request="Bad request. Please check your input parameters",
    unauthorized="Unauthorized. Please check your access token",
    forbidden="Forbidden. You do not have permission to access registrations",
    not_found=(
        "Registrations not found. The specified workspace may not exist "
        "or have no registrations"
    ),
    conflict="Conflict: Registration with this name already exists",
    internal_error="Internal server error. Please try again later",
    timeout="Request timeout while accessing registrations",
    default="API request failed with status {status_code}",
)
