"""Data models for TTL store entries."""

from pydantic import BaseModel, ConfigDict, Field


class StoredValue(BaseModel):
    """A value read back from a TTL store."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    value: str = Field(description="Stored string value")
    expires_at: float = Field(description="Unix time after which the entry is gone")
