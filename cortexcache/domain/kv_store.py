"""
Key-Value Record

Backing record for server-side sessions.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cortexcache.common.time import ensure_utc


class KeyValueModel(BaseModel):
    """Stored value with its UTC timestamps; `expires_at` is None for keys that never expire."""

    key: str = Field(..., description="Key")
    value: str = Field(..., description="Serialized value")
    expires_at: Optional[datetime] = Field(None, description="Expiration Time (UTC)")
    created_at: datetime = Field(..., description="Creation Time (UTC)")
    updated_at: datetime = Field(..., description="Update Time (UTC)")

    model_config = ConfigDict(from_attributes=True)

    @field_validator("expires_at", "created_at", "updated_at", mode="after")
    @classmethod
    def _ensure_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_utc(v)
