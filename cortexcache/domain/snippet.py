"""
Snippet Domain Model

Defines Snippet related Data Transfer Objects (DTOs).
"""

from dataclasses import dataclass, field
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cortexcache.common.time import ensure_utc


class SnippetCreate(BaseModel):
    """Create Snippet Model"""

    # Title
    title: str = Field(..., min_length=1, max_length=100, description="Title")
    # Snippet body
    content: str = Field(..., min_length=1, description="Content")
    # Days until the snippet expires: 1, 7 or 365
    expires_days: int = Field(..., ge=1, description="Expiry in days")


class SnippetModel(BaseModel):
    """Snippet Complete Model"""

    id: int = Field(..., description="Snippet ID")
    title: str = Field(..., description="Title")
    content: str = Field(..., description="Content")
    created: datetime = Field(..., description="Creation Time (UTC)")
    expires: datetime = Field(..., description="Expiration Time (UTC)")

    model_config = ConfigDict(from_attributes=True)

    @field_validator("created", "expires", mode="after")
    @classmethod
    def _ensure_utc(cls, v: datetime) -> datetime:
        return ensure_utc(v)


@dataclass
class SnippetForm:
    """Values carried back into the create form, with any field errors."""

    title: str = ""
    content: str = ""
    expires: int = 365
    field_errors: dict[str, str] = field(default_factory=dict)

    @property
    def valid(self) -> bool:
        return not self.field_errors
