from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TokenRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    user: str
    created_at: str = Field(alias="createdAt")     # ISO-8601, UTC


class SessionDocument(BaseModel):
    """The whole persisted store: report history per user plus every issued token."""

    # Unknown keys survive a load/save cycle.
    model_config = ConfigDict(extra="allow")

    users: dict[str, list[Any]] = Field(default_factory=dict)      # most recent report first
    tokens: dict[str, TokenRecord] = Field(default_factory=dict)

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True)
