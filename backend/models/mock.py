from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class MockEntry(BaseModel):
    # Extra fields in mock_data.json are kept and relayed back as `item`.
    model_config = ConfigDict(extra="allow")

    keywords: list[str] = Field(default_factory=list)
    response: str


class MatchResult(BaseModel):
    response: str
    item: Optional[MockEntry] = None    # None when the generic fallback was used
