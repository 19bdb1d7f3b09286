"""
Local keyword responder.

Used for /api/chat whenever no chat provider is configured. Entries come from
data/mock_data.json, a list of {"keywords": [...], "response": "..."} objects.

match() lower-cases the message and walks entries in file order, and each
entry's keywords in order; the first keyword found as a substring wins. So
both entry order and keyword order act as priority. No hit returns
FALLBACK_RESPONSE.

A missing data file means no entries, never an error.
"""

import json
import logging
from pathlib import Path
from typing import Iterable

from errors import CorruptData
from models.mock import MatchResult, MockEntry

logger = logging.getLogger(__name__)

FALLBACK_RESPONSE = (
    "I hear you. Can you tell me a bit more about how you feel? "
    "If you'd like, I can suggest breathing exercises or a simple yoga pose."
)


def load_entries(path: Path) -> list[MockEntry]:
    path = Path(path)
    if not path.exists():
        logger.debug("No mock data at %s, using fallback only", path)
        return []

    try:
        with open(path, encoding="utf-8") as f:
            raw = json.load(f)
        return [MockEntry.model_validate(entry) for entry in raw]
    except (ValueError, TypeError) as exc:
        raise CorruptData(f"cannot read mock data {path}: {exc}") from exc


class MockResponder:
    def __init__(self, entries: Iterable[MockEntry]):
        self.entries = list(entries)

    @classmethod
    def from_file(cls, path: Path) -> "MockResponder":
        return cls(load_entries(path))

    def match(self, message: str) -> MatchResult:
        text = message.lower()
        for entry in self.entries:
            for keyword in entry.keywords:
                # Keywords are lower-cased too, so "Yoga" in the data file still matches.
                if keyword.lower() in text:
                    return MatchResult(response=entry.response, item=entry)
        return MatchResult(response=FALLBACK_RESPONSE)


def mock_reply(result: MatchResult) -> dict:
    """Shape a match as the /api/chat response body."""
    body = {"provider": "mock", "response": result.response}
    if result.item is not None:
        body["item"] = result.item.model_dump()
    return body
