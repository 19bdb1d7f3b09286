"""
Tests for the local keyword responder used when no chat provider is configured.
"""

import json

import pytest

from errors import CorruptData
from models.mock import MockEntry
from providers.fallback import FALLBACK_RESPONSE, MockResponder, load_entries, mock_reply


def _responder(*entries) -> MockResponder:
    return MockResponder([MockEntry(**e) for e in entries])


class TestMatch:

    def setup_method(self):
        self.responder = _responder(
            {"keywords": ["anxious", "panic"], "response": "breathe"},
            {"keywords": ["stress", "anxious"], "response": "child's pose"},
            {"keywords": ["sleep"], "response": "legs up the wall"},
        )

    def test_keyword_substring_matches(self):
        result = self.responder.match("I couldn't sleep at all last night")
        assert result.response == "legs up the wall"
        assert result.item.keywords == ["sleep"]

    def test_match_is_case_insensitive(self):
        assert self.responder.match("PANIC attack again").response == "breathe"

    def test_uppercase_keyword_still_matches(self):
        responder = _responder({"keywords": ["Yoga"], "response": "namaste"})
        assert responder.match("any yoga tips?").response == "namaste"

    def test_first_entry_wins_on_overlap(self):
        # "anxious" appears in both entries; file order decides.
        assert self.responder.match("feeling anxious and stressed").response == "breathe"

    def test_entry_order_beats_position_in_message(self):
        responder = _responder(
            {"keywords": ["zzz", "tired"], "response": "rest"},
            {"keywords": ["calm"], "response": "stay calm"},
        )
        assert responder.match("calm but tired").response == "rest"

    def test_substring_inside_word(self):
        assert self.responder.match("so stressful").response == "child's pose"

    def test_no_match_returns_fallback(self):
        result = self.responder.match("what's the weather like?")
        assert result.response == FALLBACK_RESPONSE
        assert result.item is None

    def test_entry_without_keywords_never_matches(self):
        responder = MockResponder([MockEntry(response="orphan")])
        assert responder.match("anything").response == FALLBACK_RESPONSE


class TestLoadEntries:

    def test_missing_file_is_empty(self, tmp_path):
        assert load_entries(tmp_path / "nope.json") == []
        assert MockResponder.from_file(tmp_path / "nope.json").match("panic").response == FALLBACK_RESPONSE

    def test_extra_fields_are_kept(self, tmp_path):
        path = tmp_path / "mock.json"
        path.write_text(json.dumps([{"keywords": ["tea"], "response": "chamomile", "tag": "sleep"}]))

        result = MockResponder.from_file(path).match("Tea time")
        assert mock_reply(result) == {
            "provider": "mock",
            "response": "chamomile",
            "item": {"keywords": ["tea"], "response": "chamomile", "tag": "sleep"},
        }


def test_fallback_reply_has_no_item():
    reply = mock_reply(_responder().match("hello"))
    assert reply == {"provider": "mock", "response": FALLBACK_RESPONSE}


def test_malformed_data_file_raises_corrupt_data(tmp_path):
    path = tmp_path / "mock.json"
    path.write_text("[{")
    with pytest.raises(CorruptData):
        load_entries(path)
