"""
Provider configuration.

Both external providers are selected by what the operator put in the
environment (or backend/.env):

  Chat (Gemini-style endpoint):
    GEMINI_API_URL + (GEMINI_BEARER_TOKEN or GEMINI_API_KEY)  -> gemini
    anything less                                             -> mock
    LLM_PROVIDER=mock forces the local keyword responder.

  Speech-to-text (Whisper-style endpoint):
    WHISPER_API_URL + (WHISPER_BEARER_TOKEN or WHISPER_API_KEY) -> whisper
    anything less                                               -> none (501)

The mode is resolved once when settings are built; routes only read it.
"""

import json
from enum import Enum
from typing import Any, Mapping, Optional

from pydantic import BaseModel


class ChatProvider(str, Enum):
    GEMINI = "gemini"
    MOCK = "mock"


class SpeechProvider(str, Enum):
    WHISPER = "whisper"
    NONE = "none"


class ProviderConfig(BaseModel):
    url: Optional[str] = None
    bearer_token: Optional[str] = None
    api_key: Optional[str] = None

    @property
    def has_credentials(self) -> bool:
        return bool(self.bearer_token or self.api_key)

    def auth_headers(self) -> dict[str, str]:
        """Bearer token wins over API key; neither set means no auth header."""
        if self.bearer_token:
            return {"Authorization": f"Bearer {self.bearer_token}"}
        if self.api_key:
            return {"x-api-key": self.api_key}
        return {}


class ChatProviderConfig(ProviderConfig):
    mode: ChatProvider = ChatProvider.MOCK
    payload_template: Optional[Any] = None   # parsed GEMINI_API_PAYLOAD_TEMPLATE


class SpeechProviderConfig(ProviderConfig):
    mode: SpeechProvider = SpeechProvider.NONE


def _env(env: Mapping[str, str], name: str) -> Optional[str]:
    # Empty strings count as unset.
    value = env.get(name)
    return value or None


def resolve_chat_config(env: Mapping[str, str]) -> ChatProviderConfig:
    """
    Build the chat provider config from environment variables.

    Raises ValueError if GEMINI_API_PAYLOAD_TEMPLATE is set but is not valid
    JSON, so a broken template stops the server at startup instead of failing
    every chat request.
    """
    template_text = _env(env, "GEMINI_API_PAYLOAD_TEMPLATE")
    template = None
    if template_text:
        try:
            template = json.loads(template_text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"GEMINI_API_PAYLOAD_TEMPLATE is not valid JSON: {exc}") from exc

    config = ChatProviderConfig(
        url=_env(env, "GEMINI_API_URL"),
        bearer_token=_env(env, "GEMINI_BEARER_TOKEN"),
        api_key=_env(env, "GEMINI_API_KEY"),
        payload_template=template,
    )

    forced_mock = (_env(env, "LLM_PROVIDER") or "").strip().lower() == "mock"
    if config.url and config.has_credentials and not forced_mock:
        config.mode = ChatProvider.GEMINI
    return config


def resolve_speech_config(env: Mapping[str, str]) -> SpeechProviderConfig:
    config = SpeechProviderConfig(
        url=_env(env, "WHISPER_API_URL"),
        bearer_token=_env(env, "WHISPER_BEARER_TOKEN"),
        api_key=_env(env, "WHISPER_API_KEY"),
    )
    if config.url and config.has_credentials:
        config.mode = SpeechProvider.WHISPER
    return config
