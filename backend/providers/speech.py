"""
Speech-to-text proxy.

Forwards raw audio bytes to WHISPER_API_URL as application/octet-stream and
relays the JSON result. When no STT endpoint is configured the caller gets
NotConfigured (HTTP 501), which tells the browser to fall back to its own
speech recognition.
"""

import logging
from typing import Any

import httpx

from errors import NotConfigured
from providers.client import post_to_provider
from providers.config import SpeechProvider, SpeechProviderConfig

logger = logging.getLogger(__name__)


async def proxy_audio(client: httpx.AsyncClient, config: SpeechProviderConfig, audio: bytes) -> dict[str, Any]:
    if config.mode is not SpeechProvider.WHISPER:
        raise NotConfigured("WHISPER_API not configured on server")

    headers = {**config.auth_headers(), "Content-Type": "application/octet-stream"}
    logger.info("Forwarding %d bytes of audio to STT provider", len(audio))

    provider_response = await post_to_provider(client, config.url, headers, content=audio)
    return {"ok": True, "provider": "whisper", "providerResponse": provider_response}
