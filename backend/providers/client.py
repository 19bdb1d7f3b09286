"""
Chat provider proxy.

Forwards the user's message to the operator-configured GEMINI_API_URL and
relays whatever JSON comes back, untouched, under `providerResponse`. The
endpoint is deliberately generic: point it at whatever URL your account
expects and shape the request with GEMINI_API_PAYLOAD_TEMPLATE.

Payload:
  - no template      -> {"prompt": <message>}
  - template         -> the template, with "{{message}}" replaced inside any
                        string value; a template without the placeholder is
                        sent as-is

Failure handling:
  - network errors and non-JSON bodies raise ProviderError (HTTP 500)
  - upstream status codes are not interpreted; a JSON error body is relayed
  - no retry, no timeout
"""

import logging
from typing import Any

import httpx

from errors import ProviderError
from providers.config import ChatProviderConfig

logger = logging.getLogger(__name__)

MESSAGE_PLACEHOLDER = "{{message}}"


def _fill_template(node: Any, message: str) -> Any:
    if isinstance(node, str):
        return node.replace(MESSAGE_PLACEHOLDER, message)
    if isinstance(node, dict):
        return {key: _fill_template(value, message) for key, value in node.items()}
    if isinstance(node, list):
        return [_fill_template(value, message) for value in node]
    return node


def build_payload(template: Any, message: str) -> Any:
    if template is None:
        return {"prompt": message}
    return _fill_template(template, message)


async def post_to_provider(client: httpx.AsyncClient, url: str, headers: dict[str, str], **kwargs) -> Any:
    """Single POST to an external provider. Returns the parsed JSON body."""
    try:
        response = await client.post(url, headers=headers, **kwargs)
    except httpx.HTTPError as exc:
        raise ProviderError(f"request to {url} failed: {exc!r}") from exc

    logger.info("Provider %s answered %s", url, response.status_code)

    try:
        return response.json()
    except ValueError as exc:
        raise ProviderError(f"{url} returned a non-JSON body (status {response.status_code})") from exc


async def proxy_chat(client: httpx.AsyncClient, config: ChatProviderConfig, message: str) -> dict[str, Any]:
    headers = {"Content-Type": "application/json", **config.auth_headers()}
    payload = build_payload(config.payload_template, message)

    provider_response = await post_to_provider(client, config.url, headers, json=payload)
    return {"provider": "gemini", "providerResponse": provider_response}
