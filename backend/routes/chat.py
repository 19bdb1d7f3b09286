import logging
from typing import Optional

import httpx
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from config import Settings, get_settings
from dependencies import get_http_client
from errors import InvalidInput
from providers.client import proxy_chat
from providers.config import ChatProvider
from providers.fallback import MockResponder, mock_reply

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])


# ---------- Request schema ----------

class ChatRequest(BaseModel):
    user: Optional[str] = None
    message: Optional[str] = None


# ---------- Endpoint ----------

@router.post("/chat")
async def chat(
    body: ChatRequest,
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    """
    Proxies the message to the configured chat provider, or answers from the
    local keyword responder when none is configured.
    """
    if not body.message:
        raise InvalidInput("message required")

    logger.info("Chat request from %r via %s", body.user, settings.chat.mode.value)

    if settings.chat.mode is ChatProvider.GEMINI:
        return await proxy_chat(client, settings.chat, body.message)

    # Read on every request so edits to mock_data.json apply without a restart.
    responder = MockResponder.from_file(settings.mock_data_path)
    return mock_reply(responder.match(body.message))
