from typing import Optional

import httpx
from fastapi import APIRouter, Depends, File, UploadFile

from config import Settings, get_settings
from dependencies import get_http_client
from errors import InvalidInput
from providers.speech import proxy_audio

router = APIRouter(prefix="/api", tags=["whisper"])


@router.post("/whisper")
async def whisper(
    audio: Optional[UploadFile] = File(default=None),
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    """
    Accepts multipart/form-data with an `audio` file field and relays it to the
    STT provider. Missing audio is a 400 whether or not a provider is set up;
    no provider is a 501.
    """
    audio_bytes = await audio.read() if audio is not None else b""
    if not audio_bytes:
        raise InvalidInput("no audio attached")

    return await proxy_audio(client, settings.speech, audio_bytes)
