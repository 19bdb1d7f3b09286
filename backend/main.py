from dotenv import load_dotenv
load_dotenv()

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from config import Settings, get_settings
from errors import NotFound, register_exception_handlers
from routes import chat, session, whisper

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger("serene")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # No timeout: a hung provider call holds only its own request.
    app.state.http_client = httpx.AsyncClient(timeout=None)
    logger.info(
        "Chat provider: %s, speech provider: %s",
        settings.chat.mode.value,
        settings.speech.mode.value,
    )
    yield
    await app.state.http_client.aclose()


app = FastAPI(title="Serene API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(chat.router)
app.include_router(whisper.router)
app.include_router(session.router)


@app.get("/")
def index(settings: Settings = Depends(get_settings)):
    page = settings.static_dir / "index.html"
    if not page.is_file():
        raise NotFound("index.html not found")
    return FileResponse(page)


@app.get("/health")
def health(settings: Settings = Depends(get_settings)):
    return {
        "status": "ok",
        "service": "serene",
        "chat_provider": settings.chat.mode.value,
        "speech_provider": settings.speech.mode.value,
    }


# Mounted last: it catches every path the routes above don't.
if settings.static_dir.is_dir():
    app.mount("/", StaticFiles(directory=settings.static_dir), name="static")


if __name__ == "__main__":
    import uvicorn

    logger.info("Server running on http://localhost:%s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)
