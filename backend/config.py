"""
Application settings.

Everything is read from environment variables (main.py loads backend/.env
first via python-dotenv). Settings are built once and cached; routes receive
them through the get_settings dependency so tests can swap them out.

  PORT=3000  HOST=0.0.0.0  LOG_LEVEL=INFO
  STATIC_DIR, MOCK_DATA_PATH, SESSIONS_FILE   (default under backend/)
  CORS_ORIGINS=*                              (comma-separated)
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel, Field

from providers.config import (
    ChatProviderConfig,
    SpeechProviderConfig,
    resolve_chat_config,
    resolve_speech_config,
)

BACKEND_ROOT = Path(__file__).resolve().parent
DATA_DIR = BACKEND_ROOT / "data"


class Settings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    static_dir: Path = BACKEND_ROOT / "static"
    mock_data_path: Path = DATA_DIR / "mock_data.json"
    sessions_file: Path = DATA_DIR / "sessions.json"
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    chat: ChatProviderConfig = Field(default_factory=ChatProviderConfig)
    speech: SpeechProviderConfig = Field(default_factory=SpeechProviderConfig)

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        defaults = cls()

        origins = [o.strip() for o in env.get("CORS_ORIGINS", "").split(",") if o.strip()]

        return cls(
            host=env.get("HOST") or defaults.host,
            port=int(env.get("PORT") or defaults.port),
            log_level=(env.get("LOG_LEVEL") or defaults.log_level).upper(),
            static_dir=Path(env.get("STATIC_DIR") or defaults.static_dir),
            mock_data_path=Path(env.get("MOCK_DATA_PATH") or defaults.mock_data_path),
            sessions_file=Path(env.get("SESSIONS_FILE") or defaults.sessions_file),
            cors_origins=origins or defaults.cors_origins,
            chat=resolve_chat_config(env),
            speech=resolve_speech_config(env),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
