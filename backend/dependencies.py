"""
FastAPI dependencies.

Tests override these through app.dependency_overrides: get_settings to point
at a temp directory or fake providers, get_http_client to plug in a mock
transport.
"""

from pathlib import Path

import httpx
from fastapi import Depends, Request

from config import Settings, get_settings
from store import JsonFileBackend, SessionStore

# One store (and one lock) per sessions file.
_stores: dict[Path, SessionStore] = {}


def get_store(settings: Settings = Depends(get_settings)) -> SessionStore:
    store = _stores.get(settings.sessions_file)
    if store is None:
        store = SessionStore(JsonFileBackend(settings.sessions_file))
        _stores[settings.sessions_file] = store
    return store


def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client
