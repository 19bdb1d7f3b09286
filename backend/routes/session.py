from typing import Any, Optional

from fastapi import APIRouter, Depends, Header, Query
from pydantic import BaseModel

from dependencies import get_store
from store import SessionStore

router = APIRouter(prefix="/api", tags=["session"])


# ---------- Request / Response schemas ----------

class LoginRequest(BaseModel):
    user: Optional[str] = None


class LoginResponse(BaseModel):
    ok: bool = True
    token: str
    user: str


class SaveSessionRequest(BaseModel):
    token: Optional[str] = None
    report: Optional[Any] = None    # opaque; stored verbatim


class HistoryResponse(BaseModel):
    history: list[Any]


# ---------- Endpoints ----------
# Plain `def`: the store does blocking file I/O, so these run in the threadpool.

@router.post("/login", response_model=LoginResponse)
def login(body: LoginRequest, store: SessionStore = Depends(get_store)):
    """
    Passwordless login. Every call issues a new token for the user;
    earlier tokens keep working.
    """
    token = store.login(body.user)
    return LoginResponse(token=token, user=body.user)


@router.post("/session")
def save_session(body: SaveSessionRequest, store: SessionStore = Depends(get_store)):
    """Appends a session report to the history of the token's owner."""
    store.save_session(body.token, body.report)
    return {"ok": True}


@router.get("/history/{user}", response_model=HistoryResponse)
def get_history(
    user: str,
    token: Optional[str] = Query(default=None),
    x_session_token: Optional[str] = Header(default=None),
    store: SessionStore = Depends(get_store),
):
    """
    Returns the user's reports, newest first. The token (header
    x-session-token, or ?token=) is optional but must match the user if given.
    """
    history = store.get_history(user, x_session_token or token)
    return HistoryResponse(history=history)
