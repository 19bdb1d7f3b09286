from models.mock import MatchResult, MockEntry
from models.session import SessionDocument, TokenRecord

__all__ = ["MatchResult", "MockEntry", "SessionDocument", "TokenRecord"]
