import secrets
import threading
from typing import Optional

from src.shortlinks.core.config import logger


class SessionIdentity:
    """
    Binds opaque session tokens to account ids.

    Sessions have no expiry; they live until ``end_session`` is called.
    """

    def __init__(self):
        self._sessions: dict[str, str] = {}
        self._lock = threading.Lock()

    def start_session(self, account_id: str) -> str:
        token = secrets.token_urlsafe(32)
        with self._lock:
            self._sessions[token] = account_id
        logger.info(f"Session started for account {account_id}")
        return token

    def resolve(self, token: Optional[str]) -> Optional[str]:
        """Return the bound account id, or None for unknown/ended tokens."""
        if not token:
            return None
        with self._lock:
            return self._sessions.get(token)

    def end_session(self, token: Optional[str]):
        """Invalidate a token. Unknown or already-ended tokens are ignored."""
        if not token:
            return
        with self._lock:
            account_id = self._sessions.pop(token, None)
        if account_id is not None:
            logger.info(f"Session ended for account {account_id}")
