"""
Entry points used by the web layer.

Each handler takes the caller's session token as a plain value, resolves it
through SessionIdentity, and only then touches the stores. The web layer
never hands an account id to the registry directly.
"""

from typing import List, Optional, Tuple

from src.shortlinks.core.config import logger
from src.shortlinks.core.exceptions import (
    InvalidCredentials,
    NotAuthenticated,
    NotFound,
    NotOwner,
)
from src.shortlinks.db.session import Database
from src.shortlinks.schemas.url import URL, URLDetail
from src.shortlinks.schemas.user import Account
from src.shortlinks.services.credentials import CredentialStore
from src.shortlinks.services.sessions import SessionIdentity
from src.shortlinks.services.url_service import UrlRegistry
from src.shortlinks.services.visit_service import VisitTracker


class AccessControl:
    def __init__(
        self,
        credentials: CredentialStore,
        sessions: SessionIdentity,
        registry: UrlRegistry,
        tracker: VisitTracker,
    ):
        self.credentials = credentials
        self.sessions = sessions
        self.registry = registry
        self.tracker = tracker

    @classmethod
    def from_database(cls, database: Database) -> "AccessControl":
        return cls(
            credentials=CredentialStore(database),
            sessions=SessionIdentity(),
            registry=UrlRegistry(database),
            tracker=VisitTracker(database),
        )

    def handle_register(self, email: str, password: str) -> Tuple[Account, str]:
        """Create an account and log it in straight away."""
        account = self.credentials.register(email, password)
        return account, self.sessions.start_session(account.id)

    def handle_login(self, email: str, password: str) -> Tuple[Account, str]:
        try:
            account = self.credentials.verify(email, password)
        except InvalidCredentials:
            logger.warning("Failed login attempt")
            raise
        return account, self.sessions.start_session(account.id)

    def handle_logout(self, session_token: Optional[str]):
        self.sessions.end_session(session_token)

    def handle_current_account(self, session_token: Optional[str]) -> Optional[Account]:
        """The logged-in account, or None for anonymous callers."""
        account_id = self.sessions.resolve(session_token)
        if account_id is None:
            return None
        return self.credentials.get(account_id)

    def handle_create_url(self, session_token: Optional[str], destination: str) -> str:
        return self.registry.create(self._require_account(session_token), destination)

    def handle_list_urls(self, session_token: Optional[str]) -> List[URL]:
        """The caller's own mappings; anonymous callers get an empty list."""
        account = self.handle_current_account(session_token)
        if account is None:
            return []
        return self.registry.list_for_owner(account.id)

    def handle_view_url(self, session_token: Optional[str], short_code: str) -> URLDetail:
        requester_id = self._require_account(session_token)
        url = self.registry.get(short_code)
        if url is None:
            raise NotFound()
        if url.owner_id != requester_id:
            raise NotOwner()
        history = self.registry.history(short_code)
        return URLDetail(**url.model_dump(), history=history)

    def handle_update_url(
        self, session_token: Optional[str], short_code: str, new_destination: str
    ) -> URL:
        return self.registry.update(
            short_code, self._require_account(session_token), new_destination
        )

    def handle_delete_url(self, session_token: Optional[str], short_code: str):
        self.registry.delete(short_code, self._require_account(session_token))

    def handle_redirect(self, visitor_id: str, short_code: str) -> str:
        """
        Record the visit and return the destination.

        The caller issues and persists ``visitor_id``; a first-seen id simply
        counts as a new unique visitor.
        """
        return self.tracker.record_visit(short_code, visitor_id)

    def _require_account(self, session_token: Optional[str]) -> str:
        account = self.handle_current_account(session_token)
        if account is None:
            raise NotAuthenticated()
        return account.id
