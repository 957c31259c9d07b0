from datetime import datetime, UTC

from src.shortlinks.core.exceptions import NotFound
from src.shortlinks.db.session import Database
from src.shortlinks.models.url import UniqueVisitor, UrlMapping, VisitEvent


class VisitTracker:
    """Counts redirects and distinct visitors per short code."""

    def __init__(self, database: Database):
        self.database = database

    def record_visit(self, short_code: str, visitor_id: str) -> str:
        """
        Record one redirect and return the destination to send the visitor to.

        Every call appends a visit event and bumps ``total_visits``; the
        visitor joins the unique set only the first time it is seen. The
        whole sequence runs under the database lock.

        Raises:
            NotFound: If the code does not exist
        """
        with self.database.transaction() as db:
            url = (
                db.query(UrlMapping)
                .filter(UrlMapping.short_code == short_code)
                .first()
            )
            if url is None:
                raise NotFound()

            db.add(VisitEvent(url_id=url.id, visitor_id=visitor_id, visited_at=datetime.now(UTC)))
            url.total_visits += 1

            seen = (
                db.query(UniqueVisitor)
                .filter(UniqueVisitor.url_id == url.id, UniqueVisitor.visitor_id == visitor_id)
                .first()
            )
            if seen is None:
                db.add(UniqueVisitor(url_id=url.id, visitor_id=visitor_id))

            return url.destination
