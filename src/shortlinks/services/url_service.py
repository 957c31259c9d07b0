from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from src.shortlinks.core.config import settings, logger
from src.shortlinks.core.exceptions import CapacityExhausted, NotFound, NotOwner
from src.shortlinks.db.session import Database
from src.shortlinks.models.url import UrlMapping
from src.shortlinks.schemas.url import URL, VisitEvent
from src.shortlinks.services.shortcode import generate_short_code


class UrlRegistry:
    """
    Short code to destination mappings, each owned by one account.

    Every mutation compares the requester against the stored ``owner_id``
    inside the same transaction that applies the change. Reads are not
    ownership-restricted; scoping the dashboard to the caller is the job of
    the access control facade.
    """

    def __init__(
        self,
        database: Database,
        code_generator: Callable[[int], str] = generate_short_code,
        code_length: int | None = None,
        max_retries: int | None = None,
    ):
        self.database = database
        self.code_generator = code_generator
        self.code_length = code_length or settings.SHORT_CODE_LENGTH
        self.max_retries = max_retries or settings.MAX_CODE_RETRIES

    def create(self, owner_id: str, destination: str) -> str:
        """
        Create a new mapping owned by ``owner_id``.

        Args:
            owner_id: Account id of the creator
            destination: Any string; it is not validated or normalized

        Returns:
            The freshly allocated short code

        Raises:
            CapacityExhausted: If no free code was found within the retry budget
        """
        with self.database.transaction() as db:
            short_code = self._allocate_code(db)
            db.add(
                UrlMapping(
                    short_code=short_code,
                    destination=destination,
                    owner_id=owner_id,
                    total_visits=0,
                )
            )

        logger.info(f"Short code {short_code} created by account {owner_id}")
        return short_code

    def get(self, short_code: str) -> Optional[URL]:
        with self.database.transaction() as db:
            url = self._get(db, short_code)
            return URL.from_model(url) if url else None

    def list_for_owner(self, owner_id: str) -> List[URL]:
        with self.database.transaction() as db:
            urls = (
                db.query(UrlMapping)
                .filter(UrlMapping.owner_id == owner_id)
                .order_by(UrlMapping.id)
                .all()
            )
            return [URL.from_model(url) for url in urls]

    def history(self, short_code: str) -> List[VisitEvent]:
        """
        Visit events for a code, oldest first.

        Raises:
            NotFound: If the code does not exist
        """
        with self.database.transaction() as db:
            url = self._get(db, short_code)
            if url is None:
                raise NotFound()
            return [VisitEvent.model_validate(visit) for visit in url.visits]

    def update(self, short_code: str, requester_id: str, new_destination: str) -> URL:
        """
        Overwrite the destination, keeping counters and creation time.

        Raises:
            NotFound: If the code does not exist
            NotOwner: If requester_id is not the mapping's owner
        """
        with self.database.transaction() as db:
            url = self._get_owned(db, short_code, requester_id)
            url.destination = new_destination
            db.flush()
            result = URL.from_model(url)

        logger.info(f"Short code {short_code} updated by account {requester_id}")
        return result

    def delete(self, short_code: str, requester_id: str):
        """
        Remove a mapping together with its visit history.

        Raises:
            NotFound: If the code does not exist
            NotOwner: If requester_id is not the mapping's owner
        """
        with self.database.transaction() as db:
            url = self._get_owned(db, short_code, requester_id)
            db.delete(url)

        logger.info(f"Short code {short_code} deleted by account {requester_id}")

    @staticmethod
    def _get(db: Session, short_code: str) -> Optional[UrlMapping]:
        return db.query(UrlMapping).filter(UrlMapping.short_code == short_code).first()

    def _get_owned(self, db: Session, short_code: str, requester_id: str) -> UrlMapping:
        url = self._get(db, short_code)
        if url is None:
            raise NotFound()
        if url.owner_id != requester_id:
            logger.warning(
                f"Account {requester_id} tried to modify {short_code} owned by {url.owner_id}"
            )
            raise NotOwner()
        return url

    def _allocate_code(self, db: Session) -> str:
        for attempt in range(self.max_retries):
            short_code = self.code_generator(self.code_length)
            if self._get(db, short_code) is None:
                return short_code
            logger.warning(f"Short code collision on attempt {attempt + 1}")

        logger.error(
            f"Could not generate unique short code after {self.max_retries} attempts"
        )
        raise CapacityExhausted()
