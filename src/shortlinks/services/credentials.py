from typing import Callable, Optional

from sqlalchemy import func, select

from src.shortlinks.core.config import settings, logger
from src.shortlinks.core.exceptions import EmailAlreadyExists, InvalidCredentials, MissingField
from src.shortlinks.core.security import get_password_hash, pwd_context, verify_password
from src.shortlinks.db.session import Database
from src.shortlinks.models.user import Account as AccountModel
from src.shortlinks.schemas.user import Account
from src.shortlinks.services.shortcode import generate_short_code


class CredentialStore:
    """
    Account records keyed by email.

    Only salted hashes are stored; the plaintext password never leaves
    ``register``/``verify`` and is never returned or logged.
    """

    def __init__(
        self,
        database: Database,
        id_generator: Callable[[int], str] = generate_short_code,
    ):
        self.database = database
        self.id_generator = id_generator

    def register(self, email: str, password: str) -> Account:
        """
        Create a new account.

        Raises:
            MissingField: If email or password is empty
            EmailAlreadyExists: If the email is already registered
        """
        if not email or not password:
            raise MissingField()

        hashed_password = get_password_hash(password)

        with self.database.transaction() as db:
            if self._get_by_email(db, email):
                logger.warning("Registration rejected: email already exists")
                raise EmailAlreadyExists()

            account_id = self._new_account_id(db)
            db_account = AccountModel(
                id=account_id, email=email, hashed_password=hashed_password
            )
            db.add(db_account)
            db.flush()
            account = Account.model_validate(db_account)

        logger.info(f"Account {account.id} registered")
        return account

    def verify(self, email: str, password: str) -> Account:
        """
        Check an email/password pair.

        Unknown email and wrong password raise the same error.

        Raises:
            InvalidCredentials: If the pair does not match an account
        """
        with self.database.transaction() as db:
            db_account = self._get_by_email(db, email) if email else None
            if db_account is not None:
                hashed_password = db_account.hashed_password
                account = Account.model_validate(db_account)

        # Hash checks run outside the database lock
        if db_account is None:
            # Burn comparable time so the two failure cases look alike
            pwd_context.dummy_verify()
            raise InvalidCredentials()
        if not verify_password(password, hashed_password):
            raise InvalidCredentials()
        return account

    def get(self, account_id: str) -> Optional[Account]:
        with self.database.transaction() as db:
            db_account = db.get(AccountModel, account_id)
            return Account.model_validate(db_account) if db_account else None

    def count(self) -> int:
        with self.database.transaction() as db:
            return db.scalar(select(func.count()).select_from(AccountModel))

    @staticmethod
    def _get_by_email(db, email: str) -> Optional[AccountModel]:
        return db.query(AccountModel).filter(AccountModel.email == email).first()

    def _new_account_id(self, db) -> str:
        while True:
            account_id = self.id_generator(settings.ACCOUNT_ID_LENGTH)
            if db.get(AccountModel, account_id) is None:
                return account_id
