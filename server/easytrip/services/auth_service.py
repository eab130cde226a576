"""Account signup and login."""

import hashlib
from typing import Optional

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from ..core.database import is_unique_violation
from ..core.exceptions import (
    AccountNotFoundError,
    DuplicateAccountError,
    InvalidCredentialsError,
    PersistenceError,
    ValidationError,
)
from ..core.observability import metrics_collector
from ..core.security import PasswordHasher
from ..models.account import Account
from ..schemas.common import utcnow

logger = structlog.get_logger(__name__)

MIN_PASSWORD_LENGTH = 6
MISSING_CREDENTIALS = "Email and password are required"
PASSWORD_TOO_SHORT = f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"


def normalize_email(email: str) -> str:
    """Canonical form used for storing and comparing emails."""
    return email.strip().lower()


def email_digest(email: str) -> str:
    """Short stable fingerprint of a normalized email, safe to put in logs."""
    return hashlib.sha256(email.encode("utf-8")).hexdigest()[:16]


class AuthService:
    """Service for account signup and credential checks."""

    def __init__(self, db: AsyncSession, hasher: PasswordHasher):
        self.db = db
        self.hasher = hasher

    async def get_account_by_email(self, email: str) -> Optional[Account]:
        """
        Get account by normalized email.

        Args:
            email: Email to search for (already normalized)

        Returns:
            Account if found, None otherwise
        """
        stmt = select(Account).where(Account.email == email)
        try:
            result = await self.db.execute(stmt)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Account lookup failed: {e}") from e
        return result.scalar_one_or_none()

    async def signup(self, email: Optional[str], password: Optional[str]) -> Account:
        """
        Create a new account.

        Args:
            email: Account email, any case
            password: Cleartext password

        Returns:
            Created account

        Raises:
            ValidationError: If a credential is missing or the password is too short
            DuplicateAccountError: If the normalized email is already registered
        """
        if not email or not email.strip() or not password:
            metrics_collector.record_signup("invalid")
            raise ValidationError(MISSING_CREDENTIALS)

        if len(password) < MIN_PASSWORD_LENGTH:
            metrics_collector.record_signup("invalid")
            raise ValidationError(PASSWORD_TOO_SHORT)

        email = normalize_email(email)

        # Fast path only; the unique index below is what guarantees uniqueness
        if await self.get_account_by_email(email) is not None:
            logger.warning("signup_rejected_duplicate", email_digest=email_digest(email))
            metrics_collector.record_signup("duplicate")
            raise DuplicateAccountError()

        password_hash = await run_in_threadpool(self.hasher.hash, password)
        account = Account(email=email, password_hash=password_hash, created_at=utcnow())

        try:
            self.db.add(account)
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            if not is_unique_violation(e):
                raise PersistenceError(f"Account insert violated a constraint: {e}") from e
            logger.warning("signup_rejected_by_unique_index", email_digest=email_digest(email))
            metrics_collector.record_signup("duplicate")
            raise DuplicateAccountError() from e
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise PersistenceError(f"Account insert failed: {e}") from e

        metrics_collector.record_signup("created")
        logger.info("signup_succeeded", account_id=str(account.id))
        return account

    async def login(self, email: Optional[str], password: Optional[str]) -> Account:
        """
        Confirm a set of credentials.

        No token or session is issued; a successful call only returns the account.

        Raises:
            ValidationError: If a credential is missing
            AccountNotFoundError: If no account has this email
            InvalidCredentialsError: If the password does not match
        """
        if not email or not email.strip() or not password:
            metrics_collector.record_login("invalid")
            raise ValidationError(MISSING_CREDENTIALS)

        email = normalize_email(email)
        account = await self.get_account_by_email(email)
        if account is None:
            logger.warning("login_unknown_account", email_digest=email_digest(email))
            metrics_collector.record_login("not_found")
            raise AccountNotFoundError()

        matches = await run_in_threadpool(self.hasher.verify, password, account.password_hash)
        if not matches:
            logger.warning("login_invalid_password", account_id=str(account.id))
            metrics_collector.record_login("invalid_credentials")
            raise InvalidCredentialsError()

        metrics_collector.record_login("succeeded")
        logger.info("login_succeeded", account_id=str(account.id))
        return account
