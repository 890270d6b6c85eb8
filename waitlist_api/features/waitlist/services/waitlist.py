from typing import Any, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from waitlist_api.features.waitlist.models.waitlist import WaitlistEntry
from waitlist_api.features.waitlist.utils.email import is_valid_email, normalize_email
from waitlist_api.platform.config import settings
from waitlist_api.platform.exceptions import (
    DuplicateEmailError,
    InvalidEmailError,
    StorageError,
)
from waitlist_api.platform.logger import get_logger

logger = get_logger(__name__)


class WaitlistService:
    def __init__(self, db: AsyncSession, source: Optional[str] = None):
        self.db = db
        self.source = source or settings.WAITLIST_SOURCE

    async def register(
        self,
        raw_email: Any,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> WaitlistEntry:
        """
        Add an email to the waitlist.

        The unique index on ``email`` is the only duplicate check: two
        concurrent signups for one address end with one row and one
        DuplicateEmailError.
        """
        if not is_valid_email(raw_email):
            raise InvalidEmailError()

        email = normalize_email(raw_email)
        entry = WaitlistEntry(
            email=email,
            source=self.source,
            ip_address=ip_address,
            user_agent=user_agent,
        )

        try:
            self.db.add(entry)
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.info(f"Duplicate waitlist signup: {email}")
            raise DuplicateEmailError()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.exception(f"Error adding to waitlist: {e}")
            raise StorageError() from e

        logger.info(f"New waitlist entry: {email}")
        return entry

    async def exists(self, raw_email: Any) -> bool:
        """Advisory lookup for the signup form; ``register`` stays authoritative."""
        if not is_valid_email(raw_email):
            raise InvalidEmailError("Invalid email format")

        try:
            result = await self.db.execute(
                select(WaitlistEntry.id).where(WaitlistEntry.email == normalize_email(raw_email))
            )
        except SQLAlchemyError as e:
            logger.exception(f"Error checking email: {e}")
            raise StorageError("Failed to check email") from e
        return result.scalar_one_or_none() is not None

    async def count(self) -> int:
        try:
            total = await self.db.scalar(select(func.count(WaitlistEntry.id)))
        except SQLAlchemyError as e:
            logger.exception(f"Error getting stats: {e}")
            raise StorageError("Failed to get waitlist statistics") from e
        return total or 0
