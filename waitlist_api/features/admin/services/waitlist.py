from sqlalchemy import asc, delete, desc, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from waitlist_api.features.admin.schemas.waitlist import Pagination, SortOrder
from waitlist_api.features.admin.utils.csv_export import entries_to_csv
from waitlist_api.features.waitlist.models.waitlist import WaitlistEntry
from waitlist_api.features.waitlist.services.waitlist import WaitlistService
from waitlist_api.platform.exceptions import EntryNotFoundError, InvalidInputError, StorageError
from waitlist_api.platform.logger import get_logger

logger = get_logger(__name__)

# API field name -> column
SORTABLE_FIELDS = {
    "id": WaitlistEntry.id,
    "email": WaitlistEntry.email,
    "createdAt": WaitlistEntry.created_at,
    "source": WaitlistEntry.source,
    "ipAddress": WaitlistEntry.ip_address,
    "userAgent": WaitlistEntry.user_agent,
}


class WaitlistAdminService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_entries(
        self,
        page: int = 1,
        limit: int = 50,
        sort_by: str = "createdAt",
        sort_order: SortOrder = SortOrder.DESC,
    ) -> tuple[list[WaitlistEntry], Pagination]:
        if page < 1 or limit < 1:
            raise InvalidInputError("page and limit must be positive integers")

        column = SORTABLE_FIELDS.get(sort_by)
        if column is None:
            raise InvalidInputError(f"Cannot sort by '{sort_by}'")

        direction = asc if sort_order == SortOrder.ASC else desc
        offset = (page - 1) * limit

        try:
            total_count = await self.db.scalar(select(func.count(WaitlistEntry.id))) or 0
            result = await self.db.execute(
                select(WaitlistEntry)
                .order_by(direction(column), direction(WaitlistEntry.id))
                .offset(offset)
                .limit(limit)
            )
            entries = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.exception(f"Error getting waitlist entries: {e}")
            raise StorageError("Failed to retrieve waitlist entries") from e

        pagination = Pagination.build(page=page, limit=limit, total_count=total_count)
        logger.info(
            f"Admin: Retrieved {len(entries)} waitlist entries "
            f"(page {page}/{pagination.total_pages})"
        )
        return entries, pagination

    async def count(self) -> int:
        return await WaitlistService(self.db).count()

    async def export_csv(self) -> str:
        try:
            result = await self.db.execute(
                select(WaitlistEntry).order_by(desc(WaitlistEntry.created_at), desc(WaitlistEntry.id))
            )
            entries = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.exception(f"Error exporting waitlist: {e}")
            raise StorageError("Failed to export waitlist") from e

        logger.info(f"Admin: Exported {len(entries)} waitlist entries as CSV")
        return entries_to_csv(entries)

    async def delete_entry(self, entry_id: str) -> None:
        try:
            result = await self.db.execute(delete(WaitlistEntry).where(WaitlistEntry.id == entry_id))
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.exception(f"Error deleting waitlist entry: {e}")
            raise StorageError("Failed to delete entry") from e

        if result.rowcount == 0:
            raise EntryNotFoundError()

        logger.info(f"Admin: Deleted waitlist entry {entry_id}")
