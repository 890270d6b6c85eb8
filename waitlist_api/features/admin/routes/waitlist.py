from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from waitlist_api.features.admin.schemas.waitlist import SortOrder, WaitlistPage
from waitlist_api.features.admin.services.waitlist import WaitlistAdminService
from waitlist_api.features.admin.utils.csv_export import export_filename
from waitlist_api.features.waitlist.schemas.waitlist import WaitlistEntryOut, WaitlistStats
from waitlist_api.platform.config import settings
from waitlist_api.platform.db.session import get_db
from waitlist_api.platform.response import api_response

# No access control yet; an admin auth dependency belongs on this router.
router = APIRouter(prefix="/admin/waitlist", tags=["Admin - Waitlist"])


@router.get("", summary="List waitlist entries")
@router.get("/", include_in_schema=False)
async def list_waitlist_entries(
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(
        settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE, description="Items per page"
    ),
    sort_by: str = Query("createdAt", alias="sortBy", description="Entry field to sort on"),
    sort_order: str = Query("desc", alias="sortOrder", description="asc or desc"),
    db: AsyncSession = Depends(get_db),
):
    service = WaitlistAdminService(db)
    entries, pagination = await service.list_entries(
        page=page,
        limit=limit,
        sort_by=sort_by,
        sort_order=SortOrder.parse(sort_order),
    )

    return api_response(
        data=WaitlistPage(
            entries=[WaitlistEntryOut.model_validate(e) for e in entries],
            pagination=pagination,
        ),
    )


@router.get("/export", summary="Export the waitlist as CSV")
async def export_waitlist(db: AsyncSession = Depends(get_db)):
    csv_text = await WaitlistAdminService(db).export_csv()
    return Response(
        content=csv_text,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{export_filename()}"'},
    )


@router.delete("/{entry_id}", summary="Delete a waitlist entry")
async def delete_waitlist_entry(entry_id: str, db: AsyncSession = Depends(get_db)):
    await WaitlistAdminService(db).delete_entry(entry_id)
    return api_response(message="Entry deleted successfully")


@router.get("/stats", summary="Waitlist statistics")
async def admin_waitlist_stats(db: AsyncSession = Depends(get_db)):
    total = await WaitlistAdminService(db).count()
    return api_response(
        data=WaitlistStats(total_count=total, timestamp=datetime.now(timezone.utc)),
    )
