from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from waitlist_api.features.waitlist.schemas.waitlist import (
    WaitlistCheckIn,
    WaitlistIn,
    WaitlistOut,
    WaitlistStats,
)
from waitlist_api.features.waitlist.services.waitlist import WaitlistService
from waitlist_api.platform.db.session import get_db
from waitlist_api.platform.response import api_response

router = APIRouter(prefix="/waitlist", tags=["Waitlist"])


@router.post("", status_code=status.HTTP_201_CREATED)
@router.post("/", status_code=status.HTTP_201_CREATED, include_in_schema=False)
async def join_waitlist(
    waitlist_in: WaitlistIn, request: Request, db: AsyncSession = Depends(get_db)
):
    service = WaitlistService(db)
    entry = await service.register(
        waitlist_in.email,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )

    return api_response(
        data=WaitlistOut.model_validate(entry),
        message="Successfully added to waitlist",
        status_code=status.HTTP_201_CREATED,
    )


@router.post("/check")
async def check_email(payload: WaitlistCheckIn, db: AsyncSession = Depends(get_db)):
    """
    Tell the signup form whether an email is already registered.
    Only a hint: a signup can still come back as a duplicate.
    """
    exists = await WaitlistService(db).exists(payload.email)
    return api_response(exists=exists)


@router.get("/stats")
async def waitlist_stats(db: AsyncSession = Depends(get_db)):
    total = await WaitlistService(db).count()
    return api_response(
        data=WaitlistStats(total_count=total, timestamp=datetime.now(timezone.utc)),
    )
