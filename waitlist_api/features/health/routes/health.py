from datetime import datetime, timezone

from fastapi import APIRouter, Request

from waitlist_api.platform.utils.dates import utc_isoformat

router = APIRouter()


@router.get("/health", tags=["health"])
async def health_check(request: Request):
    database = getattr(request.app.state, "database", None)
    connected = database is not None and await database.ping()
    return {
        "status": "OK",
        "timestamp": utc_isoformat(datetime.now(timezone.utc)),
        "database": "Connected" if connected else "Disconnected",
    }
