from typing import Any, Optional

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def api_response(
    *,
    data: Optional[Any] = None,
    message: Optional[str] = None,
    status_code: int = status.HTTP_200_OK,
    **extra: Any,
) -> JSONResponse:
    """
    Single source of truth for ALL API responses.
    Automatically sets success = True if < 400 else False.
    Extra keyword arguments become top-level keys (e.g. ``exists``).
    """
    content: dict[str, Any] = {"success": status_code < 400}
    if message is not None:
        content["message"] = message
    if data is not None:
        content["data"] = jsonable_encoder(data)
    content.update(jsonable_encoder(extra))

    return JSONResponse(status_code=status_code, content=content)
