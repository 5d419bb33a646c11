from typing import Any, List, Optional

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def api_response(
    *,
    result: Optional[Any] = None,
    error: Optional[Any] = None,
    errors: Optional[List[Any]] = None,
    status_code: int = status.HTTP_200_OK,
) -> JSONResponse:
    """
    Single source of truth for ALL API responses.
    `success` is derived from the status code; `result`, `error` and `errors`
    are only emitted when given.
    """
    content = {"success": status_code < 400}
    if result is not None:
        content["result"] = jsonable_encoder(result, exclude_none=True)
    if error is not None:
        content["error"] = jsonable_encoder(error)
    if errors is not None:
        content["errors"] = jsonable_encoder(errors, exclude_none=True)

    return JSONResponse(status_code=status_code, content=content)
