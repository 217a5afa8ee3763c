"""
Helpers shared by the generation routers
"""
import uuid
from typing import Any, Optional

from fastapi.responses import JSONResponse

from models import ErrorResponse


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def error_response(
    status_code: int,
    error: str,
    request_id: str,
    error_type: str,
    details: Optional[Any] = None,
    **extra: Any,
) -> JSONResponse:
    """JSON error body with error, details, requestId and errorType"""
    body = ErrorResponse(
        error=error,
        details=details,
        requestId=request_id,
        errorType=error_type,
        **extra,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))
