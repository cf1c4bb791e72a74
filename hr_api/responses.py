from http import HTTPStatus
from typing import Any, Dict, List, Optional

from fastapi.responses import JSONResponse


def create_response(status: HTTPStatus, body: Dict[str, Any]) -> JSONResponse:
    return JSONResponse(status_code=status.value, content=body)


def success_response(
    data: Any = None,
    message: Optional[str] = None,
    status: HTTPStatus = HTTPStatus.OK,
    count: Optional[int] = None,
) -> JSONResponse:
    body: Dict[str, Any] = {"success": True}
    if message is not None:
        body["message"] = message
    if count is not None:
        body["count"] = count
    if data is not None:
        body["data"] = data
    return create_response(status, body)


def error_response(
    message: str,
    status: HTTPStatus,
    error: Optional[str] = None,
    errors: Optional[List[Dict[str, str]]] = None,
) -> JSONResponse:
    body: Dict[str, Any] = {"success": False, "message": message}
    if error is not None:
        body["error"] = error
    if errors is not None:
        body["errors"] = errors
    return create_response(status, body)
