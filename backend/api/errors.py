"""
Application error handling.

Turns any HubError into a JSON response with the body
{"error", "message", "details"} and the status the error carries.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from shared.exceptions import HubError
from modules.admin.exceptions import AdminError, describe_admin_error

logger = logging.getLogger(__name__)


def error_status(error: HubError) -> int:
    """HTTP status for an application error."""
    return error.status_code


async def handle_hub_error(request: Request, exc: HubError) -> JSONResponse:
    status_code = error_status(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.code}: {exc.message}")
    content = exc.to_dict()
    if isinstance(exc, AdminError):
        content["message"] = describe_admin_error(exc)
    return JSONResponse(status_code=status_code, content=content)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(HubError, handle_hub_error)
