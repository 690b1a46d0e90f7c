"""
Exception handlers mapping failures onto the API's response envelopes.

- field validation: 400 {"errors": [{"field", "message"}]}
- HTTPException:    {"msg": detail} with the exception's status
- anything else:    500 plain-text "Server error"; details stay in the server log
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException

from devconnector.services.validation import RequestFieldsInvalid

logger = logging.getLogger(__name__)


def _field_errors(errors: List[Dict[str, Any]]) -> List[Dict[str, str]]:
    out = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        out.append({"field": ".".join(loc), "message": err.get("msg", "Invalid value")})
    return out


async def fields_invalid_handler(request: Request, exc: RequestFieldsInvalid):
    return JSONResponse(status_code=400, content={"errors": exc.errors})


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"errors": _field_errors(exc.errors())})


async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"msg": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def server_error_handler(request: Request, exc: Exception):
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return PlainTextResponse("Server error", status_code=500)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestFieldsInvalid, fields_invalid_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, server_error_handler)
