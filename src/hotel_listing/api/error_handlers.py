# hotel_listing/api/error_handlers.py
"""
Translation of escaped exceptions into HTTP error responses.

Routes and repositories never build error responses themselves; they raise.
`ExceptionMiddleware` wraps the whole request pipeline, catches whatever escapes
a route, logs it with the request path, and answers with an `ErrorDetails` body:

    NotFoundError    -> 404 {"ErrorType": "Not Found",   "ErrorMessage": "..."}
    BadRequestError  -> 400 {"ErrorType": "Bad Request", "ErrorMessage": "..."}
    anything else    -> 500 {"ErrorType": "Failure",     "ErrorMessage": "..."}

FastAPI's own request validation (422) and `HTTPException`s are answered by the
framework before they reach this middleware.
"""

import logging

from fastapi import FastAPI
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from hotel_listing.exceptions.base import FAILURE, DomainError, ErrorDetails

logger = logging.getLogger(__name__)

JSON_MEDIA_TYPE = "application/json"


def translate_exception(exc: Exception) -> tuple[int, ErrorDetails]:
    """Status code and body for an exception; unknown types are a 500 "Failure"."""
    if isinstance(exc, DomainError):
        return exc.http_status(), exc.to_details()
    return 500, ErrorDetails(error_type=FAILURE, error_message=str(exc) or exc.__class__.__name__)


class ExceptionMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            path = request.url.path
            if isinstance(exc, DomainError):
                logger.info(
                    "Something went wrong while processing %s",
                    path,
                    extra={
                        "path": path,
                        "error_type": exc.error_type,
                        "error_message": exc.message,
                        "fields": getattr(exc, "fields", None),
                    },
                )
            else:
                logger.exception(
                    "Something went wrong while processing %s",
                    path,
                    extra={"path": path, "exception_class": exc.__class__.__name__},
                )

            status_code, details = translate_exception(exc)
            return Response(content=details.to_json(), status_code=status_code, media_type=JSON_MEDIA_TYPE)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the translation middleware (call from the app factory before outer middlewares)."""
    app.add_middleware(ExceptionMiddleware)
