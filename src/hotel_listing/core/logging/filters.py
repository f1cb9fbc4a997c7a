"""
Logging filters.

- Request-id helpers backed by a `ContextVar`, so the id set by the HTTP
  middleware follows the request across `await` boundaries.
- `RequestIdFilter` guarantees every record carries `request_id` (the real id,
  or "-" outside of a request) so `%(request_id)s` never raises KeyError.
- `RedactFilter` masks well-known secret attributes passed through `extra=`.
"""

import logging
from logging import LogRecord
import contextvars

_request_id_ctx: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)


def set_request_id(request_id: str | None) -> contextvars.Token:
    """Set the request id for the current context; returns a token for `reset_request_id`."""
    return _request_id_ctx.set(request_id)


def reset_request_id(token: contextvars.Token) -> None:
    _request_id_ctx.reset(token)


def get_request_id() -> str | None:
    return _request_id_ctx.get()


class RequestIdFilter(logging.Filter):
    """
    Attach `request_id` to each record.

    Precedence: an explicit `extra={"request_id": ...}` value, then the
    contextvar set by the middleware, then the "-" sentinel.
    """

    def filter(self, record: LogRecord) -> bool:
        record.request_id = (
            getattr(record, "request_id", None) or get_request_id() or "-"
        )
        return True


class RedactFilter(logging.Filter):
    SENSITIVE = {"password", "secret", "token", "access_token", "refresh_token", "authorization"}

    def filter(self, record: LogRecord) -> bool:
        for key in list(record.__dict__.keys()):
            if key.lower() in self.SENSITIVE:
                record.__dict__[key] = "***REDACTED***"
        return True
