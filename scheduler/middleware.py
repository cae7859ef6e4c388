import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Never written to the access log.
_SECRET_HEADERS = ("x-vote-token", "x-admin-secret")


class HTTPLogMiddleware(BaseHTTPMiddleware):
    """Debug access log keyed by a per-request id.

    The id is taken from an incoming ``X-Request-ID`` header or generated,
    and echoed back on the response so a client can match its call to the
    store's log lines. Vote tokens and the admin secret are only reported as
    present or absent.
    """

    def __init__(self, app, logger_name: str = "scheduler.http"):
        super().__init__(app)
        self._logger = logging.getLogger(logger_name)

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        start = time.perf_counter()
        credentials = [h for h in _SECRET_HEADERS if h in request.headers]
        self._logger.debug(
            "http.request start id=%s method=%s path=%s credentials=%s",
            request_id, request.method, request.url.path, ",".join(credentials) or "-",
        )
        try:
            response: Response = await call_next(request)
        except Exception as e:
            self._logger.warning(
                "http.request error id=%s method=%s path=%s dur_ms=%d err=%r",
                request_id, request.method, request.url.path, _elapsed_ms(start), e,
            )
            raise
        response.headers[REQUEST_ID_HEADER] = request_id
        self._logger.debug(
            "http.request end id=%s method=%s path=%s status=%s dur_ms=%d",
            request_id, request.method, request.url.path, response.status_code, _elapsed_ms(start),
        )
        return response


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)
