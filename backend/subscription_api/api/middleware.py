"""
Request Logging Middleware

Logs every request with its outcome and duration, and tags the response
with an X-Request-ID (echoed from the request or generated).
"""

import logging
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware


logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for per-request access logging."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        method = request.method
        path = request.url.path
        client_ip = request.client.host if request.client else "unknown"

        start_time = time.perf_counter()
        logger.debug(f"Started {method} {path} from {client_ip} request_id={request_id}")

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                f"{method} {path} raised {e.__class__.__name__} after "
                f"{duration_ms:.1f}ms request_id={request_id}"
            )
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        message = (
            f"{method} {path} -> {response.status_code} in {duration_ms:.1f}ms "
            f"client={client_ip} request_id={request_id}"
        )
        if response.status_code >= 500:
            logger.error(message)
        elif response.status_code >= 400:
            logger.warning(message)
        else:
            logger.info(message)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
