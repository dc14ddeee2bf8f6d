"""
ScholarThynk Backend — Request Logging Middleware
=================================================

What:  One access-log line per HTTP request.
How:   Measures the time around the downstream handler and logs method, path,
       status, duration, request id, client IP and the authenticated owner
       ("guest" when the route is public or authentication failed).

What we log vs what we DON'T log (privacy):
    ✅ Log: method, path, status, duration, IP, owner id, request ID
    ❌ Don't log: request bodies (note contents), Authorization headers
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from scholarthynk.middleware.request_id import request_id_var

logger = logging.getLogger("scholarthynk.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Log level follows the status code:
        5xx → ERROR, 4xx → WARNING, everything else → INFO.

    Health checks are not logged; probes hit them every few seconds.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()

        client_ip = getattr(request.client, "host", "unknown") if request.client else "unknown"
        method = request.method
        path = request.url.path
        rid = request_id_var.get("")

        if path == "/health":
            return await call_next(request)

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        # Set by the get_owner_id dependency once the token is verified
        owner = getattr(request.state, "owner_id", None) or "guest"

        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] user=%s from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            owner,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
                "owner_id": owner,
            },
        )

        return response
