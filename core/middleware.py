# core/middleware.py
import logging
import time

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware:
    """Access log for API calls: method, path, status and duration."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        if not request.path.startswith("/api/"):
            return self.get_response(request)

        started = time.monotonic()
        response = self.get_response(request)
        elapsed_ms = (time.monotonic() - started) * 1000

        logger.info(
            f"{request.method} {request.get_full_path()} {response.status_code} {elapsed_ms:.1f}ms"
        )
        return response
