import logging
import time

logger = logging.getLogger('clinic.requests')


class RequestLogMiddleware:
    """Log one line per API request: method, path, status and duration."""
    PREFIX = '/api/'

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        started = time.monotonic()
        response = self.get_response(request)
        path = request.path or ''
        if path.startswith(self.PREFIX):
            elapsed_ms = (time.monotonic() - started) * 1000
            logger.info('%s %s %s %.1fms', request.method, path, response.status_code, elapsed_ms)
        return response
