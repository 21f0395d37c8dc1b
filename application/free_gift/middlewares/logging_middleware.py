"""
Audit and Request Logging Middleware for the free gift function service
Uses Starlette's BaseHTTPMiddleware.
"""
import json
import socket
import time
from datetime import datetime

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from free_gift.logging.utils import get_app_logger, init_audit_logger
from free_gift.logging.config import LoggingConfig
from free_gift.middlewares.request_context import create_request_id, request_context, clear_request_context

# settings
from free_gift.config.settings import FreeGiftConfigs
configs = FreeGiftConfigs()

APP_NAME = configs.APP_NAME
APP_VERSION = configs.APP_VERSION

MASKED_HEADERS = ('authorization', 'cookie', 'x-shopify-hmac-sha256')


class AuditMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, exclude_paths: list[str] | None = None):
        super().__init__(app)
        self.logger = get_app_logger('free_gift.logging')
        self.exclude_audit_paths = exclude_paths or ['/health', '/docs', '/redoc', '/openapi.json']
        self.hostname = socket.gethostname()
        self.app_name = APP_NAME
        self.version = APP_VERSION

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        # fresh context per request; the contextvar default is shared
        clear_request_context()
        request_id = create_request_id()
        start_time = time.time()
        timestamp = datetime.now().isoformat()

        body_bytes = await request.body()

        request_context.module_name = None
        request_context.request_method = request.method
        request_context.request_path = request.url.path

        should_audit = LoggingConfig.AUDIT_LOGGING_ENABLED and not any(
            request.url.path.startswith(p) for p in self.exclude_audit_paths
        )

        try:
            response = await call_next(request)
            duration = (time.time() - start_time) * 1000
            response.headers['x-request-id'] = request_id

            if should_audit:
                audit_data = self._build_audit_data(request, response, body_bytes, duration, request_id, timestamp)
                init_audit_logger().info("Audit log", extra=audit_data)
            return response
        except Exception as exc:
            duration = (time.time() - start_time) * 1000
            self.logger.error(
                f"Exception: {request.method} {request.url.path} - {exc.__class__.__name__} ({duration:.0f}ms)",
                exc_info=True,
            )
            if should_audit:
                audit_data = self._build_audit_data(request, Response(status_code=500), body_bytes, duration, request_id, timestamp)
                audit_data['exception'] = exc.__class__.__name__
                init_audit_logger().info("Audit log (exception)", extra=audit_data)
            raise
        finally:
            clear_request_context()

    def _mask_headers(self, headers) -> dict:
        """Replace credential-bearing header values with '****'."""
        return {
            k: ('****' if k.lower() in MASKED_HEADERS else v)
            for k, v in headers.items()
        }

    def _parse_body(self, request: Request, body_bytes: bytes):
        if not body_bytes:
            return {}
        if 'application/json' in request.headers.get('content-type', ''):
            try:
                return json.loads(body_bytes.decode('utf-8'))
            except (UnicodeDecodeError, json.JSONDecodeError):
                pass
        return body_bytes.decode('utf-8', errors='replace')[:1000]

    def _response_data(self, response: Response):
        """Response body is captured only for non-2xx responses and when the flag is enabled."""
        status = getattr(response, 'status_code', 0)
        if not LoggingConfig.CAPTURE_RESPONSE_BODY or 200 <= status < 300:
            return ''
        # streamed responses cannot be consumed here
        if hasattr(response, 'body_iterator') or getattr(response, 'body', None) is None:
            return ''
        if 'application/json' in response.headers.get('content-type', ''):
            try:
                return json.loads(response.body.decode('utf-8'))
            except (UnicodeDecodeError, json.JSONDecodeError):
                pass
        return response.body.decode('utf-8', errors='replace')[:1000]

    def _build_audit_data(
        self,
        request: Request,
        response: Response,
        body_bytes: bytes,
        duration: float,
        request_id: str,
        timestamp: str,
    ) -> dict:
        body = getattr(response, 'body', None)
        request_json = {
            "GET": dict(request.query_params),
            "BODY": self._parse_body(request, body_bytes),
            "HEADERS": self._mask_headers(dict(request.headers)),
        }

        return {
            'duration': round(duration, 2),
            'hostname': self.hostname,
            'app_name': self.app_name,
            'module_name': request_context.module_name,
            'request': request_json,
            'request_id': request_id,
            'request_method': request.method,
            'request_path': request.url.path,
            'response': self._response_data(response),
            'size_in_bytes': len(body) if body else 0,
            'status_code': getattr(response, 'status_code', 0),
            'timestamp': timestamp,
            'version': self.version,
        }
