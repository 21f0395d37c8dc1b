"""
Logging Handlers for the free gift function service
Firehose-backed buffered handlers with local-file fallback.
"""
import logging
import os
import time
from logging.handlers import MemoryHandler

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from free_gift.logging.config import LoggingConfig
from free_gift.logging.formatters import AppLogsJSONFormatter, AuditLogsJSONFormatter
from free_gift.logging.filters import RequestContextFilter, ShopContextFilter

# Settings
from free_gift.config.settings import FreeGiftConfigs
configs = FreeGiftConfigs()

LOG_DEBUG_PRINTS = configs.LOG_DEBUG_PRINTS

def dbg(msg: str) -> None:
    """Lightweight debug print; enabled when LOG_DEBUG_PRINTS=true"""
    if LOG_DEBUG_PRINTS:
        print(msg)

class FireHoseHandler(logging.Handler):
    """Kinesis Firehose handler with simple retries"""

    def __init__(self, stream_name: str):
        super().__init__()
        self.stream_name = stream_name
        self.client = self._create_client()
        self.retry_count = LoggingConfig.FIREHOSE_RETRY_COUNT
        self.retry_delay = LoggingConfig.FIREHOSE_RETRY_DELAY

    def _create_client(self):
        return boto3.client(
            "firehose",
            region_name=LoggingConfig.FIREHOSE_REGION_NAME,
            aws_access_key_id=LoggingConfig.FIREHOSE_ACCESS_KEY_ID,
            aws_secret_access_key=LoggingConfig.FIREHOSE_SECRET_ACCESS_KEY,
            config=Config(connect_timeout=10, read_timeout=30, retries={"max_attempts": 2}),
        )

    def bulk_insert(self, actions):
        if not actions:
            return True

        for attempt in range(self.retry_count):
            try:
                response = self.client.put_record_batch(
                    DeliveryStreamName=self.stream_name,
                    Records=actions,
                )
                failed = response.get("FailedPutCount", 0)
                dbg(f"[Firehose:{self.stream_name}] put_record_batch attempt={attempt+1} total={len(actions)} failed={failed}")
                if failed == 0:
                    return True
                if attempt < self.retry_count - 1:
                    time.sleep(self.retry_delay * (2 ** attempt))
            except (BotoCoreError, ClientError):
                dbg(f"[Firehose:{self.stream_name}] exception on attempt={attempt+1}, will_retry={attempt < self.retry_count - 1}")
                if attempt < self.retry_count - 1:
                    time.sleep(self.retry_delay * (2 ** attempt))
                else:
                    return False
        return False


class SimpleMemoryHandler(MemoryHandler):
    def __init__(self, capacity, target_handler, stream_name):
        super().__init__(capacity=capacity, target=target_handler)
        self.stream_name = stream_name
        self.buffer_timeout = LoggingConfig.LOG_BUFFER_TIMEOUT
        self.last_flush = time.time()

    def emit(self, record):
        super().emit(record)
        now = time.time()
        if now - self.last_flush >= self.buffer_timeout or len(self.buffer) >= self.capacity:
            reason = "timeout" if (now - self.last_flush) >= self.buffer_timeout else "capacity"
            dbg(f"[Buffer:{self.stream_name}] triggering flush reason={reason} size={len(self.buffer)}")
            self.flush()

    def flush(self):
        self.acquire()
        try:
            if self.target and self.buffer:
                actions = [{"Data": self.format(record)} for record in self.buffer]
                ok = self.target.bulk_insert(actions)
                dbg(f"[Buffer:{self.stream_name}] flush count={len(actions)} ok={ok}")
                self.buffer.clear()
                self.last_flush = time.time()
        finally:
            self.release()


class AppLogsMemoryHandler(SimpleMemoryHandler):
    def __init__(self, stream_name: str):
        target = FireHoseHandler(stream_name)
        super().__init__(capacity=LoggingConfig.APP_LOGS_CAPACITY, target_handler=target, stream_name=stream_name)
        fmt = AppLogsJSONFormatter()
        self.setFormatter(fmt)
        target.setFormatter(fmt)


class AuditLogsMemoryHandler(SimpleMemoryHandler):
    def __init__(self, stream_name: str):
        target = FireHoseHandler(stream_name)
        super().__init__(capacity=LoggingConfig.AUDIT_LOGS_CAPACITY, target_handler=target, stream_name=stream_name)
        fmt = AuditLogsJSONFormatter()
        self.setFormatter(fmt)
        target.setFormatter(fmt)


_handlers = {}

def with_context_filters(handler):
    handler.addFilter(RequestContextFilter())
    handler.addFilter(ShopContextFilter())
    return handler


def get_local_file_handler(name: str = 'app'):
    os.makedirs(LoggingConfig.LOG_DIR, exist_ok=True)
    handler = logging.FileHandler(os.path.join(LoggingConfig.LOG_DIR, f'{name}.log'))
    formatter = AuditLogsJSONFormatter() if name.startswith('audit') else AppLogsJSONFormatter()
    handler.setFormatter(formatter)
    return handler


def get_app_handler():
    if LoggingConfig.FIREHOSE_ENABLED:
        if 'app' not in _handlers:
            stream = LoggingConfig.APP_LOGS_STREAM_NAME or 'free-gift-app-logs'
            _handlers['app'] = with_context_filters(AppLogsMemoryHandler(stream))
        return _handlers['app']
    if 'app_local' not in _handlers:
        _handlers['app_local'] = with_context_filters(get_local_file_handler('app'))
    return _handlers['app_local']


def get_audit_handler():
    if LoggingConfig.FIREHOSE_ENABLED:
        if 'audit' not in _handlers:
            stream = LoggingConfig.AUDIT_LOGS_STREAM_NAME or 'free-gift-audit-logs'
            _handlers['audit'] = with_context_filters(AuditLogsMemoryHandler(stream))
        return _handlers['audit']
    if 'audit_local' not in _handlers:
        _handlers['audit_local'] = with_context_filters(get_local_file_handler('audit_logs_backup'))
    return _handlers['audit_local']
