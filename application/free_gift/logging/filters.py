"""
Basic Logging Filters for the free gift function service
"""
import logging
import uuid
from free_gift.middlewares.request_context import request_context


class RequestContextFilter(logging.Filter):
    def filter(self, record):
        record.request_id = getattr(request_context, 'request_id', None) or str(uuid.uuid4())
        record.request_method = getattr(request_context, 'request_method', '') or ''
        record.request_path = getattr(request_context, 'request_path', '') or ''
        return True


class ShopContextFilter(logging.Filter):
    def filter(self, record):
        record.shop_domain = getattr(request_context, 'shop_domain', '') or ''
        record.cart_token = getattr(request_context, 'cart_token', '') or ''
        return True
