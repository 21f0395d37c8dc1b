import os
import tempfile

# Settings are read at import time; pin them before any free_gift module loads
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="free_gift_logs_"))
os.environ["FIREHOSE_ENABLED"] = "false"
os.environ["SENTRY_ENABLED"] = "false"
os.environ["AUDIT_LOGGING_ENABLED"] = "false"
os.environ["DEBUG"] = "true"

import pytest
from fastapi.testclient import TestClient


def variant_gid(numeric_id) -> str:
    return f"gid://shopify/ProductVariant/{numeric_id}"


def gift_line(numeric_id, quantity=1, free_gift_id=None) -> dict:
    line = {
        "quantity": quantity,
        "merchandise": {"__typename": "ProductVariant", "id": variant_gid(numeric_id)},
        "is_free_gift": True,
    }
    if free_gift_id is not None:
        line["free_gift_id"] = {"value": free_gift_id}
    return line


def purchase_line(numeric_id, free_gift_id=None) -> dict:
    line = {
        "quantity": 1,
        "merchandise": {"__typename": "ProductVariant", "id": variant_gid(numeric_id)},
        "is_free_gift": False,
    }
    if free_gift_id is not None:
        line["free_gift_id"] = {"value": free_gift_id}
    return line


@pytest.fixture
def client():
    from free_gift.main import app
    with TestClient(app) as test_client:
        yield test_client
