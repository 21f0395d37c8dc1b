"""Test the host-facing runner that validates raw payloads."""
import pytest
from free_gift.core import free_gift_functions
from free_gift.core.free_gift_functions import run_free_gift_core

from conftest import gift_line, purchase_line, variant_gid


def test_valid_payload_is_evaluated():
    payload = {"cart": {"lines": [purchase_line(1, free_gift_id=variant_gid(100)), gift_line(100)]}}
    result = run_free_gift_core(payload)
    assert result.discount_application_strategy == "MAXIMUM"
    assert result.discounts[0].targets[0].product_variant.id == variant_gid(100)


def test_unknown_keys_are_ignored():
    line = gift_line(100)
    line["cost"] = {"amountPerQuantity": {"amount": "10.0"}}
    payload = {"cart": {"lines": [purchase_line(1, free_gift_id=variant_gid(100)), line], "buyerIdentity": None}}
    assert not run_free_gift_core(payload).is_empty()


@pytest.mark.parametrize("payload", [
    {},
    [],
    "cart",
    {"cart": None},
    {"cart": {"lines": "nope"}},
])
def test_malformed_envelope_degrades_to_empty(payload):
    result = run_free_gift_core(payload)
    assert result.is_empty()
    assert result.discount_application_strategy == "ALL"


@pytest.mark.parametrize("lines", [
    [{"merchandise": {"__typename": "ProductVariant"}, "is_free_gift": True}],
    [{"is_free_gift": True}],
    ["line"],
])
def test_cart_of_only_malformed_lines_is_empty(lines):
    result = run_free_gift_core({"cart": {"lines": lines}})
    assert result.is_empty()
    assert result.discount_application_strategy == "ALL"


def test_null_lines_is_an_empty_cart():
    assert run_free_gift_core({"cart": {"lines": None}}).is_empty()


def unset_flag_line():
    line = purchase_line(3)
    line["is_free_gift"] = None
    return line


def null_id_line():
    line = purchase_line(3)
    line["merchandise"]["id"] = None
    return line


@pytest.mark.parametrize("extra_line", [unset_flag_line(), null_id_line(), {"quantity": "many"}])
def test_malformed_unrelated_line_does_not_cancel_valid_pair(extra_line, monkeypatch):
    captured = []
    monkeypatch.setattr(free_gift_functions, "capture_message", lambda message, level=None: captured.append(message))
    payload = {"cart": {"lines": [purchase_line(1, free_gift_id=variant_gid(100)), gift_line(100), extra_line]}}

    result = run_free_gift_core(payload)

    assert result.discount_application_strategy == "MAXIMUM"
    assert [t.product_variant.id for t in result.discounts[0].targets] == [variant_gid(100)]
    if extra_line.get("is_free_gift", False) is None:
        assert captured == []
    else:
        assert captured[0].startswith("free_gift_run_invalid_line | index=2")


def test_unset_flag_line_can_unlock_a_gift():
    purchase = purchase_line(1, free_gift_id=variant_gid(100))
    purchase["is_free_gift"] = None
    result = run_free_gift_core({"cart": {"lines": [purchase, gift_line(100)]}})
    assert [t.product_variant.id for t in result.discounts[0].targets] == [variant_gid(100)]


def test_unexpected_error_degrades_to_empty(monkeypatch):
    captured = []

    def boom(_):
        raise RuntimeError("boom")

    monkeypatch.setattr(free_gift_functions, "run", boom)
    monkeypatch.setattr(free_gift_functions, "capture_exception", captured.append)

    result = run_free_gift_core({"cart": {"lines": []}})
    assert result.is_empty()
    assert isinstance(captured[0], RuntimeError)
