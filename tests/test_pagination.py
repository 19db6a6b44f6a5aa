"""Tests for continuation tokens and the resume predicate."""

import base64
from decimal import Decimal

import pytest

from orderfeed.errors import InvalidContinuation, ProjectionFailure
from orderfeed.query.pagination import (
    SORT_SPECS,
    continuation_for_row,
    decode_continuation,
    encode_continuation,
    format_sort_key,
    resume_predicate,
)
from orderfeed.query.predicates import PredicateBuilder

ORDER_ID = "0x" + "ef" * 32


def test_round_trip_price():
    token = encode_continuation("price", 2.0, ORDER_ID)
    decoded = decode_continuation(token, "price")
    assert decoded.key == Decimal("2")
    assert decoded.id == ORDER_ID
    assert decoded.sort_by == "price"


def test_round_trip_created_at_keeps_fraction():
    token = encode_continuation("createdAt", 1700000000.123456, ORDER_ID)
    decoded = decode_continuation(token, "createdAt")
    assert decoded.key == Decimal("1700000000.123456")
    assert float(decoded.key) == 1700000000.123456


def test_token_is_base64_of_mode_key_and_id():
    token = encode_continuation("price", Decimal("1.50"), ORDER_ID)
    assert base64.b64decode(token).decode() == f"price|1.5_{ORDER_ID}"


def test_format_sort_key_never_uses_exponent():
    assert format_sort_key(Decimal("1E+21")) == "1000000000000000000000"
    assert format_sort_key(1e-05) == "0.00001"
    assert format_sort_key(3) == "3"


def test_sort_mode_mismatch_is_rejected():
    token = encode_continuation("price", 1, ORDER_ID)
    with pytest.raises(InvalidContinuation, match="sortBy=price"):
        decode_continuation(token, "createdAt")


@pytest.mark.parametrize(
    "payload",
    [
        f"price|abc_{ORDER_ID}",
        "price|1_0x1234",
        f"price|1{ORDER_ID}",
        f"price|-1_{ORDER_ID}",
        f"1_{ORDER_ID}",
        f"price|1_{ORDER_ID.upper()}",
        f"price|1_{ORDER_ID} ",
    ],
)
def test_malformed_payloads_are_rejected(payload):
    token = base64.b64encode(payload.encode()).decode()
    with pytest.raises(InvalidContinuation):
        decode_continuation(token, "price")


@pytest.mark.parametrize("token", ["not base64!", "aGVsbG8", "ü", base64.b64encode(b"\xff\xfe").decode()])
def test_undecodable_tokens_are_rejected(token):
    with pytest.raises(InvalidContinuation):
        decode_continuation(token, "price")


def test_continuation_for_row_uses_sort_column():
    row = {"id": ORDER_ID, "price": 5, "created_at": 1700000000.0}
    assert decode_continuation(continuation_for_row("price", row), "price").key == Decimal(5)
    assert decode_continuation(continuation_for_row("createdAt", row), "createdAt").key == Decimal(1700000000)


@pytest.mark.parametrize(
    "row",
    [
        {"id": "order-1", "created_at": 1700000000.0},
        {"id": ORDER_ID.upper().replace("0X", "0x"), "created_at": 1700000000.0},
        {"id": ORDER_ID, "created_at": -1.0},
        {"id": ORDER_ID, "created_at": None},
    ],
)
def test_continuation_for_row_refuses_rows_the_decoder_would_reject(row):
    with pytest.raises(ProjectionFailure):
        continuation_for_row("createdAt", row)


def test_resume_predicate_matches_order_by():
    for sort_by, expected_op in (("price", ">"), ("createdAt", "<")):
        builder = PredicateBuilder()
        cursor = decode_continuation(encode_continuation(sort_by, 1, ORDER_ID), sort_by)
        clause = resume_predicate(cursor, builder.bind)
        spec = SORT_SPECS[sort_by]

        assert clause.render() == f"({spec.column}, orders.id) {expected_op} (:cursor_key, :cursor_id)"
        assert builder.params == {"cursor_key": Decimal(1), "cursor_id": ORDER_ID}
        assert spec.column in spec.order_by


def test_order_by_directions():
    assert SORT_SPECS["price"].order_by == "ORDER BY orders.price, orders.id"
    assert SORT_SPECS["createdAt"].order_by == "ORDER BY orders.created_at DESC, orders.id DESC"


def test_order_by_on_page_alias_keeps_direction():
    assert SORT_SPECS["price"].order_by_on("page") == "ORDER BY page.price, page.id"
    assert SORT_SPECS["createdAt"].order_by_on("page") == "ORDER BY page.created_at DESC, page.id DESC"
