"""Tests for token-set reference parsing."""

from orderfeed.orders.token_sets import (
    AttributeList,
    ContractWide,
    SingleToken,
    TokenRange,
    parse_token_set,
    single_token_set_id,
)

CONTRACT = "0x" + "ab" * 20


def test_single_token():
    ref = parse_token_set(f"token:{CONTRACT}:42")
    assert ref == SingleToken(contract=CONTRACT, token_id="42")
    assert ref.token_set_id == f"token:{CONTRACT}:42"


def test_contract_wide():
    assert parse_token_set(f"contract:{CONTRACT}") == ContractWide(collection_id=CONTRACT)


def test_range_keeps_full_collection_id():
    ref = parse_token_set(f"range:{CONTRACT}:0:999")
    assert ref == TokenRange(collection_id=f"{CONTRACT}:0:999")
    assert ref.token_set_id == f"range:{CONTRACT}:0:999"


def test_attribute_list():
    ref = parse_token_set("list:0x" + "12" * 32)
    assert isinstance(ref, AttributeList)
    assert ref.list_id == "0x" + "12" * 32


def test_unknown_and_malformed_ids():
    assert parse_token_set(None) is None
    assert parse_token_set("") is None
    assert parse_token_set("dynamic:collection-non-flagged:abc") is None
    assert parse_token_set("token:") is None
    assert parse_token_set(f"token:{CONTRACT}") is None


def test_single_token_set_id_lowercases_filter():
    assert single_token_set_id("0xABAB" + "ab" * 18 + ":7") == f"token:{CONTRACT}:7"
