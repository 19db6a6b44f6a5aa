"""Compile a FilterRequest into AND-ed predicate clauses."""

import re
from typing import List

from ..errors import InvalidFilterCombination, InvalidFilterValue
from ..orders.currencies import NULL_ADDRESS
from ..orders.order_models import FilterRequest
from ..orders.status import ApprovalStatus, FillabilityStatus
from ..orders.token_sets import single_token_set_id
from .predicates import (
    AllOf,
    AnyOf,
    Compare,
    Const,
    InList,
    IsNull,
    Predicate,
    PredicateBuilder,
)

ADDRESS_RE = re.compile(r"^0x[a-f0-9]{40}$")
MAX_CONTRACTS = 50


def fillable_predicate() -> Predicate:
    """Default status predicate: fillable and approved."""
    return AllOf((
        Compare("orders.fillability_status", "=", Const(FillabilityStatus.FILLABLE.value)),
        Compare("orders.approval_status", "=", Const(ApprovalStatus.APPROVED.value)),
    ))


def potentially_valid_predicate() -> Predicate:
    """Inactive variant: no balance, or fillable but missing approval."""
    return AnyOf((
        Compare("orders.fillability_status", "=", Const(FillabilityStatus.NO_BALANCE.value)),
        AllOf((
            Compare("orders.fillability_status", "=", Const(FillabilityStatus.FILLABLE.value)),
            Compare("orders.approval_status", "!=", Const(ApprovalStatus.APPROVED.value)),
        )),
    ))


def public_taker_predicate() -> Predicate:
    # Zero-address and NULL takers are both public; keep both checks
    return AnyOf((
        Compare("orders.taker", "=", Const(NULL_ADDRESS)),
        IsNull("orders.taker"),
    ))


def normalize_contracts(contracts) -> List[str]:
    """
    Lower-case and validate a contract filter for raw inlining.

    Raises:
        InvalidFilterValue: If there are more than 50 entries or an entry is
            not a 0x-prefixed 20-byte hex address
    """
    if isinstance(contracts, str):
        contracts = [contracts]
    normalized = [c.strip().lower() for c in contracts]
    if not normalized:
        raise InvalidFilterValue("contracts filter must not be empty")
    if len(normalized) > MAX_CONTRACTS:
        raise InvalidFilterValue(f"contracts filter accepts at most {MAX_CONTRACTS} addresses")
    for contract in normalized:
        if not ADDRESS_RE.match(contract):
            raise InvalidFilterValue(f"Invalid contract address: {contract!r}")
    return normalized


def validate_filter_request(request: FilterRequest) -> None:
    """
    Check the filter combination before anything is compiled.

    Raises:
        InvalidFilterCombination: If no anchoring filter is present, or status
            is given without maker
    """
    if not any([request.ids, request.token, request.contracts, request.maker]):
        raise InvalidFilterCombination(
            "At least one of ids, token, contracts or maker must be provided"
        )
    if request.status is not None and not request.maker:
        raise InvalidFilterCombination("status is only available when filtering by maker")


def compile_filters(request: FilterRequest, side: str = "sell") -> PredicateBuilder:
    """
    Translate a filter request into predicate clauses plus bound parameters.

    Clause order: side, ids, token, contracts, maker, visibility, status.

    Args:
        request: Validated-upstream filter request
        side: Order side served by this engine instance

    Returns:
        PredicateBuilder holding the clauses and parameters
    """
    validate_filter_request(request)

    builder = PredicateBuilder()
    builder.add(Compare("orders.side", "=", Const(side)))
    status_predicate = fillable_predicate()

    if request.ids:
        if isinstance(request.ids, str):
            builder.add(Compare("orders.id", "=", builder.bind("id", request.ids)))
        else:
            builder.add(InList("orders.id", builder.bind_many("ids", request.ids)))

    if request.token:
        token_set_id = single_token_set_id(request.token)
        builder.add(Compare("orders.token_set_id", "=", builder.bind("token_set_id", token_set_id)))

    if request.contracts:
        contracts = normalize_contracts(request.contracts)
        builder.add(InList("orders.contract", tuple(Const(c) for c in contracts)))

    if request.maker:
        if request.status == "inactive":
            status_predicate = potentially_valid_predicate()
        builder.add(Compare("orders.maker", "=", builder.bind("maker", request.maker.lower())))

    if not request.include_private:
        builder.add(public_taker_predicate())

    builder.add(status_predicate)
    return builder
