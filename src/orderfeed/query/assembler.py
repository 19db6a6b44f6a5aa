"""Assemble the bounded asks query from filters, cursor and sort mode."""

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from sqlalchemy import bindparam, text
from sqlalchemy.sql.elements import TextClause
from sqlalchemy.types import TypeEngine

from ..errors import InvalidSortForFilter
from ..orders.order_models import FilterRequest
from .filter_compiler import compile_filters
from .pagination import SORT_SPECS, decode_continuation, resume_predicate

MAX_LIMIT = 100

ORDER_COLUMNS = (
    "id",
    "kind",
    "side",
    "token_set_id",
    "token_set_schema_hash",
    "contract",
    "maker",
    "taker",
    "currency",
    "price",
    "value",
    "currency_price",
    "currency_value",
    "valid_from",
    "valid_until",
    "source_id_int",
    "fee_bps",
    "fee_breakdown",
    "expiration",
    "fillability_status",
    "approval_status",
    "created_at",
    "updated_at",
)

RAW_DATA_COLUMN = "raw_data"

# Alias of the paged subquery the metadata joins hang off
PAGE = "page"

# One join path per token-set kind; the projector picks the columns that
# belong to the order's kind.
METADATA_COLUMNS = """
    tokens.token_id AS meta_token_id,
    tokens.name AS meta_token_name,
    tokens.image AS meta_token_image,
    token_collections.name AS meta_token_collection_name,
    set_collections.id AS meta_set_collection_id,
    set_collections.name AS meta_set_collection_name,
    set_collections.image_url AS meta_set_collection_image,
    attribute_keys.key AS meta_attribute_key,
    attributes.value AS meta_attribute_value,
    attribute_collections.name AS meta_attribute_collection_name,
    attribute_collections.image_url AS meta_attribute_collection_image"""

# Every join is a primary-key lookup derived from the page row. The token id
# starts after "token:<contract>:"; 'contract:' is 9 characters, 'range:' 6.
METADATA_JOINS = f"""
    LEFT JOIN tokens
        ON {PAGE}.token_set_id LIKE 'token:%'
        AND tokens.contract = {PAGE}.contract
        AND tokens.token_id = substr({PAGE}.token_set_id, length({PAGE}.contract) + 8)
    LEFT JOIN collections AS token_collections
        ON token_collections.id = tokens.collection_id
    LEFT JOIN collections AS set_collections
        ON set_collections.id = CASE
            WHEN {PAGE}.token_set_id LIKE 'contract:%' THEN substr({PAGE}.token_set_id, 10)
            WHEN {PAGE}.token_set_id LIKE 'range:%' THEN substr({PAGE}.token_set_id, 7)
        END
    LEFT JOIN token_sets
        ON {PAGE}.token_set_id LIKE 'list:%'
        AND token_sets.id = {PAGE}.token_set_id
        AND token_sets.schema_hash = {PAGE}.token_set_schema_hash
    LEFT JOIN attributes
        ON attributes.id = token_sets.attribute_id
    LEFT JOIN attribute_keys
        ON attribute_keys.id = attributes.attribute_key_id
    LEFT JOIN collections AS attribute_collections
        ON attribute_collections.id = attribute_keys.collection_id"""


@dataclass(frozen=True)
class Query:
    """A parameterized query ready for the store."""
    sql: str
    params: Dict[str, Any]
    param_types: Dict[str, TypeEngine] = field(default_factory=dict)
    label: str = "asks"
    limit: int = MAX_LIMIT

    def statement(self) -> TextClause:
        return text(self.sql).bindparams(
            *[
                bindparam(name, value, type_=self.param_types.get(name))
                for name, value in self.params.items()
            ]
        )


def clamp_limit(limit: int) -> int:
    return max(1, min(limit, MAX_LIMIT))


def query_label(request: FilterRequest, side: str) -> str:
    """Describe the query class without parameter values (safe to log)."""
    dimensions = [
        name
        for name in ("ids", "token", "contracts", "maker", "status", "continuation")
        if getattr(request, name)
    ]
    return f"{side}:{request.sort_by}:{'+'.join(dimensions) or 'none'}"


def validate_sort(request: FilterRequest) -> None:
    """
    Raises:
        InvalidSortForFilter: If price sort is requested without a token filter
    """
    if request.sort_by == "price" and not request.token:
        raise InvalidSortForFilter("sortBy=price is only available when filtering by token")


def _column_list(table: str, columns: Tuple[str, ...]) -> str:
    return ",\n".join(f"    {table}.{column}" for column in columns)


def assemble_asks_query(request: FilterRequest, side: str = "sell") -> Query:
    """
    Build the single bounded query serving one page of orders.

    All validation (filter combination, sort coupling, continuation shape)
    happens here, before anything reaches the store. With metadata
    requested, the filtered and limited page becomes a subquery and the
    metadata joins only run against its rows.

    Args:
        request: Filter request
        side: Order side served by this engine instance

    Returns:
        Query with SQL text, bound parameters and the clamped limit
    """
    validate_sort(request)
    builder = compile_filters(request, side=side)

    if request.continuation:
        continuation = decode_continuation(request.continuation, request.sort_by)
        builder.add(resume_predicate(continuation, builder.bind))

    limit = clamp_limit(request.limit)
    builder.bind("limit", limit)

    columns = ORDER_COLUMNS
    if request.include_raw_data:
        columns += (RAW_DATA_COLUMN,)

    sort_spec = SORT_SPECS[request.sort_by]
    sql = "\n".join(
        part
        for part in (
            "SELECT",
            _column_list("orders", columns),
            "FROM orders",
            builder.render_where(),
            sort_spec.order_by,
            "LIMIT :limit",
        )
        if part
    )

    if request.include_metadata:
        sql = "\n".join((
            "SELECT",
            _column_list(PAGE, columns) + "," + METADATA_COLUMNS,
            f"FROM ({sql}) AS {PAGE}",
            METADATA_JOINS.strip("\n"),
            sort_spec.order_by_on(PAGE),
        ))

    return Query(
        sql=sql,
        params=dict(builder.params),
        param_types=dict(builder.param_types),
        label=query_label(request, side),
        limit=limit,
    )
