"""Keyset pagination: continuation tokens and the resume predicate.

A continuation token is base64 of "<sortBy>|<key>_<id>" where key is the last
row's sort value (price, or created_at epoch seconds) and id breaks ties.
"""

import base64
import binascii
import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from sqlalchemy.types import Numeric

from ..errors import InvalidContinuation, ProjectionFailure
from ..orders.pricing import to_decimal
from .predicates import Bind, Predicate, TupleCompare

SORT_MODES = ("createdAt", "price")
CONTINUATION_SHAPE = re.compile(r"([0-9]+(?:\.[0-9]+)?)_(0x[a-f0-9]{64})")


@dataclass(frozen=True)
class SortSpec:
    """Sort column and direction. ORDER BY and the resume predicate both derive from it."""
    field: str
    descending: bool

    @property
    def column(self) -> str:
        return f"orders.{self.field}"

    @property
    def order_by(self) -> str:
        return self.order_by_on("orders")

    def order_by_on(self, table: str) -> str:
        """ORDER BY against another alias carrying the same columns (e.g. a paged subquery)."""
        direction = " DESC" if self.descending else ""
        return f"ORDER BY {table}.{self.field}{direction}, {table}.id{direction}"

    @property
    def resume_operator(self) -> str:
        return "<" if self.descending else ">"


SORT_SPECS = {
    "price": SortSpec(field="price", descending=False),
    "createdAt": SortSpec(field="created_at", descending=True),
}


@dataclass(frozen=True)
class Continuation:
    sort_by: str
    key: Decimal
    id: str


def format_sort_key(value: Any) -> str:
    """Render a numeric sort value in plain (non-exponent) notation."""
    try:
        key = to_decimal(value)
    except (InvalidOperation, ValueError) as e:
        raise ValueError(f"Sort key is not numeric: {value!r}") from e
    text = format(key, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".") or "0"
    return text


def encode_continuation(sort_by: str, key: Any, order_id: str) -> str:
    """
    Build an opaque continuation token.

    Args:
        sort_by: Sort mode in force ("price" or "createdAt")
        key: Last row's sort value
        order_id: Last row's id

    Returns:
        Base64 token
    """
    if sort_by not in SORT_MODES:
        raise ValueError(f"Unknown sort mode: {sort_by}")
    payload = f"{sort_by}|{format_sort_key(key)}_{order_id}"
    return base64.b64encode(payload.encode("utf-8")).decode("ascii")


def decode_continuation(token: str, sort_by: str) -> Continuation:
    """
    Parse and validate a continuation token for the active sort mode.

    Raises:
        InvalidContinuation: If the token is not base64, does not match the
            expected shape, or was issued for another sort mode
    """
    try:
        payload = base64.b64decode(token.encode("ascii"), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeError, ValueError) as e:
        raise InvalidContinuation("Continuation token is not valid base64") from e

    token_sort_by, sep, rest = payload.partition("|")
    if not sep:
        raise InvalidContinuation("Continuation token is malformed")
    if token_sort_by != sort_by:
        raise InvalidContinuation(
            f"Continuation token was issued for sortBy={token_sort_by}, not sortBy={sort_by}"
        )

    match = CONTINUATION_SHAPE.fullmatch(rest)
    if not match:
        raise InvalidContinuation("Continuation token is malformed")
    return Continuation(sort_by=sort_by, key=Decimal(match.group(1)), id=match.group(2))


def continuation_for_row(sort_by: str, row: Mapping[str, Any]) -> str:
    """
    Token that resumes right after the given row.

    Raises:
        ProjectionFailure: If the row's sort key or id cannot form a token
            that decode_continuation would accept
    """
    try:
        key = format_sort_key(row[SORT_SPECS[sort_by].field])
    except ValueError as e:
        raise ProjectionFailure(f"Order {row.get('id')}: {e}") from e
    if not CONTINUATION_SHAPE.fullmatch(f"{key}_{row.get('id')}"):
        raise ProjectionFailure(f"Order {row.get('id')}: cannot build a continuation token from this row")
    return encode_continuation(sort_by, key, row["id"])


def resume_predicate(continuation: Continuation, bind) -> Predicate:
    """
    Tuple comparison that resumes strictly after the cursor.

    Args:
        continuation: Decoded cursor
        bind: Callable registering a parameter, returning its Bind
            (PredicateBuilder.bind)
    """
    spec = SORT_SPECS[continuation.sort_by]
    key: Bind = bind("cursor_key", continuation.key, Numeric())
    order_id: Bind = bind("cursor_id", continuation.id)
    return TupleCompare(
        columns=(spec.column, "orders.id"),
        op=spec.resume_operator,
        operands=(key, order_id),
    )
