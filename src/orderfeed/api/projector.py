"""Turn raw order rows into API-shaped AskOrder records."""

import json
from decimal import InvalidOperation
from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError

from ..errors import ProjectionFailure
from ..orders.currencies import default_currency
from ..orders.order_models import AskOrder, FeeBreakdownEntry, OrderMetadata, Price, PriceAmount
from ..orders.pricing import get_net_amount, to_decimal
from ..orders.status import classify_status
from ..orders.token_sets import (
    AttributeList,
    ContractWide,
    SingleToken,
    TokenRange,
    TokenSetRef,
    parse_token_set,
)
from ..sources.directory import SourceDirectory
from ..utils.time import epoch_to_utc_z

REQUIRED_FIELDS = (
    "id",
    "side",
    "token_set_id",
    "maker",
    "price",
    "valid_from",
    "fillability_status",
    "approval_status",
    "created_at",
    "updated_at",
)


def _load_json(row: Mapping[str, Any], field: str) -> Any:
    """Decode a JSON column. Drivers with native JSON support return it decoded."""
    value = row.get(field)
    if value is None or not isinstance(value, (str, bytes)):
        return value
    try:
        return json.loads(value)
    except (json.JSONDecodeError, TypeError) as e:
        raise ProjectionFailure(f"Order {row.get('id')}: column {field} is not valid JSON") from e


def build_price(row: Mapping[str, Any], side: str, chain_id: int) -> Price:
    """
    Gross and net price in both currency and native units.

    Gross is the currency price when present, else the native price. Net
    removes fee_bps from each.
    """
    native = to_decimal(row["price"])
    gross = to_decimal(row["currency_price"]) if row.get("currency_price") is not None else native
    fee_bps = row.get("fee_bps")
    currency = row.get("currency") or default_currency(side, chain_id)
    return Price(
        currency=currency,
        gross=PriceAmount(amount=float(gross), native_amount=float(native)),
        net=PriceAmount(
            amount=float(get_net_amount(gross, fee_bps)),
            native_amount=float(get_net_amount(native, fee_bps)),
        ),
    )


def build_metadata(token_set: Optional[TokenSetRef], row: Mapping[str, Any]) -> Optional[OrderMetadata]:
    """Uniform {kind, data} metadata from the join path matching the token set kind."""
    if isinstance(token_set, SingleToken):
        if row.get("meta_token_id") is None:
            return None
        return OrderMetadata(
            kind="token",
            data={
                "collectionName": row.get("meta_token_collection_name"),
                "tokenName": row.get("meta_token_name"),
                "image": row.get("meta_token_image"),
            },
        )
    if isinstance(token_set, (ContractWide, TokenRange)):
        if row.get("meta_set_collection_id") is None:
            return None
        return OrderMetadata(
            kind="collection",
            data={
                "collectionName": row.get("meta_set_collection_name"),
                "image": row.get("meta_set_collection_image"),
            },
        )
    if isinstance(token_set, AttributeList):
        if row.get("meta_attribute_key") is None:
            return None
        return OrderMetadata(
            kind="attribute",
            data={
                "collectionName": row.get("meta_attribute_collection_name"),
                "attributes": [
                    {"key": row.get("meta_attribute_key"), "value": row.get("meta_attribute_value")}
                ],
                "image": row.get("meta_attribute_collection_image"),
            },
        )
    return None


def _fee_breakdown(row: Mapping[str, Any]) -> Optional[List[FeeBreakdownEntry]]:
    entries = _load_json(row, "fee_breakdown")
    if entries is None:
        return None
    if not isinstance(entries, list):
        raise ProjectionFailure(f"Order {row.get('id')}: fee_breakdown is not a list")
    return [FeeBreakdownEntry(**entry) for entry in entries]


def project_row(
    row: Mapping[str, Any],
    sources: SourceDirectory,
    *,
    side: str = "sell",
    chain_id: int = 1,
    include_metadata: bool = False,
    include_raw_data: bool = False,
) -> AskOrder:
    """
    Project one store row.

    Args:
        row: Row mapping as returned by the asks query
        sources: Attribution directory (one lookup per row)
        side: Engine side, picks the default currency
        chain_id: Chain for default currency addresses
        include_metadata: Attach the {kind, data} metadata object
        include_raw_data: Attach the raw exchange payload

    Raises:
        ProjectionFailure: If the row is missing required fields or holds
            values of the wrong shape
    """
    missing = [name for name in REQUIRED_FIELDS if row.get(name) is None]
    if missing:
        raise ProjectionFailure(f"Order {row.get('id')}: missing {', '.join(missing)}")

    token_set = parse_token_set(row["token_set_id"])

    try:
        if isinstance(token_set, SingleToken):
            source = sources.resolve(row.get("source_id_int"), token_set.contract, token_set.token_id)
        else:
            source = sources.resolve(row.get("source_id_int"))
        raw_data = _load_json(row, "raw_data") if include_raw_data else None
        return AskOrder(
            id=row["id"],
            kind=row.get("kind"),
            side=row["side"],
            status=classify_status(row["fillability_status"], row["approval_status"]).value,
            token_set_id=row["token_set_id"],
            token_set_schema_hash=row.get("token_set_schema_hash"),
            contract=row.get("contract"),
            maker=row["maker"],
            taker=row.get("taker"),
            price=build_price(row, side, chain_id),
            valid_from=int(row["valid_from"]),
            valid_until=int(row.get("valid_until") or 0),
            metadata=build_metadata(token_set, row) if include_metadata else None,
            source=source,
            fee_bps=float(row["fee_bps"]) if row.get("fee_bps") is not None else None,
            fee_breakdown=_fee_breakdown(row),
            expiration=int(row.get("expiration") or 0),
            created_at=epoch_to_utc_z(row["created_at"]),
            updated_at=epoch_to_utc_z(row["updated_at"]),
            raw_data=raw_data,
        )
    except (ValidationError, InvalidOperation, TypeError, ValueError) as e:
        raise ProjectionFailure(f"Order {row.get('id')}: {e}") from e


def project_rows(rows: List[Dict[str, Any]], sources: SourceDirectory, **options) -> List[AskOrder]:
    """Project rows, keeping query order (continuation tokens depend on it)."""
    return [project_row(row, sources, **options) for row in rows]
