"""Pydantic models for filter requests and projected ask orders."""

from typing import Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

SortBy = Literal["createdAt", "price"]
StatusFilter = Literal["active", "inactive"]


class FilterRequest(BaseModel):
    """One listing request. Criteria are AND-ed together."""

    model_config = ConfigDict(frozen=True)

    ids: Optional[Union[str, List[str]]] = Field(default=None, description="Order id(s) to search for")
    token: Optional[str] = Field(default=None, description="<contract>:<tokenId>")
    maker: Optional[str] = Field(default=None, description="Maker address")
    contracts: Optional[Union[str, List[str]]] = Field(default=None, description="Up to 50 contract addresses")
    status: Optional[StatusFilter] = Field(default=None, description="Only honoured together with maker")
    include_private: bool = False
    include_metadata: bool = False
    include_raw_data: bool = False
    sort_by: SortBy = "createdAt"
    continuation: Optional[str] = None
    limit: int = Field(default=50, ge=1)


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PriceAmount(WireModel):
    amount: float
    native_amount: float


class Price(WireModel):
    currency: str
    gross: PriceAmount
    net: PriceAmount


class FeeBreakdownEntry(WireModel):
    kind: Optional[str] = None
    recipient: Optional[str] = None
    bps: Optional[float] = None


class Attribution(WireModel):
    """Source an order was listed on."""

    id: Optional[str] = None  # source address
    domain: Optional[str] = None
    name: Optional[str] = None
    icon: Optional[str] = None
    url: Optional[str] = None


class OrderMetadata(WireModel):
    kind: Literal["token", "collection", "attribute"]
    data: dict[str, Any]


class AskOrder(WireModel):
    id: str
    kind: Optional[str] = None
    side: Literal["buy", "sell"]
    status: str
    token_set_id: str
    token_set_schema_hash: Optional[str] = None
    contract: Optional[str] = None
    maker: str
    taker: Optional[str] = None
    price: Price
    valid_from: int
    valid_until: int
    metadata: Optional[OrderMetadata] = None
    source: Attribution
    fee_bps: Optional[float] = None
    fee_breakdown: Optional[List[FeeBreakdownEntry]] = None
    expiration: int
    created_at: str
    updated_at: str
    raw_data: Optional[dict[str, Any]] = None


class OrdersPage(WireModel):
    orders: List[AskOrder]
    continuation: Optional[str] = None

    def to_response(self, include_metadata: bool = False, include_raw_data: bool = False) -> dict:
        """
        Response body with wire names.

        Unset optional fields and unrequested heavy fields are dropped.
        Requested metadata is always present, null when nothing resolved.
        """
        exclude = {"metadata"}
        if not include_raw_data:
            exclude.add("raw_data")

        body = {"orders": [], "continuation": self.continuation}
        for order in self.orders:
            record = order.model_dump(by_alias=True, exclude=exclude, exclude_none=True)
            if include_metadata:
                record["metadata"] = order.metadata.model_dump(by_alias=True) if order.metadata else None
            body["orders"].append(record)
        return body
