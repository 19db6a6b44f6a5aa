from sqlalchemy import (
    Column,
    Float,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    create_engine,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class Order(Base):
    __tablename__ = "orders"

    id = Column(String, primary_key=True)  # 0x-prefixed 32-byte hash
    kind = Column(String, nullable=False)  # e.g. seaport, looks-rare
    side = Column(String, nullable=False)  # sell | buy
    token_set_id = Column(String, nullable=False, index=True)  # token:, contract:, range:, list:
    token_set_schema_hash = Column(String, nullable=True)
    contract = Column(String, nullable=True, index=True)
    maker = Column(String, nullable=False, index=True)
    taker = Column(String, nullable=True)  # null address or NULL = public
    currency = Column(String, nullable=True)  # NULL = native currency
    price = Column(Numeric, nullable=False)
    value = Column(Numeric, nullable=True)
    currency_price = Column(Numeric, nullable=True)
    currency_value = Column(Numeric, nullable=True)
    valid_from = Column(Integer, nullable=False)  # epoch seconds
    valid_until = Column(Integer, nullable=True)  # epoch seconds, NULL = unbounded
    source_id_int = Column(Integer, nullable=True)
    fee_bps = Column(Integer, nullable=True)
    fee_breakdown = Column(Text, nullable=True)  # JSON array of {kind, recipient, bps}
    expiration = Column(Integer, nullable=True)  # epoch seconds, NULL = none
    fillability_status = Column(String, nullable=False)  # fillable, filled, cancelled, expired, no-balance
    approval_status = Column(String, nullable=False)  # approved, no-approval
    raw_data = Column(Text, nullable=True)  # JSON object, exchange-specific payload
    created_at = Column(Float, nullable=False)  # epoch seconds
    updated_at = Column(Float, nullable=False)  # epoch seconds

    __table_args__ = (
        Index("idx_orders_side_created_at_id", "side", "created_at", "id"),
        Index("idx_orders_token_set_price_id", "token_set_id", "price", "id"),
    )


class Collection(Base):
    __tablename__ = "collections"

    id = Column(String, primary_key=True)  # contract, or contract:start:end for ranges
    name = Column(String, nullable=True)
    image_url = Column(String, nullable=True)


class Token(Base):
    __tablename__ = "tokens"

    contract = Column(String, primary_key=True)
    token_id = Column(String, primary_key=True)  # decimal string
    name = Column(String, nullable=True)
    image = Column(String, nullable=True)
    collection_id = Column(String, nullable=True, index=True)


class TokenSet(Base):
    __tablename__ = "token_sets"

    id = Column(String, primary_key=True)
    schema_hash = Column(String, primary_key=True)
    attribute_id = Column(Integer, nullable=True)


class Attribute(Base):
    __tablename__ = "attributes"

    id = Column(Integer, primary_key=True)
    attribute_key_id = Column(Integer, nullable=False)
    value = Column(String, nullable=False)


class AttributeKey(Base):
    __tablename__ = "attribute_keys"

    id = Column(Integer, primary_key=True)
    collection_id = Column(String, nullable=False)
    key = Column(String, nullable=False)


def create_all(engine_url: str) -> None:
    engine = create_engine(engine_url)
    Base.metadata.create_all(engine)
