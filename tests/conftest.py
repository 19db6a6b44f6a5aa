"""Pytest configuration and fixtures."""

import json

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from orderfeed.database.schema import Base, Order
from orderfeed.orders.currencies import NULL_ADDRESS
from orderfeed.sources.directory import SourceDirectory

CONTRACT = "0x" + "ab" * 20
OTHER_CONTRACT = "0x" + "cd" * 20
MAKER = "0x" + "11" * 20
OTHER_MAKER = "0x" + "22" * 20
SCHEMA_HASH = "0x" + "00" * 32
BASE_TIME = 1_700_000_000


def order_id(n: int) -> str:
    """Fixed-format 32-byte order id."""
    return "0x" + format(n, "064x")


def order_values(n: int, **overrides) -> dict:
    values = dict(
        id=order_id(n),
        kind="seaport",
        side="sell",
        token_set_id=f"token:{CONTRACT}:1",
        token_set_schema_hash=SCHEMA_HASH,
        contract=CONTRACT,
        maker=MAKER,
        taker=NULL_ADDRESS,
        currency=None,
        price=1.0,
        value=1.0,
        currency_price=None,
        currency_value=None,
        valid_from=BASE_TIME,
        valid_until=None,
        source_id_int=1,
        fee_bps=250,
        fee_breakdown=json.dumps([{"kind": "marketplace", "recipient": MAKER, "bps": 250}]),
        expiration=None,
        fillability_status="fillable",
        approval_status="approved",
        raw_data=json.dumps({"kind": "seaport", "salt": str(n)}),
        created_at=float(BASE_TIME + n),
        updated_at=float(BASE_TIME + n),
    )
    values.update(overrides)
    return values


@pytest.fixture
def session():
    """Create a temporary in-memory database session for testing."""
    engine = create_engine("sqlite:///:memory:", echo=False)
    Base.metadata.create_all(engine)

    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()

    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def add_orders(session):
    """Insert orders built from order_values(n, **overrides)."""

    def _add(*specs):
        rows = []
        for spec in specs:
            if isinstance(spec, int):
                spec = (spec, {})
            n, overrides = spec
            rows.append(Order(**order_values(n, **overrides)))
        session.add_all(rows)
        session.commit()
        return rows

    return _add


@pytest.fixture
def sources():
    return SourceDirectory.from_config(
        {
            "version": 1,
            "sources": [
                {
                    "id": 1,
                    "address": "0x5B3256965E7C3CF26E11FCAF296DFC8807C01073",
                    "name": "opensea",
                    "domain": "opensea.io",
                    "metadata": {
                        "title": "OpenSea",
                        "icon": "https://opensea.io/icon.svg",
                        "url": "https://opensea.io",
                        "token_url": "https://opensea.io/assets/{contract}/{token_id}",
                    },
                },
                {
                    "id": 2,
                    "address": "0x5924a28caaf1cc016617874a2f0c3710d881f3c1",
                    "name": "looksrare",
                },
            ],
        }
    )
