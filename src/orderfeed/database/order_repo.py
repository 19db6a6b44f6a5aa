"""Repository functions for reading the orders table."""

from typing import Any, Dict, List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..errors import UpstreamQueryFailure
from ..query.assembler import Query
from ..utils.logging import get_logger

logger = get_logger(__name__)


def fetch_order_rows(session: Session, query: Query) -> List[Dict[str, Any]]:
    """
    Execute one assembled query.

    Args:
        session: SQLAlchemy session
        query: Assembled asks query

    Returns:
        Row dicts in query order

    Raises:
        UpstreamQueryFailure: If the store call fails. Only the query label is
            logged, never the bound values.
    """
    try:
        result = session.execute(query.statement())
        rows = [dict(row) for row in result.mappings().all()]
    except SQLAlchemyError as e:
        logger.error(f"Order query failed [{query.label}]: {type(e).__name__}")
        raise UpstreamQueryFailure(f"Order query failed [{query.label}]") from e

    logger.debug(f"Order query [{query.label}] returned {len(rows)} rows (limit {query.limit})")
    return rows
