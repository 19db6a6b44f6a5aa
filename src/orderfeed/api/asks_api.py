"""Asks API: keyset-paginated listing of sell orders."""

from sqlalchemy.orm import Session

from ..database.order_repo import fetch_order_rows
from ..errors import OrderFeedError, ProjectionFailure, ServerError
from ..orders.order_models import FilterRequest, OrdersPage
from ..query.assembler import assemble_asks_query
from ..query.pagination import continuation_for_row
from ..sources.directory import SourceDirectory
from ..utils.logging import get_logger
from .projector import project_rows

logger = get_logger(__name__)


def list_asks(
    session: Session,
    request: FilterRequest,
    sources: SourceDirectory,
    side: str = "sell",
    chain_id: int = 1,
) -> OrdersPage:
    """
    Return one page of orders and the token for the next page.

    Args:
        session: SQLAlchemy session
        request: Filter request (ids, token, contracts, maker, status, ...)
        sources: Attribution directory built at startup
        side: Side served by this instance ("sell" for asks)
        chain_id: Chain id used for default currency addresses

    Returns:
        OrdersPage. continuation is None when the page is shorter than the
        clamped limit (end of stream).

    Raises:
        RequestValidationError: Invalid filter combination, sort/filter
            pairing or continuation token (nothing is queried)
        UpstreamQueryFailure: The store call failed
        ProjectionFailure: A row could not be projected, or the last row
            cannot form a continuation token
    """
    query = assemble_asks_query(request, side=side)
    rows = fetch_order_rows(session, query)

    try:
        orders = project_rows(
            rows,
            sources,
            side=side,
            chain_id=chain_id,
            include_metadata=request.include_metadata,
            include_raw_data=request.include_raw_data,
        )
    except ProjectionFailure as e:
        logger.error(f"Projection failed [{query.label}]: {e.message}")
        raise

    continuation = None
    if len(rows) == query.limit:
        continuation = continuation_for_row(request.sort_by, rows[-1])

    return OrdersPage(orders=orders, continuation=continuation)


def list_asks_response(
    session: Session,
    request: FilterRequest,
    sources: SourceDirectory,
    side: str = "sell",
    chain_id: int = 1,
) -> tuple[int, dict]:
    """
    Status code and JSON body for a listing call.

    Validation errors become 400 bodies; server errors become an opaque 500.
    """
    try:
        page = list_asks(session, request, sources, side=side, chain_id=chain_id)
    except ServerError as e:
        return e.status_code, {"error": "InternalError", "message": "Internal server error"}
    except OrderFeedError as e:
        return e.status_code, e.to_dict()
    return 200, page.to_response(
        include_metadata=request.include_metadata,
        include_raw_data=request.include_raw_data,
    )
