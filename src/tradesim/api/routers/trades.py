"""Market order endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from tradesim.api.deps import get_ledger_service
from tradesim.api.schemas import OrderRequest, TransactionResponse, TransactionListResponse
from tradesim.config.settings import get_settings
from tradesim.core.exceptions import ValidationError
from tradesim.core.timezone import parse_datetime_eastern
from tradesim.services import LedgerService

router = APIRouter(prefix="/accounts", tags=["trades"])


@router.post("/{account_id}/buy", response_model=TransactionResponse, status_code=201)
def buy(
    account_id: str,
    order: OrderRequest,
    service: LedgerService = Depends(get_ledger_service),
) -> TransactionResponse:
    """Buy shares at the current simulated price."""
    txn = service.buy(account_id, order.symbol, order.shares)
    return TransactionResponse.model_validate(txn)


@router.post("/{account_id}/sell", response_model=TransactionResponse, status_code=201)
def sell(
    account_id: str,
    order: OrderRequest,
    service: LedgerService = Depends(get_ledger_service),
) -> TransactionResponse:
    """Sell shares at the current simulated price."""
    txn = service.sell(account_id, order.symbol, order.shares)
    return TransactionResponse.model_validate(txn)


@router.get("/{account_id}/transactions", response_model=TransactionListResponse)
def list_transactions(
    account_id: str,
    limit: Optional[int] = Query(None, ge=1, le=1000),
    since: Optional[str] = Query(
        None, description="Only orders at or after this time (naive values are US/Eastern)"
    ),
    service: LedgerService = Depends(get_ledger_service),
) -> TransactionListResponse:
    """Order history, newest first."""
    if limit is None:
        limit = get_settings().transaction_history_limit
    since_est = None
    if since:
        try:
            since_est = parse_datetime_eastern(since)
        except (ValueError, OverflowError) as e:
            raise ValidationError(f"Invalid since timestamp: {since}") from e
    transactions = service.list_transactions(account_id, limit=limit, since=since_est)
    return TransactionListResponse(
        transactions=[TransactionResponse.model_validate(t) for t in transactions],
        count=len(transactions),
    )
