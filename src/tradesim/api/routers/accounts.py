"""Account, snapshot and transfer endpoints."""

from fastapi import APIRouter, Depends

from tradesim.api.deps import get_ledger_service
from tradesim.api.schemas import (
    AccountCreate,
    AccountResponse,
    AccountListResponse,
    SnapshotResponse,
    TransferRequest,
    TransferResponse,
    TransferListResponse,
)
from tradesim.services import LedgerService

router = APIRouter(prefix="/accounts", tags=["accounts"])


@router.post("/", response_model=AccountResponse, status_code=201)
def create_account(
    data: AccountCreate,
    service: LedgerService = Depends(get_ledger_service),
) -> AccountResponse:
    """Open a new simulated account with the starting cash balance."""
    account = service.create_account(data.name)
    return AccountResponse.model_validate(account)


@router.get("/", response_model=AccountListResponse)
def list_accounts(
    service: LedgerService = Depends(get_ledger_service),
) -> AccountListResponse:
    """List all accounts."""
    accounts = service.list_accounts()
    return AccountListResponse(
        accounts=[AccountResponse.model_validate(a) for a in accounts],
        count=len(accounts),
    )


@router.get("/{account_id}", response_model=AccountResponse)
def get_account(
    account_id: str,
    service: LedgerService = Depends(get_ledger_service),
) -> AccountResponse:
    """Get a single account."""
    return AccountResponse.model_validate(service.get_account(account_id))


@router.get("/{account_id}/snapshot", response_model=SnapshotResponse)
def get_snapshot(
    account_id: str,
    service: LedgerService = Depends(get_ledger_service),
) -> SnapshotResponse:
    """Value the account's holdings at current prices."""
    return SnapshotResponse.model_validate(service.snapshot(account_id))


@router.post("/{account_id}/transfers", response_model=TransferResponse, status_code=201)
def create_transfer(
    account_id: str,
    data: TransferRequest,
    service: LedgerService = Depends(get_ledger_service),
) -> TransferResponse:
    """Move money between cash and savings."""
    transfer = service.transfer(account_id, data.direction, data.amount, data.description)
    return TransferResponse.model_validate(transfer)


@router.get("/{account_id}/transfers", response_model=TransferListResponse)
def list_transfers(
    account_id: str,
    service: LedgerService = Depends(get_ledger_service),
) -> TransferListResponse:
    """Transfer history, newest first."""
    transfers = service.list_transfers(account_id)
    return TransferListResponse(
        transfers=[TransferResponse.model_validate(t) for t in transfers],
        count=len(transfers),
    )
