"""Instrument catalog endpoints."""

from fastapi import APIRouter, Depends

from tradesim.api.deps import get_instrument_catalog
from tradesim.api.schemas import InstrumentResponse, InstrumentListResponse
from tradesim.core.exceptions import InstrumentUnavailableError
from tradesim.services import InstrumentCatalog

router = APIRouter(prefix="/instruments", tags=["instruments"])


@router.get("/", response_model=InstrumentListResponse)
def list_instruments(
    catalog: InstrumentCatalog = Depends(get_instrument_catalog),
) -> InstrumentListResponse:
    """List tradable instruments with their current prices."""
    instruments = catalog.list_active()
    return InstrumentListResponse(
        instruments=[InstrumentResponse.model_validate(i) for i in instruments],
        count=len(instruments),
    )


@router.get("/{symbol}", response_model=InstrumentResponse)
def get_instrument(
    symbol: str,
    catalog: InstrumentCatalog = Depends(get_instrument_catalog),
) -> InstrumentResponse:
    """Get a single instrument."""
    instrument = catalog.get(symbol)
    if instrument is None:
        raise InstrumentUnavailableError(symbol.upper())
    return InstrumentResponse.model_validate(instrument)
