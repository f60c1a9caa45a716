"""GET /v1/summary/{year} - the 12 monthly summaries with running balance"""

import asyncio
import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from cashflow_gateway.api.dependencies import get_ledger_reader, get_request_id
from cashflow_gateway.api.v1.schemas import MonthSummarySchema, YearSummaryResponse
from cashflow_gateway.domain.aggregation import summarize_year
from cashflow_gateway.domain.exceptions import InvalidLedgerDataError, LedgerUnavailableError

router = APIRouter()


@router.get("/summary/{year}", response_model=YearSummaryResponse)
async def get_year_summary(year: int, request: Request, reader=Depends(get_ledger_reader)):
    """
    Monthly totals for a whole year.

    Returns:
        12 months, zero-filled where nothing was recorded
    """
    request_id = get_request_id(request)

    try:
        ledger, ledger_settings = await asyncio.gather(reader.fetch_year(year), reader.fetch_settings())
    except LedgerUnavailableError as e:
        logging.error(f"Ledger unavailable: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Ledger service unavailable")
    except InvalidLedgerDataError as e:
        logging.error(f"Invalid ledger data: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=502, detail="Ledger returned invalid data")

    months = summarize_year(ledger.actuals, ledger.budgets, ledger_settings.initial_balance)

    return YearSummaryResponse(
        year=year,
        currency=ledger_settings.currency,
        initial_balance=ledger_settings.initial_balance,
        months=[MonthSummarySchema.model_validate(m) for m in months],
    )
