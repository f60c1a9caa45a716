"""GET /v1/dashboard - period totals, comparisons and category rows for one view"""

import time
import logging
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request

from cashflow_gateway.api.dependencies import get_ledger_reader, get_request_id
from cashflow_gateway.api.v1.schemas import (
    BudgetProgressSchema,
    CategoryRowSchema,
    DashboardResponse,
    MonthSummarySchema,
    PeriodTotalsSchema,
    PreviousPeriodSchema,
    TrendPointSchema,
    TrendSchema,
    WaterfallStepSchema,
)
from cashflow_gateway.domain.dashboard import Dashboard, DashboardQuery, build_dashboard
from cashflow_gateway.domain.exceptions import InvalidLedgerDataError, LedgerUnavailableError
from cashflow_gateway.domain.models import CategoryTotalRow
from cashflow_gateway.domain.periods import ViewMode
from cashflow_gateway.domain.trends import is_favorable, percentage_change
from cashflow_gateway.infrastructure.observability.logging import log_dashboard
from cashflow_gateway.infrastructure.observability.metrics import record_dashboard
from cashflow_gateway.infrastructure.snapshot import load_snapshot
from cashflow_gateway.utils.parsing import parse_bool, parse_int

router = APIRouter()


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    request: Request,
    year: Optional[str] = Query(None, description="Year to view, defaults to the current year"),
    view: Optional[str] = Query(None, description="full | month | ytd | range"),
    month: Optional[str] = Query(None, description="Month for month and ytd views"),
    month_from: Optional[str] = Query(None, description="First month of a range"),
    month_to: Optional[str] = Query(None, description="Last month of a range"),
    hide_empty: Optional[str] = Query(None, description="Hide categories without actuals"),
    reader=Depends(get_ledger_reader),
):
    """
    Compute the cashflow dashboard for a period of a year.

    Flow:
    1. Parse view parameters leniently (bad values fall back to defaults)
    2. Load current year, previous year, categories and settings concurrently
    3. Aggregate and compare
    4. Return totals, trends and category rows
    """
    start_time = time.time()
    request_id = get_request_id(request)
    today = date.today()

    query = DashboardQuery(
        year=parse_int(year, today.year),
        view=ViewMode.parse(view),
        month=parse_int(month, today.month),
        month_from=parse_int(month_from, 1),
        month_to=parse_int(month_to, 12),
        hide_empty=parse_bool(hide_empty),
    )

    try:
        snapshot = await load_snapshot(reader, query.year)

    except LedgerUnavailableError as e:
        logging.error(f"Ledger unavailable: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Ledger service unavailable")

    except InvalidLedgerDataError as e:
        logging.error(f"Invalid ledger data: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=502, detail="Ledger returned invalid data")

    dashboard = build_dashboard(snapshot, query, today=today)

    duration_ms = (time.time() - start_time) * 1000
    record_dashboard(dashboard.view.value, len(dashboard.scope))
    log_dashboard(
        request_id,
        dashboard.year,
        dashboard.view.value,
        len(dashboard.scope),
        len(dashboard.category_rows),
        duration_ms,
    )

    return to_response(dashboard)


def to_response(dashboard: Dashboard) -> DashboardResponse:
    """Map the domain dashboard onto the response schema"""
    previous = dashboard.previous

    return DashboardResponse(
        year=dashboard.year,
        view=dashboard.view.value,
        label=dashboard.label,
        currency=dashboard.currency,
        months_in_scope=dashboard.scope,
        months=[MonthSummarySchema.model_validate(m) for m in dashboard.period_months],
        totals=PeriodTotalsSchema.model_validate(dashboard.totals),
        previous_period=PreviousPeriodSchema(
            months=[f"{y}-{m:02d}" for y, m in previous.months],
            income=previous.totals.income,
            expenses=previous.totals.expenses,
            investments=previous.totals.investments,
            net=previous.totals.net,
        ),
        trends={
            metric: TrendSchema.model_validate(change) if change else None
            for metric, change in dashboard.kpi_trends.items()
        },
        trend_points=[TrendPointSchema.model_validate(p) for p in dashboard.trend_points],
        category_rows=[_category_row(r) for r in dashboard.category_rows],
        progress=[BudgetProgressSchema.model_validate(p) for p in dashboard.progress],
        waterfall=[WaterfallStepSchema.model_validate(s) for s in dashboard.waterfall],
    )


def _category_row(row: CategoryTotalRow) -> CategoryRowSchema:
    trend = percentage_change(row.actual, row.previous_actual)
    return CategoryRowSchema(
        category_id=row.category_id,
        name=row.name,
        type=row.type.value,
        plan=row.plan,
        actual=row.actual,
        previous_actual=row.previous_actual,
        difference=row.difference,
        trend=TrendSchema.model_validate(trend) if trend else None,
        favorable=is_favorable(row.type, row.actual, row.previous_actual),
    )
