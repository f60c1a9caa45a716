"""Remote ledger HTTP client with exponential backoff retry logic"""

import asyncio
import httpx
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List
from cashflow_gateway.config import settings
from cashflow_gateway.domain.exceptions import InvalidLedgerDataError, LedgerUnavailableError
from cashflow_gateway.domain.models import (
    BudgetEntry,
    Category,
    CategoryType,
    LedgerEntry,
    LedgerSettings,
    YearLedger,
)
from cashflow_gateway.infrastructure.observability.metrics import ledger_fetch_latency_histogram


class LedgerClient:
    """Ledger reader backed by an external ledger API"""

    source = "http"

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.ledger_api_base or "").rstrip("/")
        self.timeout = timeout or settings.http_timeout_seconds
        self.max_retries = settings.ledger_max_retries
        self.backoff_base = settings.ledger_backoff_base
        self.transport = transport

    async def fetch_year(self, year: int) -> YearLedger:
        """
        Fetch actual and budget entries for a year.

        Raises:
            LedgerUnavailableError: On timeout, HTTP errors, or exhausted retries
            InvalidLedgerDataError: When the payload is missing fields or has bad amounts
        """
        data = await self._get(f"/ledger/{year}")
        try:
            return YearLedger(
                year=year,
                actuals=[LedgerEntry(**_entry_fields(year, item)) for item in data.get("actuals", [])],
                budgets=[BudgetEntry(**_entry_fields(year, item)) for item in data.get("budgets", [])],
            )
        except (KeyError, ValueError, TypeError, InvalidOperation, AttributeError) as e:
            raise InvalidLedgerDataError(f"Invalid ledger data for {year}: {e}") from e

    async def fetch_categories(self, active_only: bool = True) -> List[Category]:
        """Fetch categories in display order"""
        data = await self._get("/categories", params={"active_only": str(active_only).lower()})
        try:
            categories = [
                Category(
                    id=int(item["id"]),
                    name=item["name"],
                    type=CategoryType(item["type"].upper()),
                    is_active=bool(item.get("is_active", True)),
                    sort_order=int(item.get("sort_order", 0)),
                )
                for item in data.get("categories", [])
            ]
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise InvalidLedgerDataError(f"Invalid category data: {e}") from e

        if active_only:
            categories = [c for c in categories if c.is_active]
        return sorted(categories, key=lambda c: (c.sort_order, c.id))

    async def fetch_settings(self) -> LedgerSettings:
        """Fetch opening balance and currency"""
        data = await self._get("/settings")
        try:
            return LedgerSettings(
                initial_balance=_decimal(data.get("initial_balance", 0)),
                currency=data.get("currency") or settings.default_currency,
            )
        except (ValueError, TypeError, InvalidOperation) as e:
            raise InvalidLedgerDataError(f"Invalid settings data: {e}") from e

    async def _get(self, path: str, params: Dict[str, Any] | None = None) -> Dict[str, Any]:
        """
        GET a JSON document from the ledger with retry logic.

        Retry strategy:
        - Exponential backoff: base * 2^(attempt-1)
        - Retries on 5xx errors and network failures; 4xx fails immediately
        - Tracks latency histogram per attempt
        """
        attempt = 0
        async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=self.transport) as client:
            while True:
                try:
                    with ledger_fetch_latency_histogram.time():
                        response = await client.get(path, params=params)
                        response.raise_for_status()
                    return response.json()

                except httpx.HTTPStatusError as e:
                    if e.response.status_code < 500:
                        raise LedgerUnavailableError(f"Ledger API error: {e.response.status_code}") from e
                    error = e
                except httpx.RequestError as e:  # includes timeouts
                    error = e
                except ValueError as e:
                    raise InvalidLedgerDataError(f"Ledger API returned invalid JSON for {path}") from e

                attempt += 1
                if attempt >= self.max_retries:
                    raise LedgerUnavailableError(
                        f"Ledger API unavailable after {attempt} attempts: {error}"
                    ) from error

                backoff = self.backoff_base * (2 ** (attempt - 1))
                await asyncio.sleep(backoff)


def _decimal(value: Any) -> Decimal:
    # str() first so floats from JSON keep their printed value
    return Decimal(str(value))


def _entry_fields(year: int, item: Dict[str, Any]) -> Dict[str, Any]:
    entry_year = int(item.get("year", year))
    if entry_year != year:
        raise ValueError(f"entry for {entry_year} in ledger for {year}")
    return {
        "year": entry_year,
        "month": int(item["month"]),
        "category_id": int(item["category_id"]),
        "amount": _decimal(item["amount"]),
        "category_type": CategoryType(item["category_type"].upper()),
    }
