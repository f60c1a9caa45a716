"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session
from cashflow_gateway.config import settings
from cashflow_gateway.infrastructure.clients.ledger import LedgerClient
from cashflow_gateway.infrastructure.database.repositories import SqlLedgerReader
from cashflow_gateway.infrastructure.database.session import get_db


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_ledger_reader(db: Session = Depends(get_db)):
    """Provide the remote ledger client when configured, the database reader otherwise"""
    if settings.ledger_api_base:
        return LedgerClient()
    return SqlLedgerReader(db)
