"""Dependency injection for FastAPI."""

from fastapi import Depends, Request

from tradesim.app_context import AppContext
from tradesim.services import (
    LedgerService,
    TradingEngine,
    AnalysisService,
)


def get_app_context(request: Request) -> AppContext:
    """Provide the process-wide AppContext created at startup."""
    return request.app.state.context


def get_ledger_service(context: AppContext = Depends(get_app_context)) -> LedgerService:
    """Provide LedgerService instance."""
    return context.ledger


def get_trading_engine(context: AppContext = Depends(get_app_context)) -> TradingEngine:
    """Provide TradingEngine instance."""
    return context.trading


def get_analysis_service(context: AppContext = Depends(get_app_context)) -> AnalysisService:
    """Provide AnalysisService instance."""
    return context.analysis
