"""Account reporting endpoints."""

from fastapi import APIRouter, Depends

from tradesim.api.deps import get_ledger_service, get_analysis_service
from tradesim.api.schemas import (
    TransactionResponse,
    PositionResponse,
    PortfolioResponse,
)
from tradesim.services import LedgerService, AnalysisService

router = APIRouter(prefix="/api", tags=["account"])


@router.get("/balance", response_model=float)
def get_balance(
    ledger: LedgerService = Depends(get_ledger_service),
) -> float:
    """Current cash balance."""
    return float(ledger.get_balance())


@router.get("/holdings", response_model=dict[str, float])
def get_holdings(
    ledger: LedgerService = Depends(get_ledger_service),
) -> dict[str, float]:
    """Held quantity per symbol."""
    return {symbol: float(qty) for symbol, qty in ledger.get_holdings().items()}


@router.get("/transactions", response_model=list[TransactionResponse])
def get_transactions(
    ledger: LedgerService = Depends(get_ledger_service),
) -> list[TransactionResponse]:
    """Every executed trade, oldest first."""
    return [
        TransactionResponse(
            txn_id=txn.txn_id,
            symbol=txn.symbol,
            amount=float(txn.amount),
            unit_price=float(txn.unit_price),
            total_value=float(txn.total_value),
            side=txn.side,
            timestamp=txn.timestamp,
        )
        for txn in ledger.get_history()
    ]


@router.get("/profit-loss", response_model=dict[str, float])
def get_profit_loss(
    analysis: AnalysisService = Depends(get_analysis_service),
) -> dict[str, float]:
    """Realized profit/loss per symbol ever bought."""
    return {symbol: float(pnl) for symbol, pnl in analysis.profit_loss().items()}


@router.get("/portfolio", response_model=PortfolioResponse)
def get_portfolio(
    analysis: AnalysisService = Depends(get_analysis_service),
) -> PortfolioResponse:
    """Cash plus holdings valued at current prices."""
    view = analysis.portfolio()
    return PortfolioResponse(
        cash_balance=float(view.cash_balance),
        positions=[
            PositionResponse(
                symbol=p.symbol,
                quantity=float(p.quantity),
                last_price=float(p.last_price) if p.last_price is not None else None,
                market_value=float(p.market_value) if p.market_value is not None else None,
            )
            for p in view.positions
        ],
        total_value=float(view.total_value),
    )
