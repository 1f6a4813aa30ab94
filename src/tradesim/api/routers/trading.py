"""Trading endpoints: prices, buy, sell, reset."""

from fastapi import APIRouter, Depends, Response

from tradesim.api.deps import get_trading_engine
from tradesim.api.schemas import TradeRequest, ApiResponse
from tradesim.domain.models import TradeErrorKind
from tradesim.domain.views import TradeResult
from tradesim.services import TradingEngine

router = APIRouter(prefix="/api", tags=["trading"])

_ERROR_STATUS = {
    TradeErrorKind.INVALID_AMOUNT: 400,
    TradeErrorKind.SYMBOL_UNAVAILABLE: 404,
    TradeErrorKind.INSUFFICIENT_FUNDS: 400,
    TradeErrorKind.INSUFFICIENT_HOLDINGS: 400,
}


def _to_response(result: TradeResult, response: Response) -> ApiResponse:
    if not result.success:
        response.status_code = _ERROR_STATUS[result.error]
    return ApiResponse(success=result.success, message=result.message, error=result.error)


@router.get("/prices", response_model=dict[str, float])
def get_prices(
    engine: TradingEngine = Depends(get_trading_engine),
) -> dict[str, float]:
    """Latest price per symbol from the live feed."""
    return {symbol: float(price) for symbol, price in engine.get_prices().items()}


@router.post("/buy", response_model=ApiResponse)
def buy(
    data: TradeRequest,
    response: Response,
    engine: TradingEngine = Depends(get_trading_engine),
) -> ApiResponse:
    """Buy at the current price, paying from the cash balance."""
    return _to_response(engine.buy(data.symbol, data.amount), response)


@router.post("/sell", response_model=ApiResponse)
def sell(
    data: TradeRequest,
    response: Response,
    engine: TradingEngine = Depends(get_trading_engine),
) -> ApiResponse:
    """Sell held quantity at the current price."""
    return _to_response(engine.sell(data.symbol, data.amount), response)


@router.post("/reset", response_model=ApiResponse)
def reset(
    engine: TradingEngine = Depends(get_trading_engine),
) -> ApiResponse:
    """Restore the initial balance and clear holdings and history."""
    return ApiResponse(success=True, message=engine.reset())
