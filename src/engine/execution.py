from .models import PricePoint, Signal, Trade
from .portfolio import PortfolioState


def apply_signal(
    signal: Signal,
    point: PricePoint,
    portfolio: PortfolioState,
    position_size_pct: float,
) -> None:
    if signal == Signal.BUY and not portfolio.is_long:
        _open_position(point, portfolio, position_size_pct)

    elif signal == Signal.SELL and portfolio.is_long:
        _close_position(point, portfolio)

    # every other signal/state combination leaves the portfolio untouched


def liquidate(price: float, portfolio: PortfolioState) -> None:
    """
    Close any open position at `price` without logging a trade.
    Only cash moves; the equity curve is left as is.
    """
    if not portfolio.is_long:
        return

    portfolio.cash += portfolio.shares * price
    portfolio.shares = 0.0


# -------------------------
# Internal helpers
# -------------------------

def _open_position(point: PricePoint, portfolio: PortfolioState, position_size_pct: float):
    invest_amount = portfolio.cash * (position_size_pct / 100.0)
    shares = invest_amount / point.close

    portfolio.cash -= invest_amount
    portfolio.shares = shares

    trade = Trade(
        kind=Signal.BUY,
        price=point.close,
        timestamp=point.timestamp,
        shares=shares,
    )
    portfolio.trade_log.append(trade)
    portfolio.last_buy = trade


def _close_position(point: PricePoint, portfolio: PortfolioState):
    shares = portfolio.shares
    proceeds = shares * point.close
    portfolio.cash += proceeds

    # Cost basis is the most recent BUY. Valid only while at most one
    # position is open; scaling into a position would misattribute profit.
    entry = portfolio.last_buy
    profit = proceeds - entry.shares * entry.price

    portfolio.trade_log.append(
        Trade(
            kind=Signal.SELL,
            price=point.close,
            timestamp=point.timestamp,
            shares=shares,
            profit=profit,
        )
    )
    portfolio.shares = 0.0
