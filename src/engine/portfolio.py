from typing import List, Optional
from .models import Trade


class PortfolioState:
    """
    Simulation state for a single backtest call: cash, one open position
    and the append-only trade log. Created fresh per run, never shared.
    """

    def __init__(self, cash: float):
        self.cash: float = cash
        self.shares: float = 0.0
        self.trade_log: List[Trade] = []
        self.last_buy: Optional[Trade] = None
        self.equity: List[float] = [cash]

    @property
    def is_long(self) -> bool:
        return self.shares > 0

    def mark_to_market(self, price: float) -> float:
        return self.cash + self.shares * price

