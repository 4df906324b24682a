from typing import Dict, List

MARKET_OPTIONS: List[Dict[str, object]] = [
    {
        "label": "Forex Major Pairs",
        "options": ["EUR/USD", "GBP/USD", "USD/JPY", "USD/CHF", "AUD/USD", "NZD/USD", "USD/CAD"],
    },
    {
        "label": "Forex Minor Pairs",
        "options": ["EUR/GBP", "EUR/JPY", "GBP/JPY", "EUR/AUD", "GBP/AUD"],
    },
    {
        "label": "Cryptocurrency",
        "options": [
            "BTC/USD", "ETH/USD", "SOL/USD", "XRP/USD", "ADA/USD",
            "DOGE/USD", "DOT/USD", "BNB/USD", "LTC/USD", "AVAX/USD",
        ],
    },
    {
        "label": "Commodities & Metals",
        "options": ["XAU/USD", "XAG/USD", "XPT/USD", "XPD/USD", "USO/USD", "NGAS/USD"],
    },
    {
        "label": "Indices & Stocks",
        "options": ["SPX/USD", "NDX/USD", "DJI/USD", "FTSE/GBP", "DAX/EUR"],
    },
]


def symbol_to_stem(symbol: str) -> str:
    """
    Map a market pair to its file stem:
      "EUR/USD" -> "EUR_USD"
    """
    return symbol.strip().upper().replace("/", "_")
