"""Price parsing and Jordanian Dinar formatting."""
import math
from typing import Any

CURRENCY_SYMBOL = "JD"


def parse_price(value: Any, default: float = 0.0) -> float:
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        try:
            number = float(str(value).strip())
        except ValueError:
            return default
    if math.isnan(number) or math.isinf(number):
        return default
    return number


def format_price(price: Any, show_symbol: bool = True, decimals: int = 2) -> str:
    formatted = f"{parse_price(price):.{decimals}f}"
    return f"{formatted} {CURRENCY_SYMBOL}" if show_symbol else formatted
