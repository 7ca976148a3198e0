"""Display formatting shared by the web page and the exporters."""

from datetime import datetime
from decimal import Decimal

from app.core.config import settings
from app.services.allocation import round2

NOT_AVAILABLE = "N/A"


def format_units(value: Decimal) -> str:
    """Format a kWh quantity, e.g. ``30.89``."""
    return f"{round2(value):.2f}"


def format_money(value: Decimal, symbol: str | None = None) -> str:
    """Format an amount with thousands separators, e.g. ``₦7,020.45``."""
    symbol = settings.CURRENCY_SYMBOL if symbol is None else symbol
    value = round2(value)
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"


def format_percentage(value: Decimal) -> str:
    """Format a share, e.g. ``58.50%``."""
    return f"{round2(value):.2f}%"


def format_unit_price(value: Decimal | None, symbol: str | None = None) -> str:
    """Format the price per kWh, or N/A when there is none."""
    if value is None:
        return NOT_AVAILABLE
    return f"{format_money(value, symbol)}/kWh"


def format_date(value: datetime) -> str:
    """Format a report generation date."""
    return value.strftime("%Y-%m-%d %H:%M UTC")
