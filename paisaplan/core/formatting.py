"""Display formatting for currency amounts and percentages."""

from decimal import ROUND_HALF_UP, Decimal

CENTS = Decimal("0.01")
TENTHS = Decimal("0.1")

CURRENCY_SYMBOLS = {
    "INR": "₹",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
}


def quantize(amount: Decimal, exp: Decimal = CENTS) -> Decimal:
    """Round half-up to the given exponent (cents by default)."""
    return amount.quantize(exp, rounding=ROUND_HALF_UP)


def format_currency(amount: Decimal, currency: str = "INR") -> str:
    """Format an amount for display, e.g. '₹1,234.56'."""
    symbol = CURRENCY_SYMBOLS.get(currency, f"{currency} ")
    value = quantize(amount)
    if value < 0:
        return f"-{symbol}{abs(value):,.2f}"
    return f"{symbol}{value:,.2f}"


def format_percentage(value: Decimal) -> str:
    """Format a percentage with one decimal place, e.g. '42.5%'."""
    return f"{quantize(value, TENTHS)}%"
