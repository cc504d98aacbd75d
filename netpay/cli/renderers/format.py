"""Locale-style number formatting for rendered breakdowns.

Amounts are grouped the German way (1.234,56) with the currency symbol
after the amount, matching how the bundled jurisdictions are presented.
"""

CURRENCY_SYMBOLS = {
    "EUR": "€",
    "USD": "$",
    "GBP": "£",
    "CHF": "CHF",
}


def _group(value: float, decimals: int) -> str:
    rounded = round(value, decimals)
    if rounded == 0:
        rounded = 0.0  # avoid "-0,00"
    text = f"{rounded:,.{decimals}f}"
    # 1,234.56 -> 1.234,56
    return text.replace(",", "_").replace(".", ",").replace("_", ".")


def format_number(value: float) -> str:
    """Format a number with up to two decimals.

    Example: 1234.5 -> "1.234,5", 1000 -> "1.000"
    """
    text = _group(value, 2)
    if "," in text:
        text = text.rstrip("0").rstrip(",")
    return text


def format_currency(value: float, currency: str) -> str:
    """Format an amount with two decimals and the currency symbol.

    Example: format_currency(1234.56, "EUR") -> "1.234,56 €"
    """
    symbol = CURRENCY_SYMBOLS.get(currency, currency)
    return f"{_group(value, 2)} {symbol}"
