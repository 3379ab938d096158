from decimal import Decimal

CURRENCY_SYMBOLS = {
    "ETB": "Br",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
}

def get_currency_symbol(currency_code: str) -> str:
    """Returns the currency symbol for a given currency code."""
    return CURRENCY_SYMBOLS.get(currency_code.upper(), "")

def format_money(amount, currency_code: str) -> str:
    """Formats an amount as '1,800.00 Br'; non-numeric amounts pass through as text."""
    if amount is None:
        return "unavailable"
    if isinstance(amount, str):
        return amount
    symbol = get_currency_symbol(currency_code) or currency_code.upper()
    return f"{Decimal(str(amount)):,.2f} {symbol}"
