from decimal import Decimal, InvalidOperation


def format_currency(amount: Decimal | float | None, symbol: str = "$") -> str:
    """Format an amount as currency with two decimals, e.g. '$5000.00'.

    None renders as zero.
    """
    if amount is None:
        amount = Decimal("0")
    return f"{symbol}{Decimal(amount):.2f}"


def parse_amount(text: str) -> Decimal | None:
    """Parse user input to a Decimal rounded to cents, or None if unusable."""
    try:
        amount = Decimal(text.strip())
        if not amount.is_finite():
            return None
        return amount.quantize(Decimal("0.01"))
    except InvalidOperation:
        return None
