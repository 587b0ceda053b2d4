"""Display formatting for alert and suggestion text"""


def format_money(amount: float) -> str:
    """Format as dollars with thousands separators, e.g. -$1,234.50"""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def pluralize(count: float, singular: str, plural: str | None = None) -> str:
    return singular if count == 1 else (plural or singular + "s")
