"""Display formatting for report output."""

from decimal import ROUND_HALF_UP, Decimal


def format_currency(amount: Decimal | None) -> str:
    """Whole-dollar USD, e.g. ``$1,234`` or ``-$50``."""
    if amount is None:
        return "n/a"
    rounded = Decimal(amount).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    sign = "-" if rounded < 0 else ""
    return f"{sign}${abs(rounded):,}"


def format_number(value: Decimal | None) -> str:
    if value is None:
        return "n/a"
    rounded = Decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return f"{rounded:,}"


def format_percent(rate: Decimal | None) -> str:
    """Fraction to percent with one decimal, e.g. ``0.144`` -> ``14.4%``."""
    if rate is None:
        return "n/a"
    return f"{Decimal(rate) * 100:.1f}%"
