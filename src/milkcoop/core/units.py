"""Display formatting for milk volumes and money.

All internal data is stored as plain floats:
- Volume: liters (l)
- Money: the cooperative currency (settings.currency, KES by default)

These helpers only shape values for CLI output; nothing here is used by
the aggregators themselves.
"""

from milkcoop.core.config import settings


def format_liters(liters: float, decimals: int = 1) -> str:
    """Format a milk volume for display.

    Args:
        liters: Volume in liters
        decimals: Number of decimal places

    Returns:
        Formatted string (e.g., "1,250.5 l")
    """
    return f"{liters:,.{decimals}f} l"


def format_currency(amount: float, decimals: int = 2) -> str:
    """Format a money amount in the cooperative currency.

    Example: format_currency(1234.5) -> "KES 1,234.50"
    """
    return f"{settings.currency} {amount:,.{decimals}f}"


def format_status(value: str) -> str:
    """Turn an enum-style name into display text ("UNDER_TREATMENT" -> "Under treatment")."""
    text = value.replace("_", " ").lower()
    return text[:1].upper() + text[1:]


def yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"
