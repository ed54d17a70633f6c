"""
Milk inventory aggregation.

Derives stock and production/sales/spoilage figures from the three entry
collections (milk-in, milk-out, milk-spoilt). Every function is a pure
computation over the lists it is given; nothing is cached or clamped.

Stock is the all-time running balance:

    stock = sum(milk_in.liters) - sum(milk_out.quantity_sold) - sum(spoilt.amount_spoilt)

If a sale or spoilage larger than the available stock slipped through
upstream, the stock goes negative rather than being hidden.

Windows are counted in whole days back from a reference date. A window of
N days includes entries from exactly N days ago; a window of 0 is the
reference date only. Entries dated after the reference date are never
counted.
"""

from collections import defaultdict
from datetime import date
from typing import TypedDict

from milkcoop.core.config import settings
from milkcoop.data.models import InvalidInputError, MilkInEntry, MilkOutEntry, MilkSpoiltEntry

# Standard reporting windows (days back from the reference date)
TODAY_WINDOW = 0
WEEKLY_WINDOW = 7
MONTHLY_WINDOW = 30

# Divisor for monthly averages
DAYS_PER_MONTH = 30

Entry = MilkInEntry | MilkOutEntry | MilkSpoiltEntry


class StockSummary(TypedDict):
    """Stock card figures for one reference date (liters)."""

    current_stock: float
    daily_produce: float
    daily_total_liters_sold: float
    weekly_sold: float
    weekly_spoilt: float
    monthly_sold: float


class MonthlyStockSummary(TypedDict):
    """30-day totals and daily averages (liters)."""

    total_produced: float
    total_sold: float
    total_spoilt: float
    average_daily_production: float
    average_daily_sales: float


class SpoilageSummary(TypedDict):
    total_spoilt_liters: float
    total_incidents: int
    total_loss: float


def quantity_of(entry: Entry) -> float:
    """Liters carried by an entry: collected, sold or spoilt."""
    if isinstance(entry, MilkInEntry):
        return entry.liters
    if isinstance(entry, MilkOutEntry):
        return entry.quantity_sold
    return entry.amount_spoilt


def in_window(entry_date: date, reference_date: date, window_days: int) -> bool:
    """True if ``entry_date`` falls within ``window_days`` days before ``reference_date``."""
    days_back = reference_date.toordinal() - entry_date.toordinal()
    # Lower bound keeps future-dated entries out, so a 0-day window always
    # equals daily_production for the reference date.
    return 0 <= days_back <= window_days


def current_stock(
    milk_in: list[MilkInEntry],
    milk_out: list[MilkOutEntry],
    milk_spoilt: list[MilkSpoiltEntry],
) -> float:
    """All-time stock balance in liters (may be negative, see module docs)."""
    total_in = sum(e.liters for e in milk_in)
    total_out = sum(e.quantity_sold for e in milk_out)
    total_spoilt = sum(e.amount_spoilt for e in milk_spoilt)
    return total_in - total_out - total_spoilt


def daily_production(milk_in: list[MilkInEntry], day: date) -> float:
    """Liters collected on exactly ``day``."""
    return sum(e.liters for e in milk_in if e.date == day)


def period_totals(entries: list[Entry], reference_date: date, window_days: int) -> float:
    """
    Sum liters over entries within a window ending at ``reference_date``.

    Args:
        entries: Milk-in, milk-out or spoilt entries
        reference_date: Last day of the window
        window_days: Days back to include (inclusive); 0 = reference date only

    Returns:
        Total liters in the window
    """
    return sum(quantity_of(e) for e in entries if in_window(e.date, reference_date, window_days))


def group_by_day(entries: list[Entry]) -> dict[date, float]:
    """
    Total liters per date, for dates that have entries.

    Days without entries are absent; callers charting a fixed range fill
    the gaps with zero.
    """
    totals: dict[date, float] = defaultdict(float)
    for entry in entries:
        totals[entry.date] += quantity_of(entry)
    return dict(totals)


def stock_summary(
    milk_in: list[MilkInEntry],
    milk_out: list[MilkOutEntry],
    milk_spoilt: list[MilkSpoiltEntry],
    today: date,
) -> StockSummary:
    """Build the stock card figures for ``today``."""
    return {
        "current_stock": current_stock(milk_in, milk_out, milk_spoilt),
        "daily_produce": daily_production(milk_in, today),
        "daily_total_liters_sold": period_totals(milk_out, today, TODAY_WINDOW),
        "weekly_sold": period_totals(milk_out, today, WEEKLY_WINDOW),
        "weekly_spoilt": period_totals(milk_spoilt, today, WEEKLY_WINDOW),
        "monthly_sold": period_totals(milk_out, today, MONTHLY_WINDOW),
    }


def monthly_stock_summary(
    milk_in: list[MilkInEntry],
    milk_out: list[MilkOutEntry],
    milk_spoilt: list[MilkSpoiltEntry],
    today: date,
) -> MonthlyStockSummary:
    """Totals over the monthly window, with averages over a 30-day month."""
    produced = period_totals(milk_in, today, MONTHLY_WINDOW)
    sold = period_totals(milk_out, today, MONTHLY_WINDOW)
    return {
        "total_produced": produced,
        "total_sold": sold,
        "total_spoilt": period_totals(milk_spoilt, today, MONTHLY_WINDOW),
        "average_daily_production": produced / DAYS_PER_MONTH,
        "average_daily_sales": sold / DAYS_PER_MONTH,
    }


def spoilage_summary(milk_spoilt: list[MilkSpoiltEntry]) -> SpoilageSummary:
    """All-time spoilage: liters written off, number of incidents and recorded loss."""
    return {
        "total_spoilt_liters": sum(e.amount_spoilt for e in milk_spoilt),
        "total_incidents": len(milk_spoilt),
        "total_loss": sum(e.loss_amount for e in milk_spoilt),
    }


def spoilage_loss(liters: float, unit_price: float | None = None) -> float:
    """
    Value spoilt milk at entry time.

    Args:
        liters: Amount spoilt
        unit_price: Price per liter (defaults to settings.spoilage_unit_price)

    Returns:
        Monetary loss to store on the spoilage entry
    """
    if liters < 0:
        raise InvalidInputError(f"Spoilt amount must not be negative (got {liters})")
    if unit_price is None:
        unit_price = settings.spoilage_unit_price
    return liters * unit_price


def check_sale_against_stock(quantity: float, stock: float) -> None:
    """
    Reject a sale (or spoilage) larger than the stock on hand.

    Callers run this before recording an entry; the aggregators themselves
    never enforce it.
    """
    if quantity < 0:
        raise InvalidInputError(f"Quantity must not be negative (got {quantity})")
    if quantity > stock:
        raise InvalidInputError(f"Insufficient stock: {quantity:g} l requested, {stock:g} l available")
