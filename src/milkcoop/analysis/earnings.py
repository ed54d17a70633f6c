"""Revenue aggregation over milk sales.

Earnings use the same day windows as the inventory figures: today (0),
weekly (7) and monthly (30) days back from a reference date.
"""

import calendar
from collections import defaultdict
from datetime import date
from typing import TypedDict

from milkcoop.analysis.inventory import DAYS_PER_MONTH, MONTHLY_WINDOW, TODAY_WINDOW, WEEKLY_WINDOW, in_window
from milkcoop.data.models import MilkOutEntry, MilkSpoiltEntry


class EarningsSummary(TypedDict):
    today_earnings: float
    weekly_earnings: float
    monthly_earnings: float


class DailyEarnings(TypedDict):
    """Earnings for one day."""

    date: date
    earnings: float
    transaction_count: int
    average_per_transaction: float


class MonthlyEarnings(TypedDict):
    """Earnings for one month-long period, ending the day before ``month``."""

    month: date
    period_start: date
    earnings: float
    transaction_count: int
    average_per_day: float


class CustomerEarnings(TypedDict):
    """Earnings from one customer across all sales."""

    customer_name: str
    total_earnings: float
    transaction_count: int
    last_transaction_date: date | None


def earnings(entries: list[MilkOutEntry], window_days: int, reference_date: date) -> float:
    """
    Total revenue from sales within ``window_days`` of ``reference_date``.

    A window of 0 counts only sales dated exactly on the reference date.
    """
    return sum(e.amount for e in entries if in_window(e.date, reference_date, window_days))


def earnings_summary(entries: list[MilkOutEntry], today: date) -> EarningsSummary:
    """Today / weekly / monthly earnings for the earnings card."""
    return {
        "today_earnings": earnings(entries, TODAY_WINDOW, today),
        "weekly_earnings": earnings(entries, WEEKLY_WINDOW, today),
        "monthly_earnings": earnings(entries, MONTHLY_WINDOW, today),
    }


def daily_earnings(entries: list[MilkOutEntry], days: list[date]) -> list[DailyEarnings]:
    """
    Per-day earnings for the given days, in the order given.

    Days without sales are reported with zero earnings.
    """
    by_day: dict[date, list[MilkOutEntry]] = defaultdict(list)
    for entry in entries:
        by_day[entry.date].append(entry)

    result = []
    for day in days:
        sales = by_day.get(day, [])
        total = sum(s.amount for s in sales)
        result.append(
            {
                "date": day,
                "earnings": total,
                "transaction_count": len(sales),
                "average_per_transaction": total / len(sales) if sales else 0.0,
            }
        )
    return result


def months_before(day: date, months: int) -> date:
    """Same day of the month ``months`` earlier, clamped to the month's last day."""
    index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(index, 12)
    last_day = calendar.monthrange(year, month + 1)[1]
    return date(year, month + 1, min(day.day, last_day))


def monthly_comparison(entries: list[MilkOutEntry], today: date, months: int = 6) -> list[MonthlyEarnings]:
    """
    Earnings for the last ``months`` month-long periods, oldest first.

    Period i covers [today - (i+1) months, today - i months), so the most
    recent period runs up to yesterday.

    Args:
        entries: Milk-out entries
        today: Reference date
        months: Number of periods

    Returns:
        One MonthlyEarnings per period; average_per_day is over a 30-day month
    """
    periods = []
    for i in range(months):
        end = months_before(today, i)
        start = months_before(today, i + 1)
        sales = [e for e in entries if start <= e.date < end]
        total = sum(e.amount for e in sales)
        periods.append(
            {
                "month": end,
                "period_start": start,
                "earnings": total,
                "transaction_count": len(sales),
                "average_per_day": total / DAYS_PER_MONTH,
            }
        )
    periods.reverse()
    return periods


def recent_transactions(entries: list[MilkOutEntry], limit: int = 10) -> list[MilkOutEntry]:
    """The ``limit`` most recent sales, newest first."""
    return sorted(entries, key=lambda e: e.date, reverse=True)[:limit]


def customer_earnings(entries: list[MilkOutEntry]) -> list[CustomerEarnings]:
    """Earnings per customer, highest first."""
    customers: dict[str, CustomerEarnings] = {}
    for entry in entries:
        record = customers.setdefault(
            entry.customer_name,
            {
                "customer_name": entry.customer_name,
                "total_earnings": 0.0,
                "transaction_count": 0,
                "last_transaction_date": None,
            },
        )
        record["total_earnings"] += entry.amount
        record["transaction_count"] += 1
        last = record["last_transaction_date"]
        if last is None or entry.date > last:
            record["last_transaction_date"] = entry.date

    return sorted(customers.values(), key=lambda c: c["total_earnings"], reverse=True)


def total_spoilage_loss(entries: list[MilkSpoiltEntry]) -> float:
    """Sum of recorded losses (valued at entry time, never recomputed)."""
    return sum(e.loss_amount for e in entries)
