"""Per-member production statistics.

For each member: how many cows they keep, how many are healthy, and how much
milk they delivered today, this week and this month. Members are ranked by
monthly production.
"""

from datetime import date
from typing import TypedDict

from milkcoop.analysis.inventory import DAYS_PER_MONTH, MONTHLY_WINDOW, TODAY_WINDOW, WEEKLY_WINDOW, period_totals
from milkcoop.data.herd import last_milking_date
from milkcoop.data.models import Cow, HealthStatus, Member, MilkInEntry


class MemberStatistics(TypedDict):
    """Production figures for one member (liters)."""

    member_id: str
    name: str
    total_cows: int
    healthy_cows: int
    today_production: float
    weekly_production: float
    monthly_production: float
    average_daily_production: float
    last_entry_date: date | None


def member_statistics(
    members: list[Member],
    cows: list[Cow],
    milk_in: list[MilkInEntry],
    today: date,
    active_only: bool = True,
) -> list[MemberStatistics]:
    """
    Production statistics per member, highest monthly production first.

    Cow counts include only the member's active cows. Production counts every
    milk-in entry recorded against the member, whichever cow it came from.

    Args:
        members: All known members
        cows: All known cows
        milk_in: All milk-in entries
        today: Reference date for the today/weekly/monthly windows
        active_only: Skip archived members (default True)

    Returns:
        One MemberStatistics per member
    """
    stats: list[MemberStatistics] = []
    for member in members:
        if active_only and not member.is_active:
            continue

        member_cows = [c for c in cows if c.owner_id == member.member_id and c.is_active]
        entries = [e for e in milk_in if e.owner_id == member.member_id]
        monthly = period_totals(entries, today, MONTHLY_WINDOW)

        stats.append(
            {
                "member_id": member.member_id,
                "name": member.name,
                "total_cows": len(member_cows),
                "healthy_cows": sum(1 for c in member_cows if c.health_status is HealthStatus.HEALTHY),
                "today_production": period_totals(entries, today, TODAY_WINDOW),
                "weekly_production": period_totals(entries, today, WEEKLY_WINDOW),
                "monthly_production": monthly,
                "average_daily_production": monthly / DAYS_PER_MONTH,
                "last_entry_date": last_milking_date(milk_in, owner_id=member.member_id),
            }
        )

    return sorted(stats, key=lambda s: s["monthly_production"], reverse=True)
