"""Herd and membership helpers.

Provides lookups and summaries over the cow and member lists fetched from
the data service:
- Cow / member lookup by ID
- Active vs archived counts and health breakdown
- Per-cow and per-member milk production
"""

from collections import defaultdict
from datetime import date
from typing import TypedDict

from milkcoop.data.models import Cow, HealthStatus, Member, MilkInEntry, NotFoundError


class CowSummary(TypedDict):
    """Counts over the herd."""

    total_active_cows: int
    total_archived_cows: int
    healthy_cows: int
    needs_attention: int  # active cows that are NEEDS_ATTENTION or SICK


class MemberSummary(TypedDict):
    """Counts over the membership."""

    total_active_members: int
    total_archived_members: int
    members_with_active_cows: int


def find_cow(cows: list[Cow], cow_id: str) -> Cow:
    """Find a cow by ID, raising NotFoundError if absent."""
    for cow in cows:
        if cow.cow_id == cow_id:
            return cow
    raise NotFoundError(f"Cow {cow_id} not found")


def find_member(members: list[Member], member_id: str) -> Member:
    """Find a member by ID, raising NotFoundError if absent."""
    for member in members:
        if member.member_id == member_id:
            return member
    raise NotFoundError(f"Member {member_id} not found")


def cow_summary(cows: list[Cow]) -> CowSummary:
    """Summarize the herd: active/archived counts and health of active cows."""
    active = [c for c in cows if c.is_active]
    return {
        "total_active_cows": len(active),
        "total_archived_cows": len(cows) - len(active),
        "healthy_cows": sum(1 for c in active if c.health_status is HealthStatus.HEALTHY),
        "needs_attention": sum(
            1 for c in active if c.health_status in (HealthStatus.NEEDS_ATTENTION, HealthStatus.SICK)
        ),
    }


def member_summary(members: list[Member], cows: list[Cow]) -> MemberSummary:
    """Summarize membership: active/archived counts and members still milking."""
    active = [m for m in members if m.is_active]
    owners_with_active_cows = {c.owner_id for c in cows if c.is_active}
    return {
        "total_active_members": len(active),
        "total_archived_members": len(members) - len(active),
        "members_with_active_cows": sum(1 for m in active if m.member_id in owners_with_active_cows),
    }


def average_daily_production(cow_id: str, milk_in: list[MilkInEntry], days: int = 30) -> float:
    """
    Average liters per day for one cow over its most recent sessions.

    Looks at the cow's last ``days * 2`` entries (morning and evening for each
    day), sums them per date and averages the daily totals.

    Args:
        cow_id: Cow to summarize
        milk_in: All milk-in entries
        days: Number of days of sessions to consider

    Returns:
        Average daily liters, or 0.0 if the cow has no entries
    """
    entries = sorted((e for e in milk_in if e.cow_id == cow_id), key=lambda e: e.date)
    recent = entries[-(days * 2) :] if days > 0 else []
    if not recent:
        return 0.0

    daily_totals: dict[date, float] = defaultdict(float)
    for entry in recent:
        daily_totals[entry.date] += entry.liters

    return sum(daily_totals.values()) / len(daily_totals)


def last_milking_date(
    milk_in: list[MilkInEntry],
    cow_id: str | None = None,
    owner_id: str | None = None,
) -> date | None:
    """Most recent milk-in date, optionally for one cow and/or one member; None if never milked."""
    dates = [
        e.date
        for e in milk_in
        if (cow_id is None or e.cow_id == cow_id) and (owner_id is None or e.owner_id == owner_id)
    ]
    return max(dates) if dates else None


def member_daily_production(
    owner_id: str,
    milk_in: list[MilkInEntry],
    cows: list[Cow],
    day: date,
) -> float:
    """Liters collected on ``day`` from a member's active cows."""
    member_cow_ids = {c.cow_id for c in cows if c.owner_id == owner_id and c.is_active}
    return sum(
        e.liters
        for e in milk_in
        if e.owner_id == owner_id and e.date == day and e.cow_id in member_cow_ids
    )
