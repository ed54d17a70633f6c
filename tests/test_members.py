"""Tests for per-member production statistics."""

from datetime import date, timedelta

import pytest

from milkcoop.analysis.members import member_statistics
from milkcoop.data.models import Cow, HealthStatus, Member, MilkingType, MilkInEntry

D = date(2025, 6, 10)


def make_cow(cow_id: str, owner_id: str, status=HealthStatus.HEALTHY, is_active=True) -> Cow:
    return Cow(cow_id=cow_id, name=cow_id, owner_id=owner_id, health_status=status, is_active=is_active)


def session(cow_id: str, owner_id: str, liters: float, day: date) -> MilkInEntry:
    return MilkInEntry(cow_id=cow_id, owner_id=owner_id, liters=liters, date=day, milking_type=MilkingType.MORNING)


@pytest.fixture
def members():
    return [
        Member(member_id="M01", name="Wanjiku"),
        Member(member_id="M02", name="Otieno"),
        Member(member_id="M03", name="Achieng", is_active=False),
    ]


@pytest.fixture
def cows():
    return [
        make_cow("CW01", "M01"),
        make_cow("CW02", "M01", status=HealthStatus.SICK),
        make_cow("CW03", "M01", is_active=False),
        make_cow("CW04", "M02"),
    ]


class TestMemberStatistics:
    """Tests for member_statistics."""

    def test_production_windows(self, members, cows):
        entries = [
            session("CW01", "M01", 10, D),
            session("CW02", "M01", 5, D - timedelta(days=3)),
            session("CW01", "M01", 15, D - timedelta(days=20)),
            session("CW01", "M01", 99, D - timedelta(days=40)),
        ]
        stats = member_statistics(members, cows, entries, D)
        wanjiku = next(s for s in stats if s["member_id"] == "M01")

        assert wanjiku["today_production"] == 10
        assert wanjiku["weekly_production"] == 15
        assert wanjiku["monthly_production"] == 30
        assert wanjiku["average_daily_production"] == pytest.approx(1.0)
        assert wanjiku["last_entry_date"] == D

    def test_cow_counts_use_active_cows(self, members, cows):
        stats = member_statistics(members, cows, [], D)
        wanjiku = next(s for s in stats if s["member_id"] == "M01")
        assert wanjiku["total_cows"] == 2
        assert wanjiku["healthy_cows"] == 1

    def test_sorted_by_monthly_production(self, members, cows):
        entries = [
            session("CW01", "M01", 5, D - timedelta(days=1)),
            session("CW04", "M02", 20, D - timedelta(days=2)),
        ]
        stats = member_statistics(members, cows, entries, D)
        assert [s["member_id"] for s in stats] == ["M02", "M01"]

    def test_skips_archived_members_by_default(self, members, cows):
        assert len(member_statistics(members, cows, [], D)) == 2
        assert len(member_statistics(members, cows, [], D, active_only=False)) == 3

    def test_member_without_entries(self, members, cows):
        stats = member_statistics(members, cows, [], D)
        otieno = next(s for s in stats if s["member_id"] == "M02")
        assert otieno["monthly_production"] == 0
        assert otieno["average_daily_production"] == 0
        assert otieno["last_entry_date"] is None
