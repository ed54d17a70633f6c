"""Tests for herd and membership helpers."""

from datetime import date, timedelta

import pytest

from milkcoop.data.herd import (
    average_daily_production,
    cow_summary,
    find_cow,
    find_member,
    last_milking_date,
    member_daily_production,
    member_summary,
)
from milkcoop.data.models import (
    Cow,
    HealthStatus,
    Member,
    MilkingType,
    MilkInEntry,
    NotFoundError,
)

D = date(2025, 6, 10)


def make_cow(cow_id: str, status=HealthStatus.HEALTHY, owner_id="M01", is_active=True) -> Cow:
    return Cow(cow_id=cow_id, name=cow_id, owner_id=owner_id, health_status=status, is_active=is_active)


def session(cow_id: str, liters: float, day: date, owner_id="M01", milking=MilkingType.MORNING) -> MilkInEntry:
    return MilkInEntry(cow_id=cow_id, owner_id=owner_id, liters=liters, date=day, milking_type=milking)


class TestLookups:
    """Tests for finding cows and members."""

    def test_find_cow(self):
        cows = [make_cow("CW01"), make_cow("CW02")]
        assert find_cow(cows, "CW02").cow_id == "CW02"

    def test_find_cow_missing(self):
        with pytest.raises(NotFoundError, match="Cow CW09 not found"):
            find_cow([make_cow("CW01")], "CW09")

    def test_find_member_missing(self):
        with pytest.raises(NotFoundError, match="Member M09"):
            find_member([Member(member_id="M01", name="Wanjiku")], "M09")

    def test_not_found_is_lookup_error(self):
        with pytest.raises(LookupError):
            find_cow([], "CW01")


class TestCowSummary:
    """Tests for herd counts."""

    def test_counts(self):
        cows = [
            make_cow("CW01"),
            make_cow("CW02", status=HealthStatus.SICK),
            make_cow("CW03", status=HealthStatus.NEEDS_ATTENTION),
            make_cow("CW04", status=HealthStatus.GESTATION),
            make_cow("CW05", status=HealthStatus.SICK, is_active=False),
        ]
        summary = cow_summary(cows)
        assert summary == {
            "total_active_cows": 4,
            "total_archived_cows": 1,
            "healthy_cows": 1,
            "needs_attention": 2,
        }

    def test_empty(self):
        assert cow_summary([])["total_active_cows"] == 0


class TestMemberSummary:
    """Tests for membership counts."""

    def test_counts(self):
        members = [
            Member(member_id="M01", name="Wanjiku"),
            Member(member_id="M02", name="Otieno"),
            Member(member_id="M03", name="Achieng", is_active=False),
        ]
        cows = [make_cow("CW01", owner_id="M01"), make_cow("CW02", owner_id="M02", is_active=False)]
        summary = member_summary(members, cows)
        assert summary["total_active_members"] == 2
        assert summary["total_archived_members"] == 1
        assert summary["members_with_active_cows"] == 1


class TestAverageDailyProduction:
    """Tests for per-cow averages."""

    def test_averages_daily_totals(self):
        entries = [
            session("CW01", 6, D, milking=MilkingType.MORNING),
            session("CW01", 4, D, milking=MilkingType.EVENING),
            session("CW01", 8, D - timedelta(days=1)),
            session("CW02", 100, D),
        ]
        assert average_daily_production("CW01", entries) == pytest.approx(9.0)

    def test_only_recent_sessions(self):
        """With days=1 only the last two sessions count."""
        entries = [
            session("CW01", 20, D - timedelta(days=5)),
            session("CW01", 5, D, milking=MilkingType.MORNING),
            session("CW01", 5, D, milking=MilkingType.EVENING),
        ]
        assert average_daily_production("CW01", entries, days=1) == pytest.approx(10.0)

    def test_no_entries(self):
        assert average_daily_production("CW01", []) == 0.0


class TestLastMilkingDate:
    def test_latest(self):
        entries = [session("CW01", 1, D - timedelta(days=3)), session("CW01", 1, D - timedelta(days=1))]
        assert last_milking_date(entries, cow_id="CW01") == D - timedelta(days=1)

    def test_filters_by_cow_and_owner(self):
        entries = [
            session("CW01", 1, D - timedelta(days=3)),
            session("CW02", 1, D - timedelta(days=1)),
            session("CW09", 1, D, owner_id="M02"),
        ]
        assert last_milking_date(entries, cow_id="CW01") == D - timedelta(days=3)
        assert last_milking_date(entries, owner_id="M01") == D - timedelta(days=1)
        assert last_milking_date(entries) == D

    def test_never_milked(self):
        assert last_milking_date([], cow_id="CW01") is None


class TestMemberDailyProduction:
    """Tests for per-member production on one day."""

    def test_sums_active_cows_only(self):
        cows = [make_cow("CW01"), make_cow("CW02"), make_cow("CW03", is_active=False)]
        entries = [
            session("CW01", 10, D),
            session("CW02", 5, D),
            session("CW03", 7, D),
            session("CW01", 3, D - timedelta(days=1)),
            session("CW09", 2, D, owner_id="M02"),
        ]
        assert member_daily_production("M01", entries, cows, D) == 15
