"""Data modules - cooperative records, herd and membership helpers."""

from milkcoop.data import herd, models
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
    ActionStatus,
    Cow,
    HealthStatus,
    InvalidInputError,
    Member,
    MilkingType,
    MilkInEntry,
    MilkOutEntry,
    MilkSpoiltEntry,
    NotFoundError,
    PaymentMode,
    SpoilageCause,
)

__all__ = [
    "herd",
    "models",
    # records
    "Cow",
    "Member",
    "MilkInEntry",
    "MilkOutEntry",
    "MilkSpoiltEntry",
    "HealthStatus",
    "ActionStatus",
    "MilkingType",
    "PaymentMode",
    "SpoilageCause",
    "InvalidInputError",
    "NotFoundError",
    # herd
    "find_cow",
    "find_member",
    "cow_summary",
    "member_summary",
    "average_daily_production",
    "last_milking_date",
    "member_daily_production",
]
