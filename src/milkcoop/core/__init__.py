"""Core module - configuration, data service client and display units."""

from milkcoop.core import client, units
from milkcoop.core.client import (
    CooperativeData,
    MilkServiceError,
    RetryableError,
    fetch_all,
    get_cows,
    get_json,
    get_json_with_retry,
    get_members,
    get_milk_in_entries,
    get_milk_out_entries,
    get_milk_spoilt_entries,
)
from milkcoop.core.config import settings
from milkcoop.core.units import format_currency, format_liters, format_status

__all__ = [
    "client",
    "units",
    "settings",
    "get_json",
    "get_json_with_retry",
    "RetryableError",
    "MilkServiceError",
    "CooperativeData",
    "fetch_all",
    "get_cows",
    "get_members",
    "get_milk_in_entries",
    "get_milk_out_entries",
    "get_milk_spoilt_entries",
    # Display helpers
    "format_liters",
    "format_currency",
    "format_status",
]
