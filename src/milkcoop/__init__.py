"""Dairy cooperative milk tracking tools.

This package provides the business logic behind a small dairy cooperative's
milk records: which cows may be milked, how much milk is in stock, and what
the cooperative has earned.

Subpackages:
- milkcoop.core: Configuration, data service client, display units
- milkcoop.data: Cow, member and milk entry records; herd summaries
- milkcoop.analysis: Milk eligibility, inventory and earnings aggregation
- milkcoop.cli: Command-line reports
"""

# Re-export common items for convenience
from milkcoop.core import fetch_all, settings

__all__ = [
    "settings",
    "fetch_all",
]

__version__ = "0.1.0"
