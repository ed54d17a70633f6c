"""Analysis modules - milk eligibility, inventory, earnings and member statistics."""

from milkcoop.analysis.earnings import (
    customer_earnings,
    daily_earnings,
    earnings,
    earnings_summary,
    monthly_comparison,
    recent_transactions,
    total_spoilage_loss,
)
from milkcoop.analysis.eligibility import (
    EligibilityResult,
    bulk_eligibility,
    evaluate,
    evaluate_by_id,
    health_details,
    waiting_period_end,
)
from milkcoop.analysis.inventory import (
    MONTHLY_WINDOW,
    TODAY_WINDOW,
    WEEKLY_WINDOW,
    check_sale_against_stock,
    current_stock,
    daily_production,
    group_by_day,
    monthly_stock_summary,
    period_totals,
    spoilage_loss,
    spoilage_summary,
    stock_summary,
)
from milkcoop.analysis.members import member_statistics

__all__ = [
    # eligibility
    "EligibilityResult",
    "evaluate",
    "evaluate_by_id",
    "waiting_period_end",
    "health_details",
    "bulk_eligibility",
    # inventory
    "current_stock",
    "daily_production",
    "period_totals",
    "group_by_day",
    "stock_summary",
    "monthly_stock_summary",
    "spoilage_loss",
    "spoilage_summary",
    "check_sale_against_stock",
    "TODAY_WINDOW",
    "WEEKLY_WINDOW",
    "MONTHLY_WINDOW",
    # earnings
    "earnings",
    "earnings_summary",
    "monthly_comparison",
    "recent_transactions",
    "daily_earnings",
    "customer_earnings",
    "total_spoilage_loss",
    # members
    "member_statistics",
]
