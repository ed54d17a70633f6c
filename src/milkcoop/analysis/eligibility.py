"""
Milk collection eligibility.

Decides whether milk may be collected from a cow on a given day, based on
its health status and the withholding periods that follow treatment:

- SICK / UNDER_TREATMENT: never collected
- VACCINATED: blocked for 48 hours after the recorded vaccination
- ANTIBIOTICS: blocked for 72 hours after the recorded antibiotic treatment
- HEALTHY: collected
- NEEDS_ATTENTION / GESTATION: collected, with a warning

Treatment records carry a date only (no time of day), so waiting periods are
applied in whole days: a vaccination on D blocks D and D+1 and clears on D+2.

"Today" is always passed in by the caller; nothing here reads the clock.
"""

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import TypedDict

from milkcoop.core.config import settings
from milkcoop.data.herd import find_cow
from milkcoop.data.models import Cow, HealthStatus

# Statuses that block collection outright, regardless of dates
BLOCKING_STATUSES = frozenset({HealthStatus.SICK, HealthStatus.UNDER_TREATMENT})

# Statuses that allow collection but should be flagged to the operator
WARNING_STATUSES = {
    HealthStatus.NEEDS_ATTENTION: "Needs attention - check the cow before milking",
    HealthStatus.GESTATION: "In gestation - monitor milk quality",
}


@dataclass(frozen=True)
class EligibilityResult:
    """Outcome of an eligibility check for one cow."""

    can_collect: bool
    blocking_reason: str | None = None
    blocked_until: date | None = None
    warning: str | None = None


class HealthDetails(TypedDict):
    """Health details for one cow, as shown before recording a milk-in entry."""

    cow_id: str
    name: str
    health_status: str
    vaccination_last: date | None
    vaccination_waiting_period_end: date | None
    antibiotic_treatment: date | None
    antibiotic_waiting_period_end: date | None
    can_collect_milk: bool
    blocked_reason: str | None


@dataclass
class BulkEligibility:
    """Eligibility for a group of cows."""

    cows: list[tuple[Cow, EligibilityResult]] = field(default_factory=list)

    @property
    def total_cows(self) -> int:
        return len(self.cows)

    @property
    def eligible_cows(self) -> int:
        return sum(1 for _, result in self.cows if result.can_collect)

    @property
    def blocked_cows(self) -> int:
        return self.total_cows - self.eligible_cows


def _hours_to_days(hours: int) -> int:
    """Round a waiting period up to whole days (dates carry no time of day)."""
    return -(-hours // 24)


def vaccination_waiting_end(vaccinated_on: date) -> date:
    """First day milk may be collected after a vaccination."""
    return vaccinated_on + timedelta(days=_hours_to_days(settings.vaccination_waiting_hours))


def antibiotic_waiting_end(treated_on: date) -> date:
    """First day milk may be collected after an antibiotic treatment."""
    return treated_on + timedelta(days=_hours_to_days(settings.antibiotic_waiting_hours))


def waiting_period_end(cow: Cow) -> date | None:
    """
    Get the end of the waiting period that applies to a cow's current status.

    Returns None when the status carries no waiting period or the treatment
    date was never recorded.
    """
    if cow.health_status is HealthStatus.VACCINATED and cow.last_vaccination:
        return vaccination_waiting_end(cow.last_vaccination)
    if cow.health_status is HealthStatus.ANTIBIOTICS and cow.last_antibiotic:
        return antibiotic_waiting_end(cow.last_antibiotic)
    return None


def evaluate(cow: Cow, today: date) -> EligibilityResult:
    """
    Decide whether milk may be collected from a cow today.

    Args:
        cow: The cow to check
        today: The collection date

    Returns:
        EligibilityResult; blocking_reason is set whenever can_collect is False
    """
    status = cow.health_status

    if status in BLOCKING_STATUSES:
        return EligibilityResult(False, f"{status.value} — cannot collect milk")

    if status in (HealthStatus.VACCINATED, HealthStatus.ANTIBIOTICS):
        treated_on = cow.last_vaccination if status is HealthStatus.VACCINATED else cow.last_antibiotic
        if treated_on is None:
            # No treatment date means the waiting period cannot be shown to be over
            return EligibilityResult(
                False, f"{status.value} — cannot collect milk: treatment date not recorded"
            )

        ends = waiting_period_end(cow)
        if today < ends:
            return EligibilityResult(
                False,
                f"{status.value} — cannot collect milk until {ends.isoformat()} (waiting period)",
                blocked_until=ends,
            )
        return EligibilityResult(True)

    return EligibilityResult(True, warning=WARNING_STATUSES.get(status))


def evaluate_by_id(cows: list[Cow], cow_id: str, today: date) -> EligibilityResult:
    """Evaluate a cow by ID; raises NotFoundError if it is not in ``cows``."""
    return evaluate(find_cow(cows, cow_id), today)


def health_details(cow: Cow, today: date) -> HealthDetails:
    """Collect treatment dates, waiting period ends and eligibility for one cow."""
    result = evaluate(cow, today)
    return {
        "cow_id": cow.cow_id,
        "name": cow.name,
        "health_status": cow.health_status.value,
        "vaccination_last": cow.last_vaccination,
        "vaccination_waiting_period_end": vaccination_waiting_end(cow.last_vaccination)
        if cow.last_vaccination
        else None,
        "antibiotic_treatment": cow.last_antibiotic,
        "antibiotic_waiting_period_end": antibiotic_waiting_end(cow.last_antibiotic)
        if cow.last_antibiotic
        else None,
        "can_collect_milk": result.can_collect,
        "blocked_reason": result.blocking_reason,
    }


def bulk_eligibility(
    cows: list[Cow],
    today: date,
    owner_id: str | None = None,
    active_only: bool = True,
) -> BulkEligibility:
    """
    Evaluate every cow, optionally restricted to one member's herd.

    Args:
        cows: All known cows
        today: The collection date
        owner_id: Only include cows owned by this member
        active_only: Skip archived cows (default True)

    Returns:
        BulkEligibility with per-cow results and eligible/blocked counts
    """
    report = BulkEligibility()
    for cow in cows:
        if active_only and not cow.is_active:
            continue
        if owner_id is not None and cow.owner_id != owner_id:
            continue
        report.cows.append((cow, evaluate(cow, today)))
    return report
