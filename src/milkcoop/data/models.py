"""Cooperative records: cows, members, milk-in, milk-out and spoilage.

Records arrive from the data service as camelCase JSON. Each record type has a
``from_api`` constructor that validates the payload and converts it into an
immutable dataclass:

- Dates must be ISO ``YYYY-MM-DD`` strings (or ``date`` objects)
- Quantities (liters, prices, losses) must be finite, non-negative numbers
- Cow, member and owner IDs must be present and non-empty

Anything else raises InvalidInputError before the record reaches the
aggregators.
"""

import logging
import math
import re
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import TypeVar

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)
R = TypeVar("R")

_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


# =============================================================================
# Exceptions
# =============================================================================


class InvalidInputError(ValueError):
    """Raised when a record has a missing ID, a bad quantity or a malformed date."""

    pass


class NotFoundError(LookupError):
    """Raised when a referenced cow or member is not in the provided collection."""

    pass


# =============================================================================
# Enumerations
# =============================================================================


class HealthStatus(Enum):
    """Health status recorded on a cow."""

    HEALTHY = "HEALTHY"
    SICK = "SICK"
    NEEDS_ATTENTION = "NEEDS_ATTENTION"
    UNDER_TREATMENT = "UNDER_TREATMENT"
    GESTATION = "GESTATION"
    VACCINATED = "VACCINATED"
    ANTIBIOTICS = "ANTIBIOTICS"


class ActionStatus(Enum):
    """Last management action taken on a cow."""

    ACTIVE = "ACTIVE"
    SOLD = "SOLD"
    WORMED = "WORMED"
    VACCINATED = "VACCINATED"
    DECEASED = "DECEASED"


class MilkingType(Enum):
    """Milking session."""

    MORNING = "MORNING"
    EVENING = "EVENING"


class PaymentMode(Enum):
    CASH = "CASH"
    MPESA = "MPESA"


class SpoilageCause(Enum):
    CONTAMINATION = "CONTAMINATION"
    TEMPERATURE = "TEMPERATURE"
    SOUR = "SOUR"
    IMPROPER_STORAGE = "IMPROPER_STORAGE"
    EQUIPMENT_FAILURE = "EQUIPMENT_FAILURE"
    EXPIRED = "EXPIRED"
    OTHER = "OTHER"


# =============================================================================
# Parsing Helpers
# =============================================================================


def parse_date(value: str | date | None, field: str) -> date:
    """Parse a YYYY-MM-DD date, raising InvalidInputError on anything malformed."""
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise InvalidInputError(f"{field}: expected YYYY-MM-DD date, got {value!r}")
    # fromisoformat also takes basic and week formats ("20250610", "2025-W24-2")
    if not _DATE_PATTERN.fullmatch(value):
        raise InvalidInputError(f"{field}: malformed date {value!r}")
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise InvalidInputError(f"{field}: malformed date {value!r}") from e


def parse_optional_date(value: str | date | None, field: str) -> date | None:
    if value is None or value == "":
        return None
    return parse_date(value, field)


def parse_quantity(value: float | int | str | None, field: str) -> float:
    """Parse a non-negative quantity."""
    if isinstance(value, bool):
        raise InvalidInputError(f"{field}: expected a number, got {value!r}")
    try:
        quantity = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"{field}: expected a number, got {value!r}") from e
    if not math.isfinite(quantity):
        raise InvalidInputError(f"{field}: expected a finite number, got {value!r}")
    if quantity < 0:
        raise InvalidInputError(f"{field}: must not be negative (got {quantity})")
    return quantity


def parse_id(value: str | None, field: str) -> str:
    """Parse a required record ID."""
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(f"{field}: missing or empty ID")
    return value


def parse_enum(enum_cls: type[E], value: str | E | None, field: str) -> E:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError as e:
        allowed = ", ".join(m.value for m in enum_cls)
        raise InvalidInputError(f"{field}: {value!r} is not one of {allowed}") from e


# =============================================================================
# Records
# =============================================================================


@dataclass(frozen=True)
class Cow:
    """A cow registered with the cooperative.

    Cows are archived (is_active=False) when sold or deceased, never deleted.
    """

    cow_id: str
    name: str
    owner_id: str
    health_status: HealthStatus
    breed: str | None = None
    entry_date: date | None = None
    last_vaccination: date | None = None
    last_antibiotic: date | None = None
    action_status: ActionStatus = ActionStatus.ACTIVE
    is_active: bool = True
    archive_reason: str | None = None
    archive_date: date | None = None

    @classmethod
    def from_api(cls, data: dict) -> "Cow":
        """
        Build a Cow from the data service format.

        The service nests health information under ``status``:
            { cowId, name, ownerId, status: { healthStatus, vaccinationLast, ... } }
        """
        status = data.get("status") or {}
        return cls(
            cow_id=parse_id(data.get("cowId"), "cowId"),
            name=data.get("name") or "",
            owner_id=parse_id(data.get("ownerId"), "ownerId"),
            health_status=parse_enum(HealthStatus, status.get("healthStatus"), "healthStatus"),
            breed=data.get("breed"),
            entry_date=parse_optional_date(data.get("entryDate"), "entryDate"),
            last_vaccination=parse_optional_date(status.get("vaccinationLast"), "vaccinationLast"),
            last_antibiotic=parse_optional_date(status.get("antibioticTreatment"), "antibioticTreatment"),
            action_status=parse_enum(ActionStatus, status.get("actionStatus") or "ACTIVE", "actionStatus"),
            is_active=data.get("isActive", True),
            archive_reason=data.get("archiveReason"),
            archive_date=parse_optional_date(data.get("archiveDate"), "archiveDate"),
        )


@dataclass(frozen=True)
class Member:
    """A cooperative member (cow owner)."""

    member_id: str
    name: str
    is_active: bool = True
    archive_date: date | None = None
    archive_reason: str | None = None

    @classmethod
    def from_api(cls, data: dict) -> "Member":
        return cls(
            member_id=parse_id(data.get("memberId"), "memberId"),
            name=data.get("name") or "",
            is_active=data.get("isActive", True),
            archive_date=parse_optional_date(data.get("archiveDate"), "archiveDate"),
            archive_reason=data.get("archiveReason"),
        )


@dataclass(frozen=True)
class MilkInEntry:
    """Milk collected from one cow in one milking session."""

    cow_id: str | None
    owner_id: str
    liters: float
    date: date
    milking_type: MilkingType
    entry_id: str | None = None

    @classmethod
    def from_api(cls, data: dict) -> "MilkInEntry":
        return cls(
            cow_id=data.get("cowId"),
            owner_id=parse_id(data.get("ownerId"), "ownerId"),
            liters=parse_quantity(data.get("liters"), "liters"),
            date=parse_date(data.get("date"), "date"),
            milking_type=parse_enum(MilkingType, data.get("milkingType"), "milkingType"),
            entry_id=data.get("entryId"),
        )


@dataclass(frozen=True)
class MilkOutEntry:
    """A milk sale."""

    customer_name: str
    quantity_sold: float
    price_per_liter: float
    payment_mode: PaymentMode
    date: date
    sale_id: str | None = None
    customer_id: str | None = None

    @property
    def amount(self) -> float:
        """Revenue from this sale."""
        return self.quantity_sold * self.price_per_liter

    @classmethod
    def from_api(cls, data: dict) -> "MilkOutEntry":
        return cls(
            customer_name=data.get("customerName") or "",
            quantity_sold=parse_quantity(data.get("quantitySold"), "quantitySold"),
            price_per_liter=parse_quantity(data.get("pricePerLiter"), "pricePerLiter"),
            payment_mode=parse_enum(PaymentMode, data.get("paymentMode"), "paymentMode"),
            date=parse_date(data.get("date"), "date"),
            sale_id=data.get("saleId"),
            customer_id=data.get("customerId"),
        )


@dataclass(frozen=True)
class MilkSpoiltEntry:
    """Milk written off as spoilt.

    loss_amount is valued when the entry is recorded and kept as-is, even if
    the unit price later changes.
    """

    amount_spoilt: float
    loss_amount: float
    date: date
    cause: SpoilageCause | None = None
    spoilt_id: str | None = None

    @classmethod
    def from_api(cls, data: dict) -> "MilkSpoiltEntry":
        cause = data.get("cause")
        return cls(
            amount_spoilt=parse_quantity(data.get("amountSpoilt"), "amountSpoilt"),
            loss_amount=parse_quantity(data.get("lossAmount"), "lossAmount"),
            date=parse_date(data.get("date"), "date"),
            cause=parse_enum(SpoilageCause, cause, "cause") if cause else None,
            spoilt_id=data.get("spoiltId"),
        )


def parse_records(record_cls: type[R], items: list[dict]) -> list[R]:
    """Parse a list of API payloads, failing on the first invalid record."""
    records = []
    for index, item in enumerate(items):
        try:
            records.append(record_cls.from_api(item))
        except InvalidInputError as e:
            logger.warning("Rejected %s #%d: %s", record_cls.__name__, index, e)
            raise
    return records
