"""
Reconciliation engine - derives per-unit payment status and portfolio aggregates
for a billing cycle from the ledger and the unit roster.

Everything here is recomputed from the snapshot passed in; nothing is cached
between calls.
"""
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

import pandas as pd
from dateutil.relativedelta import relativedelta

from config import settings
from models.rent_record import RentRecord
from models.unit import Unit, UnitStatus
from utils.helpers import last_day_of_month, round_half_up


STATUS_FILTERS = ("all", "late", "paid", "vacant")

# "late" is the needs-attention view and includes units not yet overdue
_FILTER_STATUSES = {
    "late": {UnitStatus.LATE, UnitStatus.PENDING},
    "paid": {UnitStatus.PAID},
    "vacant": {UnitStatus.VACANT},
}


@dataclass(frozen=True)
class BillingCycle:
    """A calendar month, evaluated as of `today`"""
    month: int
    year: int
    today: date

    @classmethod
    def for_date(cls, today: Optional[date] = None) -> "BillingCycle":
        today = today or date.today()
        return cls(month=today.month, year=today.year, today=today)

    def contains(self, value: date) -> bool:
        return value is not None and value.month == self.month and value.year == self.year

    @property
    def label(self) -> str:
        return date(self.year, self.month, 1).strftime("%b %Y")


@dataclass
class PortfolioSummary:
    """Portfolio aggregates for one cycle"""
    collected: float = 0.0
    expected: float = 0.0
    collection_rate: int = 0
    occupancy_rate: int = 0
    occupied_units: int = 0
    total_units: int = 0


@dataclass
class ReconciliationResult:
    """Per-unit status (in roster order) and cycle aggregates"""
    per_unit: Dict[str, UnitStatus] = field(default_factory=dict)
    aggregates: PortfolioSummary = field(default_factory=PortfolioSummary)

    def count(self, status: UnitStatus) -> int:
        return sum(1 for s in self.per_unit.values() if s == status)


def names_match(record_name: Optional[str], tenant_name: Optional[str]) -> bool:
    """
    Case-insensitive substring match in either direction.

    No minimum length: a very short name can match many tenants.
    """
    if not record_name or not tenant_name:
        return False
    left = record_name.strip().lower()
    right = tenant_name.strip().lower()
    if not left or not right:
        return False
    return left in right or right in left


def record_matches_unit(record: RentRecord, unit: Unit) -> bool:
    """
    A record settles every unit whose tenant name matches its payer.

    The unit reference only adds a match, and only for records that carry no
    real payer name (blank or the self placeholder). A record naming another
    tenant never settles the unit, so a previous tenant's payment does not
    cover a new tenant mid-cycle.
    """
    if names_match(record.tenant_name, unit.tenant_name):
        return True
    if not record.unit_id or record.unit_id != unit.id:
        return False
    payer = (record.tenant_name or "").strip()
    return not payer or payer == settings.DEFAULT_TENANT


class ReconciliationEngine:
    """
    Matches ledger records to roster units for a billing cycle.

    The engine keeps its own copies of the roster and ledger lists so later
    changes by the caller don't leak into a computation in progress.
    """

    def __init__(self, units: Iterable[Unit], ledger: Iterable[RentRecord]):
        self.units: List[Unit] = list(units or [])
        self.ledger: List[RentRecord] = list(ledger or [])

    def records_in_cycle(self, cycle: BillingCycle) -> List[RentRecord]:
        """Ledger records dated within the cycle's month and year"""
        return [r for r in self.ledger if cycle.contains(r.date)]

    def unit_status(
        self,
        unit: Unit,
        cycle: BillingCycle,
        cycle_records: Optional[Sequence[RentRecord]] = None,
    ) -> UnitStatus:
        """Status of a single unit for the cycle"""
        if not unit.is_occupied:
            return UnitStatus.VACANT

        if cycle_records is None:
            cycle_records = self.records_in_cycle(cycle)

        if any(record_matches_unit(r, unit) for r in cycle_records):
            return UnitStatus.PAID

        if cycle.today.day > unit.due_date_day:
            return UnitStatus.LATE
        return UnitStatus.PENDING

    def summarize(
        self,
        cycle: BillingCycle,
        cycle_records: Optional[Sequence[RentRecord]] = None,
    ) -> PortfolioSummary:
        """Collected / expected revenue, collection rate and occupancy rate"""
        if cycle_records is None:
            cycle_records = self.records_in_cycle(cycle)

        occupied = [u for u in self.units if u.is_occupied]
        expected = float(sum(u.rent_amount for u in occupied))
        collected = float(sum(r.amount for r in cycle_records))

        collection_rate = round_half_up(collected / expected * 100) if expected > 0 else 0
        occupancy_rate = (
            round_half_up(len(occupied) / len(self.units) * 100) if self.units else 0
        )

        return PortfolioSummary(
            collected=collected,
            expected=expected,
            collection_rate=collection_rate,
            occupancy_rate=occupancy_rate,
            occupied_units=len(occupied),
            total_units=len(self.units),
        )

    def derive(self, cycle: BillingCycle) -> ReconciliationResult:
        """Per-unit statuses and aggregates for the cycle"""
        cycle_records = self.records_in_cycle(cycle)
        per_unit = {
            unit.id: self.unit_status(unit, cycle, cycle_records)
            for unit in self.units
        }
        return ReconciliationResult(
            per_unit=per_unit,
            aggregates=self.summarize(cycle, cycle_records),
        )

    def filter_units(self, status_filter: str, cycle: BillingCycle) -> List[Unit]:
        """Units shown under a dashboard filter (all / late / paid / vacant)"""
        result = self.derive(cycle)
        return filter_units(self.units, result.per_unit, status_filter)

    def collection_trend(self, today: Optional[date] = None, months: int = 6) -> List[Dict]:
        """
        Collected vs expected for the last `months` cycles ending at `today`, oldest first.
        Past cycles are evaluated as of their last day.
        """
        today = today or date.today()
        current = date(today.year, today.month, 1)

        trend = []
        for offset in range(months - 1, -1, -1):
            month_start = current - relativedelta(months=offset)
            if offset == 0:
                as_of = today
            else:
                as_of = last_day_of_month(month_start.year, month_start.month)
            cycle = BillingCycle.for_date(as_of)
            summary = self.summarize(cycle)
            trend.append({
                'month': month_start,
                'label': cycle.label,
                'collected': summary.collected,
                'expected': summary.expected,
                'collection_rate': summary.collection_rate,
            })
        return trend

    def to_dataframe(self, cycle: BillingCycle) -> pd.DataFrame:
        """Roster with derived status, one row per unit"""
        if not self.units:
            return pd.DataFrame()

        result = self.derive(cycle)
        data = []
        for u in self.units:
            data.append({
                'unit_id': u.id,
                'unit': u.name,
                'tenant': u.display_tenant,
                'rent_amount': u.rent_amount,
                'due_day': u.due_date_day,
                'status': result.per_unit[u.id].value,
            })
        return pd.DataFrame(data)


def filter_units(
    units: Sequence[Unit],
    statuses: Dict[str, UnitStatus],
    status_filter: str,
) -> List[Unit]:
    """
    Select units by derived status.

    'late' includes pending units; 'paid' and 'vacant' are exact.

    Raises:
        ValueError: If status_filter is not one of STATUS_FILTERS.
    """
    key = (status_filter or "").strip().lower()
    if key not in STATUS_FILTERS:
        raise ValueError(
            f"Unknown status filter: {status_filter!r}. Expected one of {', '.join(STATUS_FILTERS)}"
        )
    if key == "all":
        return list(units)

    wanted = _FILTER_STATUSES[key]
    return [u for u in units if statuses.get(u.id) in wanted]


def derive_status(
    units: Iterable[Unit],
    ledger: Iterable[RentRecord],
    cycle: Optional[BillingCycle] = None,
) -> ReconciliationResult:
    """
    Compute per-unit status and portfolio aggregates for a billing cycle.

    Args:
        units: Roster snapshot.
        ledger: Ledger snapshot.
        cycle: Billing cycle; defaults to the one containing today.

    Returns:
        ReconciliationResult
    """
    cycle = cycle or BillingCycle.for_date()
    return ReconciliationEngine(units, ledger).derive(cycle)
