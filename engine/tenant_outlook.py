"""
Tenant-side outlook: when the next rent is due, based on the tenant's own payments
"""
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from dateutil.relativedelta import relativedelta

from config import settings
from models.rent_record import RentRecord


@dataclass
class TenantOutlook:
    """Next-due projection shown on the tenant home screen"""
    next_due_date: date
    days_until_due: int
    is_late: bool
    is_due_soon: bool
    total_paid: float
    last_payment: Optional[RentRecord] = None


def latest_payment(records: Iterable[RentRecord]) -> Optional[RentRecord]:
    """Most recent record by transaction date"""
    records = list(records or [])
    if not records:
        return None
    return max(records, key=lambda r: r.date)


def tenant_outlook(records: Iterable[RentRecord], today: Optional[date] = None) -> TenantOutlook:
    """
    Project the next due date as one month after the latest payment.
    With no payments yet, rent is due today.
    """
    today = today or date.today()
    records = list(records or [])
    last = latest_payment(records)

    next_due = last.date + relativedelta(months=1) if last else today
    days = (next_due - today).days

    return TenantOutlook(
        next_due_date=next_due,
        days_until_due=days,
        is_late=days < 0,
        is_due_soon=0 <= days <= settings.DUE_SOON_DAYS,
        total_paid=float(sum(r.amount for r in records)),
        last_payment=last,
    )
