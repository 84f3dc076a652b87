"""
Pytest fixtures for the rent intel test suite.
"""
from datetime import date

import pytest

from models.rent_record import DocumentType, PaymentMethod, RentRecord
from models.unit import Unit


def make_record(
    amount=150000,
    paid_on=date(2024, 3, 5),
    tenant_name="Keza",
    unit_id="",
    record_id=None,
    is_verified=False,
    payment_method=PaymentMethod.MOMO,
):
    """Build a finalized ledger record with sensible defaults."""
    return RentRecord(
        id=record_id or f"rec_{tenant_name}_{paid_on.isoformat()}_{amount}",
        amount=float(amount),
        currency="RWF",
        date=paid_on,
        landlord_name="Jean Claude",
        tenant_name=tenant_name,
        payment_method=payment_method,
        description="Rent Payment",
        is_verified=is_verified,
        confidence_score=95,
        document_type=DocumentType.SMS,
        original_text="",
        unit_id=unit_id,
    )


@pytest.fixture
def record_factory():
    """Factory for ledger records."""
    return make_record


@pytest.fixture
def today():
    """Evaluation date inside the March 2024 billing cycle."""
    return date(2024, 3, 10)


@pytest.fixture
def units():
    """Roster of four units: three occupied, one vacant."""
    return [
        Unit(id="u1", name="Apt 1A", tenant_name="Keza Marie", rent_amount=150000,
             due_date_day=1, tenant_phone="0788123456"),
        Unit(id="u2", name="Apt 1B", tenant_name="Jean Bosco", rent_amount=100000, due_date_day=1),
        Unit(id="u3", name="Apt 2A", tenant_name="Aline Uwase", rent_amount=120000, due_date_day=15),
        Unit(id="u4", name="Apt 2B", tenant_name="Vacant", rent_amount=90000, due_date_day=1),
    ]


@pytest.fixture
def ledger():
    """One March payment from Keza plus a February payment from Jean Bosco."""
    return [
        make_record(amount=150000, paid_on=date(2024, 3, 5), tenant_name="Keza"),
        make_record(amount=100000, paid_on=date(2024, 2, 3), tenant_name="Jean Bosco"),
    ]
