"""
Tests for engine.reconciliation: unit status, aggregates, filters and trend.
"""
from datetime import date

import pytest

from engine.reconciliation import (
    BillingCycle,
    ReconciliationEngine,
    derive_status,
    filter_units,
    names_match,
    record_matches_unit,
)
from engine.finalizer import record_cash_collection
from models.unit import Unit, UnitStatus


@pytest.fixture
def cycle(today):
    return BillingCycle.for_date(today)


# ---------------------------------------------------------------------------
# BillingCycle
# ---------------------------------------------------------------------------

class TestBillingCycle:
    def test_for_date(self, today):
        cycle = BillingCycle.for_date(today)
        assert (cycle.month, cycle.year, cycle.today) == (3, 2024, today)

    def test_contains_same_month_only(self, cycle):
        assert cycle.contains(date(2024, 3, 1))
        assert cycle.contains(date(2024, 3, 31))
        assert not cycle.contains(date(2024, 2, 29))
        assert not cycle.contains(date(2023, 3, 15))

    def test_label(self, cycle):
        assert cycle.label == "Mar 2024"


# ---------------------------------------------------------------------------
# Matching
# ---------------------------------------------------------------------------

class TestNamesMatch:
    def test_substring_either_direction(self):
        assert names_match("Keza", "Keza Marie")
        assert names_match("Keza Marie Uwimana", "Keza Marie")

    def test_case_insensitive(self):
        assert names_match("KEZA", "keza marie")

    def test_blank_never_matches(self):
        assert not names_match("", "Keza")
        assert not names_match("Keza", None)
        assert not names_match("   ", "Keza")

    def test_short_name_matches_many(self):
        assert names_match("a", "Aline Uwase")
        assert names_match("a", "Keza Marie")


class TestRecordMatchesUnit:
    def test_name_match_regardless_of_unit_id(self, units, record_factory):
        record = record_factory(tenant_name="Keza", unit_id="u2")
        assert record_matches_unit(record, units[0])

    def test_unit_id_settles_unnamed_payer(self, units, record_factory):
        assert record_matches_unit(record_factory(tenant_name="Me", unit_id="u2"), units[1])
        assert record_matches_unit(record_factory(tenant_name="  ", unit_id="u2"), units[1])
        assert not record_matches_unit(record_factory(tenant_name="Me", unit_id="u1"), units[1])

    def test_unit_id_with_other_tenant_name_does_not_match(self, units, record_factory):
        record = record_factory(tenant_name="Someone Else", unit_id="u1")
        assert not record_matches_unit(record, units[0])

    def test_falls_back_to_name(self, units, record_factory):
        assert record_matches_unit(record_factory(tenant_name="Keza"), units[0])

    def test_cash_payment_settles_every_matching_unit(self, today):
        roster = [
            Unit(id="a", name="A", tenant_name="Marie", rent_amount=10000),
            Unit(id="b", name="B", tenant_name="Anne Marie", rent_amount=10000),
        ]
        record = record_cash_collection(roster[0], today=today)
        result = derive_status(roster, [record], BillingCycle.for_date(today))
        assert result.per_unit == {"a": UnitStatus.PAID, "b": UnitStatus.PAID}

    def test_previous_tenant_cash_payment_does_not_cover_new_tenant(self, today):
        unit = Unit(id="a", name="A", tenant_name="Keza", rent_amount=10000, due_date_day=1)
        record = record_cash_collection(unit, today=today)
        retenanted = Unit(id="a", name="A", tenant_name="Jean", rent_amount=10000, due_date_day=1)
        result = derive_status([retenanted], [record], BillingCycle.for_date(today))
        assert result.per_unit == {"a": UnitStatus.LATE}


# ---------------------------------------------------------------------------
# Unit status
# ---------------------------------------------------------------------------

class TestUnitStatus:
    def test_paid_via_substring_name(self, units, record_factory, today):
        result = derive_status(units, [record_factory(tenant_name="Keza")], BillingCycle.for_date(today))
        assert result.per_unit["u1"] == UnitStatus.PAID

    def test_late_after_due_day(self, units, ledger, cycle):
        # Jean Bosco paid in February only; due day 1, today is the 10th
        result = derive_status(units, ledger, cycle)
        assert result.per_unit["u2"] == UnitStatus.LATE

    def test_pending_before_due_day(self, units, ledger, cycle):
        result = derive_status(units, ledger, cycle)
        assert result.per_unit["u3"] == UnitStatus.PENDING

    def test_pending_on_due_day(self):
        unit = Unit(id="x", name="X", tenant_name="Eric", rent_amount=50000, due_date_day=10)
        result = derive_status([unit], [], BillingCycle.for_date(date(2024, 3, 10)))
        assert result.per_unit["x"] == UnitStatus.PENDING

    def test_pending_on_first_with_due_day_five(self):
        unit = Unit(id="x", name="X", tenant_name="Eric", rent_amount=50000, due_date_day=5)
        result = derive_status([unit], [], BillingCycle.for_date(date(2024, 3, 1)))
        assert result.per_unit["x"] == UnitStatus.PENDING

    def test_vacant_regardless_of_records(self, units, record_factory, cycle):
        result = derive_status(units, [record_factory(tenant_name="Vacant")], cycle)
        assert result.per_unit["u4"] == UnitStatus.VACANT

    def test_blank_tenant_is_vacant(self, cycle):
        unit = Unit(id="x", name="X", tenant_name="  ", rent_amount=50000)
        assert derive_status([unit], [], cycle).per_unit["x"] == UnitStatus.VACANT

    def test_one_record_can_settle_several_units(self, record_factory, cycle):
        roster = [
            Unit(id="a", name="A", tenant_name="Marie", rent_amount=10000),
            Unit(id="b", name="B", tenant_name="Anne Marie", rent_amount=10000),
        ]
        result = derive_status(roster, [record_factory(tenant_name="Marie")], cycle)
        assert result.per_unit == {"a": UnitStatus.PAID, "b": UnitStatus.PAID}

    def test_per_unit_keeps_roster_order(self, units, ledger, cycle):
        result = derive_status(units, ledger, cycle)
        assert list(result.per_unit) == ["u1", "u2", "u3", "u4"]


# ---------------------------------------------------------------------------
# Aggregates
# ---------------------------------------------------------------------------

class TestSummary:
    def test_aggregates(self, units, ledger, cycle):
        summary = derive_status(units, ledger, cycle).aggregates
        assert summary.collected == 150000
        assert summary.expected == 370000
        assert summary.collection_rate == 41
        assert summary.occupancy_rate == 75
        assert summary.occupied_units == 3
        assert summary.total_units == 4

    def test_occupancy_three_of_four(self, cycle):
        roster = [
            Unit(id="a", name="A1", tenant_name="Keza Marie", rent_amount=150000),
            Unit(id="b", name="A2", tenant_name="Jean Bosco", rent_amount=150000),
            Unit(id="c", name="B1", tenant_name="Aline", rent_amount=200000),
            Unit(id="d", name="B2", tenant_name="Vacant", rent_amount=200000),
        ]
        summary = derive_status(roster, [], cycle).aggregates
        assert summary.occupancy_rate == 75
        assert summary.expected == 500000
        assert summary.collection_rate == 0

    def test_collected_counts_unmatched_records(self, units, record_factory, cycle):
        ledger = [record_factory(amount=20000, tenant_name="Stranger")]
        summary = derive_status(units, ledger, cycle).aggregates
        assert summary.collected == 20000

    def test_zero_expected_gives_zero_rate(self, record_factory, cycle):
        roster = [Unit(id="v", name="V", tenant_name="Vacant", rent_amount=80000)]
        summary = derive_status(roster, [record_factory()], cycle).aggregates
        assert summary.expected == 0
        assert summary.collection_rate == 0

    def test_empty_roster(self, cycle):
        result = derive_status([], [], cycle)
        assert result.per_unit == {}
        assert result.aggregates.occupancy_rate == 0
        assert result.aggregates.collection_rate == 0

    def test_rate_rounds_half_up(self, record_factory, cycle):
        roster = [Unit(id="a", name="A", tenant_name="Eric", rent_amount=8)]
        summary = derive_status(roster, [record_factory(amount=1, tenant_name="Other")], cycle).aggregates
        assert summary.collection_rate == 13  # 12.5% rounds up

    def test_overpayment_exceeds_hundred(self, record_factory, cycle):
        roster = [Unit(id="a", name="A", tenant_name="Eric", rent_amount=100000)]
        summary = derive_status(roster, [record_factory(amount=150000, tenant_name="Eric")], cycle).aggregates
        assert summary.collection_rate == 150


# ---------------------------------------------------------------------------
# Determinism and snapshot isolation
# ---------------------------------------------------------------------------

def test_derive_is_deterministic(units, ledger, cycle):
    assert derive_status(units, ledger, cycle) == derive_status(units, ledger, cycle)


def test_engine_copies_inputs(units, ledger, record_factory, cycle):
    engine = ReconciliationEngine(units, ledger)
    ledger.append(record_factory(tenant_name="Jean Bosco"))
    units.pop()
    result = engine.derive(cycle)
    assert result.per_unit["u2"] == UnitStatus.LATE
    assert result.aggregates.total_units == 4


def test_count(units, ledger, cycle):
    result = derive_status(units, ledger, cycle)
    assert result.count(UnitStatus.PAID) == 1
    assert result.count(UnitStatus.LATE) == 1
    assert result.count(UnitStatus.PENDING) == 1
    assert result.count(UnitStatus.VACANT) == 1


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------

class TestFilterUnits:
    def test_all(self, units, ledger, cycle):
        assert ReconciliationEngine(units, ledger).filter_units("all", cycle) == units

    def test_late_includes_pending(self, units, ledger, cycle):
        shown = ReconciliationEngine(units, ledger).filter_units("late", cycle)
        assert [u.id for u in shown] == ["u2", "u3"]

    def test_paid(self, units, ledger, cycle):
        shown = ReconciliationEngine(units, ledger).filter_units("paid", cycle)
        assert [u.id for u in shown] == ["u1"]

    def test_vacant(self, units, ledger, cycle):
        shown = ReconciliationEngine(units, ledger).filter_units("vacant", cycle)
        assert [u.id for u in shown] == ["u4"]

    def test_case_insensitive(self, units, ledger, cycle):
        result = derive_status(units, ledger, cycle)
        assert [u.id for u in filter_units(units, result.per_unit, " PAID ")] == ["u1"]

    def test_unknown_filter_raises(self, units, ledger, cycle):
        result = derive_status(units, ledger, cycle)
        with pytest.raises(ValueError, match="Unknown status filter"):
            filter_units(units, result.per_unit, "overdue")


# ---------------------------------------------------------------------------
# Collection trend
# ---------------------------------------------------------------------------

class TestCollectionTrend:
    def test_months_oldest_first(self, units, ledger, today):
        trend = ReconciliationEngine(units, ledger).collection_trend(today, months=3)
        assert [t["label"] for t in trend] == ["Jan 2024", "Feb 2024", "Mar 2024"]
        assert trend[0]["month"] == date(2024, 1, 1)

    def test_values_per_month(self, units, ledger, today):
        trend = ReconciliationEngine(units, ledger).collection_trend(today, months=3)
        assert trend[0]["collected"] == 0
        assert trend[1]["collected"] == 100000
        assert trend[2]["collected"] == 150000
        assert all(t["expected"] == 370000 for t in trend)
        assert trend[1]["collection_rate"] == 27

    def test_crosses_year_boundary(self, units):
        trend = ReconciliationEngine(units, []).collection_trend(date(2024, 1, 20), months=2)
        assert [t["label"] for t in trend] == ["Dec 2023", "Jan 2024"]


def test_to_dataframe(units, ledger, cycle):
    df = ReconciliationEngine(units, ledger).to_dataframe(cycle)
    assert list(df["status"]) == ["paid", "late", "pending", "vacant"]
    assert df.loc[3, "tenant"] == "Vacant"


def test_to_dataframe_empty(cycle):
    assert ReconciliationEngine([], []).to_dataframe(cycle).empty
