"""
Tests for DuckDB persistence and the JSONL audit log.
"""
from datetime import date

import pytest

from engine.finalizer import record_cash_collection
from models.rent_record import PaymentMethod
from storage.audit_log import AuditLog
from storage.database import Database


@pytest.fixture
def db(tmp_path):
    database = Database(db_path=str(tmp_path / "rent.duckdb"), enabled=True)
    yield database
    database.close()


# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------

class TestDatabase:
    def test_records_round_trip(self, db, ledger):
        db.save_records(ledger)
        loaded = db.load_records()
        assert loaded == ledger

    def test_duplicate_ids_are_ignored(self, db, ledger):
        db.save_records(ledger)
        db.save_records(ledger)
        assert len(db.load_records()) == 2

    def test_records_newest_first(self, db, ledger):
        db.save_records(list(reversed(ledger)))
        assert [r.date for r in db.load_records()] == [date(2024, 3, 5), date(2024, 2, 3)]

    def test_units_keep_order(self, db, units):
        db.save_units(units)
        assert [u.id for u in db.load_units()] == ["u1", "u2", "u3", "u4"]
        assert db.load_units()[0].tenant_phone == "0788123456"

    def test_save_units_replaces(self, db, units):
        db.save_units(units)
        units[1].tenant_name = "Eric"
        db.save_units(units)
        loaded = db.load_units()
        assert len(loaded) == 4
        assert loaded[1].tenant_name == "Eric"

    def test_delete_unit(self, db, units):
        db.save_units(units)
        db.delete_unit("u4")
        assert [u.id for u in db.load_units()] == ["u1", "u2", "u3"]

    def test_cash_record_keeps_unit_link(self, db, units):
        record = record_cash_collection(units[0], today=date(2024, 3, 10))
        db.save_records([record])
        loaded = db.load_records()[0]
        assert loaded.unit_id == "u1"
        assert loaded.payment_method == PaymentMethod.CASH
        assert loaded.is_verified


def test_disabled_database_is_noop(ledger, units):
    database = Database(enabled=False)
    database.save_records(ledger)
    database.save_units(units)
    assert database.load_records() == []
    assert database.load_units() == []


def test_in_memory_database(ledger):
    database = Database(db_path=":memory:", enabled=True)
    database.save_records(ledger)
    assert len(database.load_records()) == 2
    database.close()


# ---------------------------------------------------------------------------
# AuditLog
# ---------------------------------------------------------------------------

class TestAuditLog:
    def test_record_added(self, tmp_path, ledger):
        log = AuditLog(log_path=str(tmp_path / "logs" / "audit.jsonl"))
        log.log_record_added(ledger[0], user="Tenant")
        entries = log.get_recent_logs()
        assert len(entries) == 1
        assert entries[0]["action"] == "record_added"
        assert entries[0]["user"] == "Tenant"
        assert entries[0]["details"]["amount"] == 150000

    def test_unit_change(self, tmp_path, units):
        log = AuditLog(log_path=str(tmp_path / "audit.jsonl"))
        log.log_unit_change("moved_out", units[0], user="Landlord")
        assert log.get_recent_logs()[0]["action"] == "unit_moved_out"

    def test_recent_logs_limit(self, tmp_path, units):
        log = AuditLog(log_path=str(tmp_path / "audit.jsonl"))
        for unit in units:
            log.log_unit_change("added", unit, user="Landlord")
        recent = log.get_recent_logs(limit=2)
        assert [e["details"]["unit_id"] for e in recent] == ["u3", "u4"]

    def test_missing_log_file(self, tmp_path):
        assert AuditLog(log_path=str(tmp_path / "none.jsonl")).get_recent_logs() == []
