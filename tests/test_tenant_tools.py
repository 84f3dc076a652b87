"""
Tests for the tenant outlook, reminders and receipts.
"""
from datetime import date
from urllib.parse import unquote

from engine.reminders import receipt_text, reminder_message, whatsapp_link
from engine.tenant_outlook import latest_payment, tenant_outlook
from models.unit import Unit


# ---------------------------------------------------------------------------
# Tenant outlook
# ---------------------------------------------------------------------------

class TestTenantOutlook:
    def test_no_payments_due_today(self):
        outlook = tenant_outlook([], today=date(2024, 3, 10))
        assert outlook.next_due_date == date(2024, 3, 10)
        assert outlook.days_until_due == 0
        assert outlook.is_due_soon
        assert not outlook.is_late
        assert outlook.total_paid == 0
        assert outlook.last_payment is None

    def test_next_due_one_month_after_latest(self, ledger):
        outlook = tenant_outlook(ledger, today=date(2024, 3, 10))
        assert outlook.next_due_date == date(2024, 4, 5)
        assert outlook.days_until_due == 26
        assert not outlook.is_due_soon
        assert outlook.total_paid == 250000

    def test_due_soon(self, ledger):
        outlook = tenant_outlook(ledger, today=date(2024, 4, 1))
        assert outlook.days_until_due == 4
        assert outlook.is_due_soon

    def test_late(self, ledger):
        outlook = tenant_outlook(ledger, today=date(2024, 4, 8))
        assert outlook.days_until_due == -3
        assert outlook.is_late
        assert not outlook.is_due_soon

    def test_month_end_is_clamped(self, record_factory):
        outlook = tenant_outlook([record_factory(paid_on=date(2024, 1, 31))], today=date(2024, 2, 1))
        assert outlook.next_due_date == date(2024, 2, 29)


def test_latest_payment(ledger):
    assert latest_payment(ledger).date == date(2024, 3, 5)
    assert latest_payment([]) is None


# ---------------------------------------------------------------------------
# Reminders and receipts
# ---------------------------------------------------------------------------

def test_reminder_message(units):
    message = reminder_message(units[0])
    assert message.startswith("Hello Keza Marie")
    assert "Apt 1A" in message
    assert "150,000 RWF" in message


class TestWhatsappLink:
    def test_local_number_gets_country_prefix(self, units):
        link = whatsapp_link(units[0])
        assert link.startswith("https://wa.me/250788123456?text=")
        assert unquote(link.split("text=", 1)[1]) == reminder_message(units[0])

    def test_international_number_used_as_is(self):
        unit = Unit(id="x", name="X", tenant_name="Eric", rent_amount=1000, tenant_phone="+250 788 000 111")
        assert whatsapp_link(unit, message="hi") == "https://wa.me/250788000111?text=hi"

    def test_no_phone(self, units):
        assert whatsapp_link(units[1]) is None


def test_receipt_text(units, record_factory):
    record = record_factory(record_id="abcdef123456", tenant_name="Keza Marie", is_verified=True)
    text = receipt_text(record, units[0])
    lines = text.splitlines()
    assert lines[0] == "RENT RECEIPT"
    assert "Receipt No: ABCDEF12" in lines
    assert "Unit: Apt 1A" in lines
    assert "Amount: 150,000 RWF" in lines
    assert lines[-1] == "Verified by landlord"


def test_receipt_text_unverified(record_factory):
    text = receipt_text(record_factory())
    assert "Verified by landlord" not in text
    assert "Unit:" not in text
