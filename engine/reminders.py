"""
Tenant reminder and receipt messages
"""
import re
from typing import Optional
from urllib.parse import quote

from config import settings
from models.rent_record import RentRecord
from models.unit import Unit
from utils.helpers import format_currency


def reminder_message(unit: Unit) -> str:
    """Rent-due reminder text for the unit's tenant"""
    return (
        f"Hello {unit.tenant_name}, this is a reminder that rent for {unit.name} "
        f"({format_currency(unit.rent_amount)}) is due. Please pay via MoMo or Cash."
    )


def whatsapp_link(unit: Unit, message: Optional[str] = None) -> Optional[str]:
    """
    wa.me deep link carrying the reminder, or None when the tenant has no phone.
    Local numbers (07xx...) get the country prefix; numbers given with a
    leading + are used as-is.
    """
    if not unit.tenant_phone or not unit.tenant_phone.strip():
        return None

    raw = unit.tenant_phone.strip()
    digits = re.sub(r"\D", "", raw)
    if not digits:
        return None
    if not raw.startswith("+"):
        digits = f"{settings.WHATSAPP_COUNTRY_PREFIX}{digits}"

    text = quote(message or reminder_message(unit), safe="")
    return f"{settings.WHATSAPP_BASE_URL}/{digits}?text={text}"


def receipt_text(record: RentRecord, unit: Optional[Unit] = None) -> str:
    """Plain-text payment receipt to share with the tenant"""
    lines = [
        "RENT RECEIPT",
        f"Receipt No: {record.id[:8].upper()}",
        f"Date: {record.date.strftime(settings.DATE_FORMAT)}",
        f"Received from: {record.tenant_name}",
    ]
    if unit is not None:
        lines.append(f"Unit: {unit.name}")
    lines += [
        f"Amount: {format_currency(record.amount, record.currency)}",
        f"Payment method: {record.payment_method.value}",
        f"For: {record.description}",
        f"Received by: {record.landlord_name}",
    ]
    if record.is_verified:
        lines.append("Verified by landlord")
    return "\n".join(lines)
