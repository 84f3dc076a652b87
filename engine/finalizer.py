"""
Record finalizer - merges an extraction draft and user edits into a RentRecord.
"""
import logging
import math
from datetime import date
from typing import Any, Dict, Mapping, Optional

from config import settings
from engine.normalizer import map_document_type, map_payment_method, normalize_confidence
from models.rent_record import DocumentType, ExtractionResult, PaymentMethod, RentRecord
from models.unit import Unit
from utils.helpers import generate_id, get_month_name, parse_iso_date

logger = logging.getLogger(__name__)


def _coerce_amount(value: Any) -> float:
    """Numeric cast; NaN, non-numeric and negative values become 0"""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def _text_or(value: Any, default: str) -> str:
    if value is None:
        return default
    text = str(value).strip()
    return text or default


def _raw_text(value: Any) -> str:
    """Source text is kept verbatim for audit"""
    return "" if value is None else str(value)


def _resolve_date(value: Any, today: date) -> date:
    parsed = parse_iso_date(value)
    return parsed or today


def _resolve_payment_method(value: Any) -> PaymentMethod:
    if value is None or (isinstance(value, str) and not value.strip()):
        return PaymentMethod.CASH
    return map_payment_method(value)


def _resolve_document_type(value: Any) -> DocumentType:
    if value is None:
        return DocumentType.OTHER
    return map_document_type(value)


def finalize(
    draft: Optional[Mapping[str, Any]],
    trusted_manual_entry: bool,
    today: Optional[date] = None,
) -> RentRecord:
    """
    Build a canonical RentRecord from a partial draft.

    Every missing field resolves to its default; nothing is rejected. The
    verification flag reflects provenance: only trusted manual entries are
    verified, AI-derived drafts never are, however much the user edited them.

    Args:
        draft: Partial mapping of RentRecord field names (None is treated as empty).
        trusted_manual_entry: True for landlord-confirmed direct entry.
        today: Date used when the draft carries none (defaults to date.today()).

    Returns:
        A new RentRecord with a freshly generated id.
    """
    draft = dict(draft or {})
    today = today or date.today()

    if trusted_manual_entry:
        confidence = 100
    elif draft.get("confidence_score") is None:
        confidence = 100
    else:
        confidence = normalize_confidence(draft.get("confidence_score"))

    record = RentRecord(
        id=generate_id(),
        amount=_coerce_amount(draft.get("amount")),
        currency=_text_or(draft.get("currency"), settings.LOCAL_CURRENCY).upper(),
        date=_resolve_date(draft.get("date"), today),
        landlord_name=_text_or(draft.get("landlord_name"), settings.UNKNOWN_LANDLORD),
        tenant_name=_text_or(draft.get("tenant_name"), settings.DEFAULT_TENANT),
        payment_method=_resolve_payment_method(draft.get("payment_method")),
        description=_text_or(draft.get("description"), settings.DEFAULT_DESCRIPTION),
        is_verified=bool(trusted_manual_entry),
        confidence_score=confidence,
        document_type=_resolve_document_type(draft.get("document_type")),
        original_text=_raw_text(draft.get("original_text")),
        unit_id=_text_or(draft.get("unit_id"), ""),
    )

    logger.info(
        "Finalized record %s: %s %s (verified=%s, confidence=%s)",
        record.id, record.amount, record.currency, record.is_verified, record.confidence_score,
    )
    return record


def draft_from_extraction(result: ExtractionResult, today: Optional[date] = None) -> Dict[str, Any]:
    """Initial values for the review form, seeded from an extraction"""
    today = today or date.today()
    return {
        "amount": result.amount if result.amount is not None else 0,
        "currency": result.currency or settings.LOCAL_CURRENCY,
        "date": result.date or today,
        "landlord_name": result.landlord_name or "",
        "tenant_name": result.tenant_name or "",
        "payment_method": result.payment_method,
        "description": result.summary,
        "document_type": result.document_type,
        "confidence_score": result.confidence_score,
        "original_text": result.original_text or "",
    }


def record_cash_collection(
    unit: Unit,
    today: Optional[date] = None,
    landlord_name: str = settings.SELF_NAME,
) -> RentRecord:
    """Landlord-confirmed cash payment of a unit's full rent"""
    today = today or date.today()
    return finalize(
        {
            "amount": unit.rent_amount,
            "currency": settings.LOCAL_CURRENCY,
            "date": today,
            "landlord_name": landlord_name,
            "tenant_name": unit.tenant_name,
            "payment_method": PaymentMethod.CASH,
            "description": f"Rent {get_month_name(today)} - {unit.name}",
            "document_type": DocumentType.OTHER,
            "unit_id": unit.id,
        },
        trusted_manual_entry=True,
        today=today,
    )
