"""
Extraction normalizer - turns a loosely-typed model response into an ExtractionResult.

normalize() is total: malformed or missing fields fall back to defaults and
the confidence score folds toward 0. It never raises.
"""
import json
import logging
import math
import re
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from config import settings
from models.rent_record import DocumentType, ExtractionResult, PaymentMethod
from utils.helpers import parse_amount, parse_iso_date, round_half_up

logger = logging.getLogger(__name__)


_KEYWORDS_PATH = Path(__file__).parent.parent / "config" / "keywords.yaml"

# Used when keywords.yaml is missing. Brand tokens come before generic ones
# so that "MTN Mobile Money transfer" maps to MoMo rather than Bank.
_DEFAULT_KEYWORDS = {
    'payment_methods': [
        {'method': 'MOMO', 'keywords': ['MOMO', 'MTN']},
        {'method': 'AIRTEL', 'keywords': ['AIRTEL']},
        {'method': 'CASH', 'keywords': ['CASH']},
        {'method': 'BANK', 'keywords': ['BANK']},
    ],
    'document_types': [
        {'type': 'SMS', 'keywords': ['SMS']},
        {'type': 'RECEIPT', 'keywords': ['RECEIPT', 'RECU']},
        {'type': 'AGREEMENT', 'keywords': ['AGREEMENT']},
    ],
    'currency_aliases': {'FRW': 'RWF'},
}


def _load_keywords(path: Path = _KEYWORDS_PATH) -> dict:
    """Load keyword groups from YAML"""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or _DEFAULT_KEYWORDS
    except FileNotFoundError:
        logger.warning("Keyword file %s not found; using built-in defaults", path)
        return _DEFAULT_KEYWORDS


def _build_groups(entries, enum_cls, name_key) -> List[Tuple[Any, List[str]]]:
    groups = []
    for entry in entries or []:
        member = enum_cls[str(entry[name_key]).upper()]
        groups.append((member, [str(k).upper() for k in entry.get('keywords', [])]))
    return groups


_KEYWORDS = _load_keywords()
_PAYMENT_METHOD_KEYWORDS = _build_groups(_KEYWORDS.get('payment_methods'), PaymentMethod, 'method')
_DOCUMENT_TYPE_KEYWORDS = _build_groups(_KEYWORDS.get('document_types'), DocumentType, 'type')
_CURRENCY_ALIASES: Dict[str, str] = {
    str(k).upper(): str(v).upper() for k, v in (_KEYWORDS.get('currency_aliases') or {}).items()
}

_CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


def _match_keywords(value: Any, groups, exact_members, default):
    if value is None:
        return default
    if isinstance(value, exact_members):
        return value

    text = str(value.value if isinstance(value, Enum) else value).strip()
    if not text:
        return default

    for member in exact_members:
        if text.lower() == member.value.lower():
            return member

    upper = text.upper()
    for member, keywords in groups:
        if any(keyword in upper for keyword in keywords):
            return member
    return default


def map_payment_method(value: Any) -> PaymentMethod:
    """Classify a free-text payment method guess; no match gives UNKNOWN"""
    return _match_keywords(value, _PAYMENT_METHOD_KEYWORDS, PaymentMethod, PaymentMethod.UNKNOWN)


def map_document_type(value: Any) -> DocumentType:
    """Classify a free-text document type guess; no match gives OTHER"""
    return _match_keywords(value, _DOCUMENT_TYPE_KEYWORDS, DocumentType, DocumentType.OTHER)


def normalize_currency(value: Any) -> str:
    """Upper-cased currency code, local currency when absent"""
    if not isinstance(value, str) or not value.strip():
        return settings.LOCAL_CURRENCY
    code = value.strip().upper()
    return _CURRENCY_ALIASES.get(code, code)


def normalize_confidence(value: Any) -> int:
    """Clamp a confidence score into 0-100; missing or non-numeric gives 0"""
    number = parse_amount(value)
    if number is None:
        return 0
    return max(0, min(100, round_half_up(number)))


def _clean_text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    text = str(value).strip()
    return text or None


def _decode(raw: Any) -> Optional[Dict[str, Any]]:
    """Accept a dict or a JSON document (optionally fenced as markdown)"""
    if isinstance(raw, dict):
        return raw
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8", errors="replace")
    if not isinstance(raw, str):
        return None

    text = _CODE_FENCE.sub("", raw.strip())
    if not text:
        return None
    try:
        data = json.loads(text)
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


def failed_extraction(original_text: Optional[str] = None) -> ExtractionResult:
    """Fully defaulted result used when inference fails entirely"""
    return ExtractionResult(
        amount=None,
        currency=settings.LOCAL_CURRENCY,
        date=None,
        landlord_name=None,
        tenant_name=None,
        payment_method=PaymentMethod.UNKNOWN,
        document_type=DocumentType.OTHER,
        confidence_score=0,
        summary=settings.FAILED_EXTRACTION_SUMMARY,
        original_text=original_text,
    )


def is_failed(result: ExtractionResult) -> bool:
    """True when nothing usable came back and the user must enter data manually"""
    return (
        result.confidence_score == 0
        and result.amount is None
        and result.date is None
        and not result.landlord_name
        and not result.tenant_name
    )


def normalize(raw: Any, original_text: Optional[str] = None) -> ExtractionResult:
    """
    Convert a raw inference result into a strictly-typed ExtractionResult.

    Args:
        raw: Parsed JSON dict, JSON text, or anything else the provider returned.
        original_text: Source SMS text, carried along for audit.

    Returns:
        ExtractionResult. Undecodable input gives failed_extraction().
    """
    data = _decode(raw)
    if data is None:
        logger.warning("Inference output could not be decoded; using defaults")
        return failed_extraction(original_text)

    date_value = data.get("date")

    return ExtractionResult(
        amount=parse_amount(data.get("amount")),
        currency=normalize_currency(data.get("currency")),
        date=parse_iso_date(date_value) if isinstance(date_value, str) else None,
        landlord_name=_clean_text(data.get("landlordName", data.get("landlord_name"))),
        tenant_name=_clean_text(data.get("tenantName", data.get("tenant_name"))),
        payment_method=map_payment_method(data.get("paymentMethod", data.get("payment_method"))),
        document_type=map_document_type(data.get("documentType", data.get("document_type"))),
        confidence_score=normalize_confidence(data.get("confidenceScore", data.get("confidence_score"))),
        summary=_clean_text(data.get("summary")) or settings.DEFAULT_SUMMARY,
        original_text=original_text,
    )
