"""
Payment evidence models: extraction drafts and finalized ledger records
"""
from dataclasses import dataclass, asdict
import datetime
from enum import Enum
from typing import Optional

from config import settings


class PaymentMethod(str, Enum):
    """How the rent was paid"""
    MOMO = "Mobile Money (MTN)"
    AIRTEL = "Airtel Money"
    CASH = "Cash / Hand"
    BANK = "Bank Transfer"
    UNKNOWN = "Unknown"


class DocumentType(str, Enum):
    """Kind of evidence the payment was read from"""
    SMS = "SMS Notification"
    RECEIPT = "Paper Receipt"
    AGREEMENT = "Rental Agreement"
    OTHER = "Other"


@dataclass(frozen=True)
class RentRecord:
    """
    A finalized, append-only ledger entry.

    Every field is resolved; use engine.finalizer.finalize to build one.
    """
    id: str
    amount: float
    currency: str
    date: datetime.date
    landlord_name: str
    tenant_name: str
    payment_method: PaymentMethod
    description: str
    is_verified: bool
    confidence_score: int
    document_type: DocumentType
    original_text: str = ""
    unit_id: str = ""

    def to_dict(self) -> dict:
        """Plain dict with enums and dates as strings"""
        data = asdict(self)
        data["date"] = self.date.strftime(settings.DATE_FORMAT)
        data["payment_method"] = self.payment_method.value
        data["document_type"] = self.document_type.value
        return data


@dataclass
class ExtractionResult:
    """Best-effort structured guess produced from one piece of evidence"""
    amount: Optional[float] = None
    currency: str = settings.LOCAL_CURRENCY
    date: Optional[datetime.date] = None
    landlord_name: Optional[str] = None
    tenant_name: Optional[str] = None
    payment_method: PaymentMethod = PaymentMethod.UNKNOWN
    document_type: DocumentType = DocumentType.OTHER
    confidence_score: int = 0
    summary: str = settings.DEFAULT_SUMMARY
    original_text: Optional[str] = None

    @property
    def is_high_confidence(self) -> bool:
        return self.confidence_score > settings.LOW_CONFIDENCE_THRESHOLD
