"""
Audit trail logging
"""
from datetime import datetime
from typing import Optional
import json
from pathlib import Path

from config import settings
from models.rent_record import ExtractionResult, RentRecord
from models.unit import Unit


class AuditLog:
    """
    Maintains an audit trail of user actions
    """

    def __init__(self, log_path: Optional[str] = None):
        self.log_path = Path(log_path or settings.AUDIT_LOG_PATH)
        self.log_path.parent.mkdir(parents=True, exist_ok=True)

    def log_action(
        self,
        action: str,
        user: str,
        details: dict,
        timestamp: Optional[datetime] = None
    ):
        """Log an action to the audit trail"""
        if timestamp is None:
            timestamp = datetime.now()

        log_entry = {
            'timestamp': timestamp.isoformat(),
            'action': action,
            'user': user,
            'details': details
        }

        with open(self.log_path, 'a', encoding='utf-8') as f:
            f.write(json.dumps(log_entry, ensure_ascii=False) + '\n')

    def log_extraction(self, result: ExtractionResult, source: str, user: str):
        """Log an extraction attempt"""
        self.log_action(
            action='extraction',
            user=user,
            details={
                'source': source,
                'confidence_score': result.confidence_score,
                'payment_method': result.payment_method.name,
                'document_type': result.document_type.name,
                'summary': result.summary,
            }
        )

    def log_record_added(self, record: RentRecord, user: str):
        """Log a record appended to the ledger"""
        self.log_action(
            action='record_added',
            user=user,
            details={
                'record_id': record.id,
                'amount': record.amount,
                'currency': record.currency,
                'tenant_name': record.tenant_name,
                'is_verified': record.is_verified,
                'unit_id': record.unit_id,
            }
        )

    def log_unit_change(self, change: str, unit: Unit, user: str):
        """Log a unit add / update / move_out / delete"""
        self.log_action(
            action=f'unit_{change}',
            user=user,
            details={
                'unit_id': unit.id,
                'unit_name': unit.name,
                'tenant_name': unit.tenant_name,
                'rent_amount': unit.rent_amount,
            }
        )

    def get_recent_logs(self, limit: int = 100) -> list:
        """Get recent log entries"""
        if not self.log_path.exists():
            return []

        logs = []
        with open(self.log_path, 'r', encoding='utf-8') as f:
            for line in f:
                if line.strip():
                    logs.append(json.loads(line))

        return logs[-limit:]
