"""
Database persistence layer (optional DuckDB)
"""
import logging
from pathlib import Path
from typing import List, Optional

import duckdb

from config import settings
from models.rent_record import DocumentType, PaymentMethod, RentRecord
from models.unit import Unit

logger = logging.getLogger(__name__)


class Database:
    """
    Optional persistence of the ledger and roster using DuckDB.

    When USE_DATABASE is off every method is a no-op and loads return [].
    """

    def __init__(self, db_path: Optional[str] = None, enabled: Optional[bool] = None):
        self.db_path = db_path or settings.DATABASE_PATH
        self.conn = None

        if settings.USE_DATABASE if enabled is None else enabled:
            self._init_database()

    def _init_database(self):
        """Initialize database and create tables"""
        if self.db_path != ":memory:":
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

        self.conn = duckdb.connect(self.db_path)
        self._create_tables()

    def _create_tables(self):
        """Create database tables"""
        if not self.conn:
            return

        self.conn.execute("""
            CREATE TABLE IF NOT EXISTS records (
                id VARCHAR PRIMARY KEY,
                amount DOUBLE,
                currency VARCHAR,
                paid_on DATE,
                landlord_name VARCHAR,
                tenant_name VARCHAR,
                payment_method VARCHAR,
                description VARCHAR,
                is_verified BOOLEAN,
                confidence_score INTEGER,
                document_type VARCHAR,
                original_text TEXT,
                unit_id VARCHAR,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        self.conn.execute("""
            CREATE TABLE IF NOT EXISTS units (
                id VARCHAR PRIMARY KEY,
                name VARCHAR,
                tenant_name VARCHAR,
                tenant_phone VARCHAR,
                tenant_email VARCHAR,
                rent_amount DOUBLE,
                due_date_day INTEGER,
                position INTEGER,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

    def save_records(self, records: List[RentRecord]):
        """Save records to database; existing ids are left untouched"""
        if not self.conn:
            return

        for record in records:
            self.conn.execute("""
                INSERT INTO records
                (id, amount, currency, paid_on, landlord_name, tenant_name, payment_method,
                 description, is_verified, confidence_score, document_type, original_text, unit_id)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT (id) DO NOTHING
            """, (
                record.id,
                record.amount,
                record.currency,
                record.date,
                record.landlord_name,
                record.tenant_name,
                record.payment_method.name,
                record.description,
                record.is_verified,
                record.confidence_score,
                record.document_type.name,
                record.original_text,
                record.unit_id,
            ))
        logger.debug("Saved %d record(s) to %s", len(records), self.db_path)

    def load_records(self) -> List[RentRecord]:
        """Load all records, newest first"""
        if not self.conn:
            return []

        rows = self.conn.execute("""
            SELECT id, amount, currency, paid_on, landlord_name, tenant_name, payment_method,
                   description, is_verified, confidence_score, document_type, original_text, unit_id
            FROM records
            ORDER BY paid_on DESC, created_at DESC
        """).fetchall()

        return [
            RentRecord(
                id=row[0],
                amount=float(row[1]),
                currency=row[2],
                date=row[3],
                landlord_name=row[4],
                tenant_name=row[5],
                payment_method=PaymentMethod[row[6]],
                description=row[7],
                is_verified=bool(row[8]),
                confidence_score=int(row[9]),
                document_type=DocumentType[row[10]],
                original_text=row[11] or "",
                unit_id=row[12] or "",
            )
            for row in rows
        ]

    def save_units(self, units: List[Unit]):
        """Save the roster; list order is kept as the position column"""
        if not self.conn:
            return

        for position, unit in enumerate(units):
            self.conn.execute("""
                INSERT OR REPLACE INTO units
                (id, name, tenant_name, tenant_phone, tenant_email, rent_amount, due_date_day, position)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """, (
                unit.id,
                unit.name,
                unit.tenant_name,
                unit.tenant_phone,
                unit.tenant_email,
                unit.rent_amount,
                unit.due_date_day,
                position,
            ))
        logger.debug("Saved %d unit(s) to %s", len(units), self.db_path)

    def load_units(self) -> List[Unit]:
        """Load the roster in saved order"""
        if not self.conn:
            return []

        rows = self.conn.execute("""
            SELECT id, name, tenant_name, tenant_phone, tenant_email, rent_amount, due_date_day
            FROM units
            ORDER BY position, created_at
        """).fetchall()

        return [
            Unit(
                id=row[0],
                name=row[1],
                tenant_name=row[2] or "",
                tenant_phone=row[3],
                tenant_email=row[4],
                rent_amount=float(row[5]),
                due_date_day=int(row[6]),
            )
            for row in rows
        ]

    def delete_unit(self, unit_id: str):
        """Delete a unit"""
        if not self.conn:
            return
        self.conn.execute("DELETE FROM units WHERE id = ?", (unit_id,))

    def close(self):
        """Close database connection"""
        if self.conn:
            self.conn.close()
            self.conn = None
