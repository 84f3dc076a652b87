"""
Portfolio - the caller-owned ledger of rent records and roster of units
"""
import logging
from dataclasses import replace
from typing import List, Optional

import pandas as pd

from config import settings
from models.rent_record import RentRecord
from models.unit import Unit
from utils.helpers import generate_id
from utils.validations import unit_form_errors

logger = logging.getLogger(__name__)


class Portfolio:
    """
    In-memory ledger and roster.

    Records are append-only and kept newest-first. Units are mutable and
    follow an explicit add / edit / move-out / delete lifecycle.
    """

    def __init__(
        self,
        records: Optional[List[RentRecord]] = None,
        units: Optional[List[Unit]] = None,
    ):
        self.records: List[RentRecord] = list(records or [])
        self.units: List[Unit] = list(units or [])

    # ------------------------------------------------------------------
    # Ledger
    # ------------------------------------------------------------------

    def add_record(self, record: RentRecord):
        """Prepend a finalized record to the ledger"""
        self.records.insert(0, record)
        logger.info("Ledger now holds %d record(s)", len(self.records))

    def history(self) -> List[RentRecord]:
        """Records sorted by transaction date, newest first"""
        return sorted(self.records, key=lambda r: r.date, reverse=True)

    def records_for_unit(self, unit_id: str) -> List[RentRecord]:
        return [r for r in self.records if r.unit_id == unit_id]

    # ------------------------------------------------------------------
    # Roster
    # ------------------------------------------------------------------

    @staticmethod
    def _validate(unit: Unit):
        errors = unit_form_errors(unit.name, unit.rent_amount, unit.due_date_day)
        if errors:
            raise ValueError(" ".join(errors))

    def get_unit(self, unit_id: str) -> Optional[Unit]:
        return next((u for u in self.units if u.id == unit_id), None)

    def add_unit(self, unit: Unit) -> Unit:
        """
        Add a unit to the roster, assigning an id when blank.
        A unit whose id already exists replaces the existing entry.

        Raises:
            ValueError: If name, rent amount or due day are invalid.
        """
        self._validate(unit)
        if not unit.id:
            unit = replace(unit, id=generate_id("unit"))

        existing = self.get_unit(unit.id)
        if existing:
            self.units[self.units.index(existing)] = unit
        else:
            self.units.append(unit)
        logger.info("Added unit %s (%s)", unit.id, unit.name)
        return unit

    def update_unit(self, unit: Unit) -> Unit:
        """
        Replace an existing unit.

        Raises:
            ValueError: If the unit is unknown or invalid.
        """
        existing = self.get_unit(unit.id)
        if existing is None:
            raise ValueError(f"Unknown unit: {unit.id}")
        self._validate(unit)
        self.units[self.units.index(existing)] = unit
        logger.info("Updated unit %s (%s)", unit.id, unit.name)
        return unit

    def move_out(self, unit_id: str) -> Unit:
        """End the lease: clear tenant details but keep the unit"""
        existing = self.get_unit(unit_id)
        if existing is None:
            raise ValueError(f"Unknown unit: {unit_id}")
        vacated = replace(
            existing,
            tenant_name=settings.VACANCY_SENTINEL,
            tenant_phone="",
            tenant_email="",
        )
        self.units[self.units.index(existing)] = vacated
        logger.info("Tenant moved out of unit %s (%s)", unit_id, existing.name)
        return vacated

    def delete_unit(self, unit_id: str) -> bool:
        """Remove a unit; returns False when it did not exist"""
        existing = self.get_unit(unit_id)
        if existing is None:
            return False
        self.units.remove(existing)
        logger.info("Deleted unit %s (%s)", unit_id, existing.name)
        return True

    # ------------------------------------------------------------------
    # DataFrame views
    # ------------------------------------------------------------------

    def records_df(self) -> pd.DataFrame:
        """Get records as a pandas DataFrame, newest first"""
        if not self.records:
            return pd.DataFrame()
        return pd.DataFrame([r.to_dict() for r in self.history()])

    def units_df(self) -> pd.DataFrame:
        """Get units as a pandas DataFrame"""
        if not self.units:
            return pd.DataFrame()

        data = []
        for u in self.units:
            data.append({
                'id': u.id,
                'name': u.name,
                'tenant_name': u.display_tenant,
                'tenant_phone': u.tenant_phone or "",
                'tenant_email': u.tenant_email or "",
                'rent_amount': u.rent_amount,
                'due_date_day': u.due_date_day,
                'occupied': u.is_occupied,
            })
        return pd.DataFrame(data)

    def clear(self):
        """Clear all data"""
        self.records.clear()
        self.units.clear()
