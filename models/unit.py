"""
Data models for the landlord roster
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from config import settings


class UnitStatus(str, Enum):
    """Payment status of a unit within a billing cycle"""
    VACANT = "vacant"
    PENDING = "pending"
    LATE = "late"
    PAID = "paid"


def is_occupied_name(tenant_name: Optional[str]) -> bool:
    """A tenant name marks a unit occupied unless blank or the vacancy sentinel"""
    if not tenant_name or not tenant_name.strip():
        return False
    return tenant_name.strip() != settings.VACANCY_SENTINEL


@dataclass
class Unit:
    """Represents a rental unit in the landlord's roster"""
    id: str
    name: str
    tenant_name: str = settings.VACANCY_SENTINEL
    rent_amount: float = 0.0
    due_date_day: int = 1
    tenant_phone: Optional[str] = None
    tenant_email: Optional[str] = None

    @property
    def is_occupied(self) -> bool:
        """Check if the unit currently has a tenant"""
        return is_occupied_name(self.tenant_name)

    @property
    def display_tenant(self) -> str:
        """Tenant name for display, 'Vacant' when unoccupied"""
        return self.tenant_name.strip() if self.is_occupied else settings.VACANCY_SENTINEL
