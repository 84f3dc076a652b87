"""
Unit cards and the add/edit unit form
"""
import streamlit as st
from typing import Callable, Optional

from config import settings
from engine.reminders import whatsapp_link
from models.unit import Unit, UnitStatus
from utils.helpers import format_currency
from utils.validations import unit_form_errors, validate_email, validate_phone

_STATUS_BADGE = {
    UnitStatus.PAID: "🟢 PAID",
    UnitStatus.LATE: "🔴 LATE",
    UnitStatus.PENDING: "🟡 PENDING",
    UnitStatus.VACANT: "⚪ VACANT",
}


def render_unit_card(
    unit: Unit,
    status: UnitStatus,
    on_quick_pay: Callable[[Unit], None],
):
    """One roster row with its status badge and quick actions"""
    with st.container(border=True):
        col1, col2 = st.columns([3, 1])
        with col1:
            st.markdown(f"**{unit.display_tenant}**")
            st.caption(f"{unit.name} · {format_currency(unit.rent_amount)} · due day {unit.due_date_day}")
        with col2:
            st.markdown(_STATUS_BADGE[status])

        if status in (UnitStatus.LATE, UnitStatus.PENDING):
            col_pay, col_remind = st.columns(2)
            if col_pay.button("💵 Mark Paid (Cash)", key=f"pay_{unit.id}"):
                on_quick_pay(unit)
            link = whatsapp_link(unit)
            if link:
                col_remind.link_button("💬 Remind", link)


def render_unit_form(
    unit: Optional[Unit],
    on_save: Callable[[Unit], None],
    on_move_out: Callable[[str], None],
    on_delete: Callable[[str], None],
):
    """
    Add a new unit (unit=None) or edit an existing one.
    Switching an occupied unit to vacant is a move-out: tenant details are cleared.
    """
    is_new = unit is None
    unit = unit or Unit(id="", name="", rent_amount=150000, due_date_day=1)
    key = unit.id or "new"

    with st.form(key=f"unit_form_{key}"):
        name = st.text_input("Unit name", value=unit.name, placeholder="e.g. Apt 3B")
        col1, col2 = st.columns(2)
        rent = col1.number_input("Monthly rent", min_value=0.0, value=float(unit.rent_amount), step=5000.0)
        due_day = col2.number_input("Due day", min_value=1, max_value=31, value=int(unit.due_date_day))

        occupied = st.radio(
            "Occupancy",
            options=["Occupied", "Vacant"],
            index=0 if unit.is_occupied else 1,
            horizontal=True,
        ) == "Occupied"

        tenant = st.text_input("Tenant name", value=unit.tenant_name if unit.is_occupied else "")
        col3, col4 = st.columns(2)
        phone = col3.text_input("Phone", value=unit.tenant_phone or "")
        email = col4.text_input("Email", value=unit.tenant_email or "")

        submitted = st.form_submit_button("➕ Add Unit" if is_new else "💾 Save Changes", type="primary")

    if submitted:
        errors = unit_form_errors(name, rent, due_day)
        if occupied and phone.strip() and not validate_phone(phone):
            errors.append("Phone number looks invalid.")
        if occupied and email.strip() and not validate_email(email):
            errors.append("E-mail address looks invalid.")
        if errors:
            for error in errors:
                st.error(error)
            return

        if not is_new and unit.is_occupied and not occupied:
            on_move_out(unit.id)
            return

        on_save(Unit(
            id=unit.id,
            name=name.strip(),
            tenant_name=(tenant.strip() or "Unknown Tenant") if occupied else settings.VACANCY_SENTINEL,
            tenant_phone=phone.strip() if occupied else "",
            tenant_email=email.strip() if occupied else "",
            rent_amount=float(rent),
            due_date_day=int(due_day),
        ))

    if not is_new:
        col_out, col_del = st.columns(2)
        if unit.is_occupied and col_out.button("🚪 End Lease & Move Out", key=f"move_out_{key}"):
            on_move_out(unit.id)
        if col_del.button("🗑️ Delete Unit", key=f"delete_{key}"):
            on_delete(unit.id)
