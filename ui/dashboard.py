"""
Tenant home screen and landlord KPI overview
"""
import streamlit as st
from typing import List

from engine.reconciliation import PortfolioSummary, ReconciliationResult
from engine.tenant_outlook import TenantOutlook
from models.rent_record import RentRecord
from models.unit import UnitStatus
from utils.helpers import format_currency, format_percentage


def render_tenant_home(outlook: TenantOutlook, records: List[RentRecord]):
    """
    Render the tenant's next-due card and payment totals
    """
    st.header("👋 Muraho!")
    st.caption("Track your rent payments and keep your receipts in one place.")

    due_label = outlook.next_due_date.strftime("%d %B")
    if outlook.is_late:
        st.error(f"**Next rent due:** {due_label} · overdue by {abs(outlook.days_until_due)} days")
    elif outlook.is_due_soon:
        st.warning(f"**Next rent due:** {due_label} · due in {outlook.days_until_due} days")
    else:
        st.info(f"**Next rent due:** {due_label} · {outlook.days_until_due} days left")

    col1, col2 = st.columns(2)
    with col1:
        st.metric("💰 Total Paid", format_currency(outlook.total_paid))
    with col2:
        st.metric("🧾 Records", len(records))

    if outlook.last_payment:
        last = outlook.last_payment
        st.caption(
            f"Last payment: {format_currency(last.amount, last.currency)} on "
            f"{last.date.strftime('%d %b %Y')} via {last.payment_method.value}"
        )


def render_portfolio_kpis(summary: PortfolioSummary, result: ReconciliationResult):
    """
    Render landlord KPI cards for the current cycle
    """
    col1, col2, col3, col4 = st.columns(4)

    with col1:
        st.metric(
            label="💰 Collected",
            value=format_currency(summary.collected),
            delta=f"{format_percentage(summary.collection_rate)} of expected",
            help="Sum of this month's ledger records",
        )
    with col2:
        st.metric(
            label="📋 Expected",
            value=format_currency(summary.expected),
            help="Monthly rent of occupied units",
        )
    with col3:
        st.metric(
            label="🏠 Occupancy",
            value=format_percentage(summary.occupancy_rate),
            delta=f"{summary.occupied_units}/{summary.total_units} units",
            delta_color="off",
        )
    with col4:
        late = result.count(UnitStatus.LATE)
        pending = result.count(UnitStatus.PENDING)
        st.metric(
            label="⚠️ Needs Attention",
            value=late + pending,
            delta=f"{late} late",
            delta_color="inverse",
        )
