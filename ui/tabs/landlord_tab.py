"""
Landlord dashboard tab renderer.
"""
import streamlit as st
from datetime import date
from typing import Callable, Optional

from config import settings
from engine.finalizer import record_cash_collection
from engine.reconciliation import BillingCycle, ReconciliationEngine, STATUS_FILTERS, filter_units
from engine.reminders import receipt_text
from models.portfolio import Portfolio
from models.rent_record import RentRecord
from models.unit import Unit
from ui.auth import lock_landlord_view, render_landlord_gate
from ui.charts import render_collection_trend
from ui.dashboard import render_portfolio_kpis
from ui.unit_view import render_unit_card, render_unit_form


def render_landlord_tab(
    portfolio: Portfolio,
    on_add_record: Callable[[RentRecord], None],
    on_save_unit: Callable[[Unit], None],
    on_move_out: Callable[[str], None],
    on_delete_unit: Callable[[str], None],
    today: Optional[date] = None,
) -> None:
    """Render the Landlord tab behind the PIN gate."""
    if not render_landlord_gate():
        return

    today = today or date.today()
    cycle = BillingCycle.for_date(today)
    engine = ReconciliationEngine(portfolio.units, portfolio.records)
    result = engine.derive(cycle)

    header, lock = st.columns([4, 1])
    header.subheader(f"🏢 Portfolio · {cycle.label}")
    if lock.button("🔒 Lock"):
        lock_landlord_view()
        st.rerun()

    render_portfolio_kpis(result.aggregates, result)
    render_collection_trend(engine.collection_trend(today, months=settings.TREND_MONTHS))

    st.markdown("---")
    status_filter = st.radio(
        "Show",
        options=list(STATUS_FILTERS),
        horizontal=True,
        format_func=str.title,
    )
    shown = filter_units(portfolio.units, result.per_unit, status_filter)

    def quick_pay(unit: Unit):
        record = record_cash_collection(unit, today=today)
        on_add_record(record)
        st.session_state["last_receipt"] = receipt_text(record, unit)
        st.rerun()

    if not shown:
        st.info("No units found for this filter.")
    for unit in shown:
        render_unit_card(unit, result.per_unit[unit.id], on_quick_pay=quick_pay)

    if st.session_state.get("last_receipt"):
        with st.expander("🧾 Receipt", expanded=True):
            st.code(st.session_state["last_receipt"], language=None)

    with st.expander("📥 Export"):
        st.dataframe(engine.to_dataframe(cycle), use_container_width=True, hide_index=True)
        records_df = portfolio.records_df()
        st.download_button(
            "Download ledger (CSV)",
            data=records_df.to_csv(index=False).encode("utf-8"),
            file_name=f"rent_ledger_{today.strftime(settings.MONTH_FORMAT)}.csv",
            mime="text/csv",
            disabled=records_df.empty,
        )

    st.markdown("---")
    st.subheader("🛠️ Manage Units")
    options = [None] + [u.id for u in portfolio.units]
    selected = st.selectbox(
        "Unit",
        options=options,
        format_func=lambda uid: "➕ New unit" if uid is None else portfolio.get_unit(uid).name,
    )
    render_unit_form(
        portfolio.get_unit(selected) if selected else None,
        on_save=on_save_unit,
        on_move_out=on_move_out,
        on_delete=on_delete_unit,
    )
