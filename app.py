"""
Kigali Rent Intel
Main Streamlit Application: tenant rent tracking with AI extraction and a landlord dashboard
"""
import logging
import os
from datetime import datetime

import streamlit as st

from engine.tenant_outlook import tenant_outlook
from models.portfolio import Portfolio
from models.rent_record import RentRecord
from models.unit import Unit

from storage.database import Database
from storage.audit_log import AuditLog

from ui.dashboard import render_tenant_home
from ui.tabs.add_rent_tab import render_add_rent_tab
from ui.tabs.history_tab import render_history_tab
from ui.tabs.landlord_tab import render_landlord_tab

from config import settings

settings.configure_logging()
logger = logging.getLogger(__name__)

# Page configuration
st.set_page_config(
    page_title=settings.APP_TITLE,
    page_icon=settings.APP_ICON,
    layout="centered",
    initial_sidebar_state="collapsed",
)


# ---------------------------------------------------------------------------
# Session state helpers
# ---------------------------------------------------------------------------

def initialize_session_state():
    """Initialize session state variables."""
    if "database" not in st.session_state:
        st.session_state.database = Database()
    if "portfolio" not in st.session_state:
        database: Database = st.session_state.database
        st.session_state.portfolio = Portfolio(
            records=database.load_records(),
            units=database.load_units(),
        )
        logger.info(
            "Loaded %d record(s) and %d unit(s)",
            len(st.session_state.portfolio.records),
            len(st.session_state.portfolio.units),
        )
    if "audit_log" not in st.session_state:
        st.session_state.audit_log = AuditLog()


# ---------------------------------------------------------------------------
# Ledger / roster callbacks
# ---------------------------------------------------------------------------

def add_record(record: RentRecord, user: str):
    portfolio: Portfolio = st.session_state.portfolio
    portfolio.add_record(record)
    st.session_state.database.save_records([record])
    st.session_state.audit_log.log_record_added(record, user=user)


def save_unit(unit: Unit):
    portfolio: Portfolio = st.session_state.portfolio
    try:
        if unit.id and portfolio.get_unit(unit.id):
            saved = portfolio.update_unit(unit)
            change = "updated"
        else:
            saved = portfolio.add_unit(unit)
            change = "added"
    except ValueError as e:
        st.error(str(e))
        return
    st.session_state.database.save_units(portfolio.units)
    st.session_state.audit_log.log_unit_change(change, saved, user="Landlord")
    st.rerun()


def move_out(unit_id: str):
    portfolio: Portfolio = st.session_state.portfolio
    try:
        vacated = portfolio.move_out(unit_id)
    except ValueError as e:
        st.error(str(e))
        return
    st.session_state.database.save_units(portfolio.units)
    st.session_state.audit_log.log_unit_change("moved_out", vacated, user="Landlord")
    st.rerun()


def delete_unit(unit_id: str):
    portfolio: Portfolio = st.session_state.portfolio
    unit = portfolio.get_unit(unit_id)
    if unit is None or not portfolio.delete_unit(unit_id):
        return
    st.session_state.database.delete_unit(unit_id)
    st.session_state.database.save_units(portfolio.units)
    st.session_state.audit_log.log_unit_change("deleted", unit, user="Landlord")
    st.rerun()


# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------

def render_sidebar():
    """Render the sidebar with OpenAI controls."""
    st.sidebar.title(f"{settings.APP_ICON} {settings.APP_TITLE}")
    st.sidebar.markdown("---")

    st.sidebar.subheader("🔑 OpenAI API Key")
    api_key = st.sidebar.text_input(
        "API Key (or set OPENAI_API_KEY env var)",
        value=settings.OPENAI_API_KEY,
        type="password",
        help="Required for AI extraction. Manual entry works without it.",
    )

    models = ["gpt-4o-mini", "gpt-4o", "gpt-4-turbo"]
    model = st.sidebar.selectbox(
        "Model",
        options=models,
        index=models.index(settings.EXTRACTION_MODEL) if settings.EXTRACTION_MODEL in models else 0,
    )

    st.sidebar.markdown("---")
    st.sidebar.caption("Recent activity")
    for entry in reversed(st.session_state.audit_log.get_recent_logs(limit=5)):
        st.sidebar.caption(f"{entry.get('timestamp', '')[:16]} · {entry.get('action', '')}")

    return {"api_key": api_key, "model": model}


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main():
    initialize_session_state()
    sidebar = render_sidebar()
    os.environ["EXTRACTION_MODEL"] = sidebar["model"]

    portfolio: Portfolio = st.session_state.portfolio
    audit_log: AuditLog = st.session_state.audit_log

    st.title(f"{settings.APP_ICON} {settings.APP_TITLE}")

    home_tab, add_tab, history_tab, landlord_tab = st.tabs(
        ["🏠 Home", "➕ Add Rent", "🧾 History", "🏢 Landlord"]
    )

    with home_tab:
        render_tenant_home(tenant_outlook(portfolio.records), portfolio.records)

    with add_tab:
        render_add_rent_tab(
            sidebar["api_key"],
            audit_log,
            on_confirm=lambda record: add_record(record, user="Tenant"),
        )

    with history_tab:
        render_history_tab(portfolio.history())

    with landlord_tab:
        render_landlord_tab(
            portfolio,
            on_add_record=lambda record: add_record(record, user="Landlord"),
            on_save_unit=save_unit,
            on_move_out=move_out,
            on_delete_unit=delete_unit,
        )

    st.markdown("---")
    st.caption(f"{settings.APP_TITLE} | {datetime.now().strftime('%Y-%m-%d %H:%M')}")


if __name__ == "__main__":
    main()
