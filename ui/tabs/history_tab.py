"""
Payment history tab renderer.
"""
import streamlit as st
from typing import List

from models.rent_record import PaymentMethod, RentRecord
from utils.helpers import format_currency

_METHOD_BADGE = {
    PaymentMethod.MOMO: "🟡",
    PaymentMethod.AIRTEL: "🔴",
    PaymentMethod.CASH: "💵",
    PaymentMethod.BANK: "🏦",
    PaymentMethod.UNKNOWN: "📄",
}


def render_history_tab(records: List[RentRecord]) -> None:
    """Render the ledger, newest payment first."""
    st.subheader("🧾 Payment History")

    if not records:
        st.info("No records found.")
        return

    for record in records:
        badge = _METHOD_BADGE.get(record.payment_method, "📄")
        verified = " ✅ Verified" if record.is_verified else ""
        with st.container(border=True):
            col1, col2 = st.columns([3, 2])
            with col1:
                st.markdown(f"{badge} **{record.landlord_name}**{verified}")
                st.caption(
                    f"{record.date.strftime('%d %b %Y')} · {record.payment_method.value} · "
                    f"{record.document_type.value}"
                )
                st.caption(record.description)
            with col2:
                st.markdown(f"**{format_currency(record.amount, record.currency)}**")
                st.caption(f"Confidence {record.confidence_score}%")
            if record.original_text:
                with st.expander("Original text"):
                    st.text(record.original_text)
