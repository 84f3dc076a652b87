"""
Landlord access gate
"""
import streamlit as st

from config import settings
from utils.validations import validate_pin


def is_landlord_unlocked() -> bool:
    return bool(st.session_state.get("landlord_unlocked", False))


def lock_landlord_view():
    st.session_state["landlord_unlocked"] = False


def render_landlord_gate() -> bool:
    """
    Ask for the landlord PIN until it is entered correctly.
    Returns True once the landlord view is unlocked for this session.
    """
    if is_landlord_unlocked():
        return True

    st.subheader("🔒 Landlord Access")
    st.caption("Restricted area. Enter the 4-digit access code.")

    with st.form(key="landlord_pin_form"):
        pin = st.text_input("Security PIN", type="password", max_chars=4)
        submitted = st.form_submit_button("Unlock")

    if submitted:
        if validate_pin(pin, settings.LANDLORD_PIN):
            st.session_state["landlord_unlocked"] = True
            st.rerun()
        else:
            st.error("Incorrect PIN")
    return False
