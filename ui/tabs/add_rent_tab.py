"""
Add Rent tab: SMS text or document photo -> AI extraction -> review -> ledger.
"""
import streamlit as st
from datetime import date
from typing import Callable, Optional

from agents.extraction_agent import run_extraction
from engine.finalizer import draft_from_extraction, finalize
from engine.normalizer import is_failed
from ingestion import Evidence
from ingestion.loader import EvidenceLoader
from models.rent_record import DocumentType, ExtractionResult, PaymentMethod, RentRecord
from storage.audit_log import AuditLog

_PAYMENT_METHODS = list(PaymentMethod)
_DOCUMENT_TYPES = list(DocumentType)


def _run(evidence: Evidence, api_key: str, audit_log: AuditLog):
    with st.spinner("Analyzing document…"):
        result = run_extraction(evidence, api_key=api_key)
    audit_log.log_extraction(result, source=evidence.file_name or evidence.kind, user="Tenant")
    st.session_state["extraction_result"] = result


def render_input_panel(api_key: str, audit_log: AuditLog):
    """Paste an SMS or upload a photo, then run extraction"""
    st.subheader("➕ Add Rent Payment")

    mode = st.radio("Evidence", options=["Paste SMS", "Upload Photo"], horizontal=True)

    if mode == "Paste SMS":
        sms = st.text_area(
            "Mobile money SMS",
            placeholder="e.g. TxId: 1234. Payment of 150,000 RWF to Jean Claude...",
            height=140,
        )
        if st.button("✨ Extract details", type="primary", disabled=not sms.strip()):
            _run(Evidence.from_text(sms.strip()), api_key, audit_log)
    else:
        upload = st.file_uploader(
            "Receipt or agreement photo",
            type=EvidenceLoader.get_supported_extensions(),
        )
        if upload is not None and st.button("✨ Extract details", type="primary"):
            ok, msg, evidence = EvidenceLoader().load_upload(upload.name, upload.getvalue())
            if ok:
                _run(evidence, api_key, audit_log)
            else:
                st.error(msg)

    if st.button("✍️ Enter manually instead"):
        st.session_state["extraction_result"] = ExtractionResult(confidence_score=100, summary="")


def render_review_form(
    result: ExtractionResult,
    on_confirm: Callable[[RentRecord], None],
    today: Optional[date] = None,
):
    """Let the user correct the extracted fields before saving"""
    st.markdown("---")
    st.subheader("🔍 Review Details")

    if is_failed(result):
        st.error("Extraction failed. Please try again or enter the details manually.")
    elif result.is_high_confidence:
        st.success(f"AI confidence: {result.confidence_score}%")
    else:
        st.warning(f"AI confidence: {result.confidence_score}%. Please double-check the fields.")

    draft = draft_from_extraction(result, today=today)

    with st.form(key="review_form"):
        col1, col2 = st.columns(2)
        with col1:
            amount = st.number_input("Amount", min_value=0.0, value=float(draft["amount"]), step=1000.0)
            currency = st.text_input("Currency", value=draft["currency"])
            paid_on = st.date_input("Date", value=draft["date"])
            method = st.selectbox(
                "Payment method",
                options=_PAYMENT_METHODS,
                index=_PAYMENT_METHODS.index(draft["payment_method"]),
                format_func=lambda m: m.value,
            )
        with col2:
            landlord = st.text_input("Landlord (recipient)", value=draft["landlord_name"])
            tenant = st.text_input("Tenant (payer)", value=draft["tenant_name"])
            doc_type = st.selectbox(
                "Document type",
                options=_DOCUMENT_TYPES,
                index=_DOCUMENT_TYPES.index(draft["document_type"]),
                format_func=lambda d: d.value,
            )
        description = st.text_input("Description", value=draft["description"])

        col_save, col_cancel = st.columns(2)
        save = col_save.form_submit_button("✅ Save record", type="primary")
        cancel = col_cancel.form_submit_button("Cancel")

    if cancel:
        st.session_state.pop("extraction_result", None)
        st.rerun()

    if save:
        if amount <= 0:
            st.warning("Amount is 0. Please enter the amount paid before saving.")
            return
        record = finalize(
            {
                **draft,
                "amount": amount,
                "currency": currency,
                "date": paid_on,
                "landlord_name": landlord,
                "tenant_name": tenant,
                "payment_method": method,
                "document_type": doc_type,
                "description": description,
            },
            trusted_manual_entry=False,
            today=today,
        )
        on_confirm(record)
        st.session_state.pop("extraction_result", None)
        st.success("Record saved.")


def render_add_rent_tab(api_key: str, audit_log: AuditLog, on_confirm: Callable[[RentRecord], None]):
    """Render the Add Rent tab."""
    result: Optional[ExtractionResult] = st.session_state.get("extraction_result")
    if result is None:
        render_input_panel(api_key, audit_log)
    else:
        render_review_form(result, on_confirm)
