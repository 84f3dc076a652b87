"""
Rent extraction agent: sends SMS text or a document photo to an OpenAI chat
model and normalizes the JSON it returns.
"""
import logging
import os
from typing import List, Optional, Union

from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from config import settings
from engine.normalizer import failed_extraction, normalize
from ingestion import Evidence
from models.rent_record import ExtractionResult

logger = logging.getLogger(__name__)


SYSTEM_PROMPT = """
You are an expert financial data extraction assistant for the Rwandan rental market.
Your job is to parse unstructured text (SMS notifications from MTN MoMo or Airtel Money)
and images (photos of receipts or rental agreements).
The input language might be English, Kinyarwanda, or French.

Key entities to extract:
1. amount (numeric value only, no currency symbol or thousands separators)
2. currency (default to RWF if not specified, but look for $, USD, Frw)
3. date (ISO 8601 format YYYY-MM-DD)
4. landlordName (recipient)
5. tenantName (sender - often 'Self' if implied from SMS)
6. paymentMethod (one of: MOMO, AIRTEL, CASH, BANK, UNKNOWN)
7. documentType (one of: SMS, RECEIPT, AGREEMENT)

For MoMo/Airtel SMS, look for patterns like "TxId: ... Payment of X to Y".
For receipts, look for "Recu", "Receipt", "Amazina", "Amakote".

Return a confidenceScore (0-100) based on how many fields were successfully found,
and a brief summary of the transaction in English.

Return ONLY a JSON object with the keys:
amount, currency, date, landlordName, tenantName, paymentMethod, documentType,
confidenceScore, summary. Use null for anything you cannot find.
"""

IMAGE_PROMPT = "Analyze this image for rent payment details."


def build_llm(api_key: Optional[str] = None, model: Optional[str] = None):
    """
    Build the JSON-mode chat model.

    Raises:
        ValueError: If no API key is available.
    """
    resolved_key = api_key or os.environ.get("OPENAI_API_KEY", "")
    if not resolved_key:
        raise ValueError(
            "No OpenAI API key provided. "
            "Set the OPENAI_API_KEY environment variable or pass api_key=... to build_llm()."
        )

    llm = ChatOpenAI(
        model=model or os.environ.get("EXTRACTION_MODEL", settings.EXTRACTION_MODEL),
        temperature=0,
        max_tokens=settings.EXTRACTION_MAX_TOKENS,
        timeout=settings.EXTRACTION_TIMEOUT,
        max_retries=settings.EXTRACTION_MAX_RETRIES,
        api_key=resolved_key,
    )
    return llm.bind(response_format={"type": "json_object"})


def build_messages(evidence: Evidence) -> List[BaseMessage]:
    """System prompt plus one user turn carrying the text or the image"""
    if evidence.is_image:
        content = [
            {"type": "image_url", "image_url": {"url": evidence.data_uri()}},
            {"type": "text", "text": IMAGE_PROMPT},
        ]
    else:
        content = evidence.text
    return [SystemMessage(content=SYSTEM_PROMPT.strip()), HumanMessage(content=content)]


def _response_text(response) -> str:
    """Text content of a chat response (plain string or list of parts)"""
    content = getattr(response, "content", response)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(part.get("text", ""))
        return "".join(parts)
    return ""


def extract_rent_details(
    evidence: Union[Evidence, str],
    api_key: Optional[str] = None,
    llm=None,
) -> ExtractionResult:
    """
    Extract payment details from one piece of evidence.

    Never raises: a missing key, provider error, timeout or unreadable
    response all produce failed_extraction() so the user can enter the
    record manually.

    Args:
        evidence: Evidence, or raw SMS text.
        api_key: OpenAI API key. Falls back to OPENAI_API_KEY env var.
        llm: Optional pre-built runnable (anything with .invoke(messages)).

    Returns:
        ExtractionResult
    """
    if isinstance(evidence, str):
        evidence = Evidence.from_text(evidence)

    original_text = None if evidence.is_image else evidence.text

    try:
        runnable = llm if llm is not None else build_llm(api_key)
        logger.info(
            "Extracting rent details from %s evidence%s",
            evidence.kind,
            f" ({evidence.file_name})" if evidence.file_name else "",
        )
        response = runnable.invoke(build_messages(evidence))
        text = _response_text(response)
        if not text.strip():
            raise ValueError("No response from AI")
    except Exception:
        logger.exception("Rent extraction failed; falling back to manual entry")
        return failed_extraction(original_text)

    result = normalize(text, original_text=original_text)
    logger.info(
        "Extraction finished: confidence=%s method=%s document=%s",
        result.confidence_score, result.payment_method.name, result.document_type.name,
    )
    return result


def run_extraction(evidence: Union[Evidence, str], api_key: Optional[str] = None) -> ExtractionResult:
    """Entry point used by the UI."""
    return extract_rent_details(evidence, api_key=api_key)
