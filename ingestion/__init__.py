"""
ingestion: payment evidence (SMS text or document photo) handed to the extraction agent.
"""
import base64
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from config import settings

_MIME_TYPES = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "webp": "image/webp",
    "heic": "image/heic",
}


@dataclass
class Evidence:
    """One piece of payment evidence."""
    kind: str  # text | image
    text: str = ""
    image_bytes: Optional[bytes] = None
    mime_type: Optional[str] = None
    file_name: Optional[str] = None

    @classmethod
    def from_text(cls, text: str, file_name: Optional[str] = None) -> "Evidence":
        return cls(kind="text", text=text or "", file_name=file_name)

    @classmethod
    def from_image(cls, data: bytes, mime_type: str, file_name: Optional[str] = None) -> "Evidence":
        return cls(kind="image", image_bytes=data, mime_type=mime_type, file_name=file_name)

    @property
    def is_image(self) -> bool:
        return self.kind == "image"

    def data_uri(self) -> str:
        """Base64 data URI for image evidence"""
        if not self.is_image or not self.image_bytes:
            raise ValueError("data_uri() is only available for image evidence")
        encoded = base64.b64encode(self.image_bytes).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"


def detect_evidence_kind(file_name: str) -> str:
    """
    Heuristic evidence-kind detection from the file extension.

    Returns one of: "text", "image", "unknown".
    """
    extension = Path(file_name or "").suffix.lower().lstrip(".")
    if extension in settings.TEXT_EXTENSIONS:
        return "text"
    if extension in settings.IMAGE_EXTENSIONS:
        return "image"
    return "unknown"


def mime_type_for(file_name: str) -> Optional[str]:
    extension = Path(file_name or "").suffix.lower().lstrip(".")
    return _MIME_TYPES.get(extension)
