"""
Evidence loader - routes uploaded files to text or image evidence.
Returns (bool, str, Optional[Evidence]) so the UI can report failures inline.
"""
from pathlib import Path
from typing import Optional, Tuple

from config import settings
from ingestion import Evidence, detect_evidence_kind, mime_type_for
from utils.validations import validate_file_extension


class EvidenceLoader:
    """
    Loads SMS text exports and receipt/agreement photos as Evidence.
    """

    def __init__(self, max_size_mb: float = settings.MAX_UPLOAD_SIZE_MB):
        self.max_bytes = int(max_size_mb * 1024 * 1024)

    def load_file(self, file_path: str) -> Tuple[bool, str, Optional[Evidence]]:
        """
        Load a file from disk.

        Args:
            file_path: Path to a .txt/.sms export or an image.

        Returns:
            (success: bool, message: str, evidence: Optional[Evidence])
        """
        path = Path(file_path)
        if not path.exists():
            return False, f"File not found: {file_path}", None

        try:
            data = path.read_bytes()
        except OSError as e:
            return False, f"Error loading {path.name}: {str(e)}", None

        return self.load_upload(path.name, data)

    def load_upload(self, file_name: str, data: bytes) -> Tuple[bool, str, Optional[Evidence]]:
        """Load an in-memory upload (e.g. from st.file_uploader)"""
        kind = detect_evidence_kind(file_name)
        if kind == "unknown":
            supported = ", ".join(self.get_supported_extensions())
            extension = Path(file_name or "").suffix.lower().lstrip(".") or "(none)"
            return (
                False,
                f"Unsupported file type: {extension}. Supported types: {supported}",
                None,
            )

        if len(data) > self.max_bytes:
            return False, f"{file_name} is larger than {self.max_bytes // (1024 * 1024)} MB", None

        if kind == "text":
            text = data.decode("utf-8", errors="replace").strip()
            if not text:
                return False, f"{file_name} is empty", None
            return True, f"Successfully loaded {file_name}", Evidence.from_text(text, file_name)

        if not data:
            return False, f"{file_name} is empty", None
        evidence = Evidence.from_image(data, mime_type_for(file_name), file_name)
        return True, f"Successfully loaded {file_name}", evidence

    @classmethod
    def get_supported_extensions(cls) -> list:
        """Get list of supported file extensions."""
        return list(settings.TEXT_EXTENSIONS) + list(settings.IMAGE_EXTENSIONS)

    @classmethod
    def is_supported(cls, filename: str) -> bool:
        """Check if a filename has a supported extension."""
        return validate_file_extension(filename, cls.get_supported_extensions())
