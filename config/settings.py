"""
Configuration settings for Kigali Rent Intel
"""
import logging
import os

# Application Settings
APP_TITLE = "Kigali Rent Intel"
APP_ICON = "🏠"

# Currency & placeholder values
LOCAL_CURRENCY = "RWF"
VACANCY_SENTINEL = "Vacant"
UNKNOWN_LANDLORD = "Unknown Landlord"
SELF_NAME = "Me"
DEFAULT_TENANT = SELF_NAME
DEFAULT_DESCRIPTION = "Rent Payment"
DEFAULT_SUMMARY = "Transaction processed"
FAILED_EXTRACTION_SUMMARY = "Failed to extract data. Please try again or enter manually."

# Inference (OpenAI via LangChain)
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
EXTRACTION_MODEL = os.getenv("EXTRACTION_MODEL", "gpt-4o-mini")
EXTRACTION_TIMEOUT = float(os.getenv("EXTRACTION_TIMEOUT", "60"))
EXTRACTION_MAX_RETRIES = int(os.getenv("EXTRACTION_MAX_RETRIES", "1"))
EXTRACTION_MAX_TOKENS = int(os.getenv("EXTRACTION_MAX_TOKENS", "1024"))

# Landlord access gate
LANDLORD_PIN = os.getenv("LANDLORD_PIN", "2024")

# Dashboard thresholds
DUE_SOON_DAYS = 5
TREND_MONTHS = 6
LOW_CONFIDENCE_THRESHOLD = 80

# Reminders
WHATSAPP_BASE_URL = "https://wa.me"
WHATSAPP_COUNTRY_PREFIX = "25"

# Upload settings
TEXT_EXTENSIONS = ["txt", "sms"]
IMAGE_EXTENSIONS = ["jpg", "jpeg", "png", "webp", "heic"]
MAX_UPLOAD_SIZE_MB = 20

# Database Settings
USE_DATABASE = os.getenv("USE_DATABASE", "true").lower() in ("1", "true", "yes")
DATABASE_PATH = os.getenv("DATABASE_PATH", "data/rent_intel.duckdb")
AUDIT_LOG_PATH = os.getenv("AUDIT_LOG_PATH", "data/audit_log.jsonl")

# Date Format
DATE_FORMAT = "%Y-%m-%d"
MONTH_FORMAT = "%Y-%m"

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = None):
    """Configure root logging for the app"""
    logging.basicConfig(level=(level or LOG_LEVEL).upper(), format=LOG_FORMAT)
