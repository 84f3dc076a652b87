"""
Input validation utilities
"""
from typing import List
import re


def validate_rent_amount(amount) -> bool:
    """Expected rent must be strictly positive"""
    try:
        return float(amount) > 0
    except (ValueError, TypeError):
        return False


def validate_due_day(day) -> bool:
    """Validate a day-of-month between 1 and 31"""
    try:
        return 1 <= int(day) <= 31 and float(day) == int(day)
    except (ValueError, TypeError):
        return False


def validate_phone(phone: str) -> bool:
    """Validate a local phone number (digits, optional leading +)"""
    if not phone:
        return False
    digits = re.sub(r"[\s\-()]", "", str(phone))
    return bool(re.match(r"^\+?\d{9,15}$", digits))


def validate_email(email: str) -> bool:
    """Loose e-mail shape check"""
    if not email:
        return False
    return bool(re.match(r"^[^@\s]+@[^@\s]+\.[^@\s]+$", str(email).strip()))


def validate_pin(pin: str, expected: str) -> bool:
    """Check a landlord access PIN"""
    if not pin or not expected:
        return False
    return str(pin).strip() == str(expected)


def validate_file_extension(filename: str, allowed_extensions: List[str]) -> bool:
    """Validate file extension"""
    if not filename or "." not in filename:
        return False

    extension = filename.lower().rsplit('.', 1)[-1]
    return extension in [ext.lower().lstrip('.') for ext in allowed_extensions]


def unit_form_errors(name: str, rent_amount, due_date_day) -> List[str]:
    """Collect validation messages for a unit add/edit form"""
    errors = []
    if not name or not str(name).strip():
        errors.append("Unit name is required.")
    if not validate_rent_amount(rent_amount):
        errors.append("Rent amount must be greater than zero.")
    if not validate_due_day(due_date_day):
        errors.append("Due day must be between 1 and 31.")
    return errors
