"""Small checks shared by request validators."""
from decimal import Decimal
from typing import List, Optional

from pydantic import EmailStr, TypeAdapter, ValidationError

_EMAIL = TypeAdapter(EmailStr)


def is_valid_email(value: Optional[str]) -> bool:
    if not value:
        return False
    try:
        _EMAIL.validate_python(value.strip())
    except ValidationError:
        return False
    return True


def check_required(errors: List[str], value: Optional[str], label: str, max_length: Optional[int] = None) -> None:
    """Append "<label> is required" or a length error to ``errors``."""
    if value is None or not value.strip():
        errors.append(f"{label} is required")
    elif max_length is not None and len(value.strip()) > max_length:
        errors.append(f"{label} must not exceed {max_length} characters")


def check_max_length(errors: List[str], value: Optional[str], label: str, max_length: int) -> None:
    if value is not None and len(value.strip()) > max_length:
        errors.append(f"{label} must not exceed {max_length} characters")


def check_non_negative(errors: List[str], value: Optional[Decimal], label: str) -> None:
    if value is not None and value < 0:
        errors.append(f"{label} must be non-negative")
