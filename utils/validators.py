"""
Validation tools
"""
from typing import Any

from utils.exceptions import ValidationError

def is_blank(value: Any) -> bool:
    """True for None, empty or whitespace-only strings"""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False

def require_fields(message: str, *values: Any):
    """Raise ValidationError with message if any value is blank"""
    if any(is_blank(v) for v in values):
        raise ValidationError(message)

def validate_max_length(value: str, max_length: int, field_name: str = "Field"):
    """Validate maximum length"""
    if len(value) > max_length:
        raise ValidationError(f"{field_name} length cannot exceed {max_length} characters")

def validate_chat_message(message: str):
    """Validate chat message"""
    require_fields("Message content cannot be empty", message)
    validate_max_length(message, 5000, "Message content")
