"""
Field rules shared by the request schemas.

Each rule raises ``ValueError`` carrying the human-readable message that ends
up in the 422 envelope, so the first failing rule of the first failing field
is what the client sees.
"""

from typing import Any, Optional

from email_validator import EmailNotValidError, validate_email

# Largest value an Integer primary key column can hold
MAX_ID = 2**31 - 1


def attribute_name(field: str) -> str:
    """Render a field name the way messages refer to it (``user_id`` -> ``user id``)."""
    return field.replace("_", " ")


def required_message(field: str) -> str:
    return f"The {attribute_name(field)} field is required."


def taken_message(field: str) -> str:
    return f"The {attribute_name(field)} has already been taken."


def invalid_selection_message(field: str) -> str:
    return f"The selected {attribute_name(field)} is invalid."


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def require(value: Any, field: str) -> Any:
    if _is_blank(value):
        raise ValueError(required_message(field))
    return value


def trim(value: Any) -> Any:
    """Strip surrounding whitespace from string input; other values pass through."""
    return value.strip() if isinstance(value, str) else value


def require_string(value: Any, field: str) -> str:
    require(value, field)
    if not isinstance(value, str):
        raise ValueError(f"The {attribute_name(field)} must be a string.")
    return value


def length_between(value: str, field: str, minimum: int, maximum: int) -> str:
    if not minimum <= len(value) <= maximum:
        raise ValueError(
            f"The {attribute_name(field)} must be between {minimum} and {maximum} characters."
        )
    return value


def min_length(value: str, field: str, minimum: int) -> str:
    if len(value) < minimum:
        raise ValueError(f"The {attribute_name(field)} must be at least {minimum} characters.")
    return value


def email_address(value: Any, field: str = "email") -> str:
    value = require_string(trim(value), field)
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        raise ValueError(f"The {attribute_name(field)} must be a valid email address.")
    return value


def reference_id(value: Any, field: str) -> int:
    """Coerce a foreign-key id; anything that cannot name a row is an invalid selection."""
    require(value, field)
    if isinstance(value, bool):
        raise ValueError(invalid_selection_message(field))
    if isinstance(value, str) and value.strip().isascii() and value.strip().isdigit():
        value = int(value.strip())
    if not isinstance(value, int) or not 0 < value <= MAX_ID:
        raise ValueError(invalid_selection_message(field))
    return value


def optional_reference_id(value: Any, field: str) -> Optional[int]:
    if value is None:
        return None
    return reference_id(value, field)


def name_rule(value: Any, field: str = "name") -> str:
    return length_between(require_string(trim(value), field), field, 3, 255)


def description_rule(value: Any, field: str = "description") -> str:
    return min_length(require_string(trim(value), field), field, 3)


def password_rule(value: Any, field: str = "password") -> str:
    # Passwords are kept verbatim, surrounding whitespace included
    return min_length(require_string(value, field), field, 8)
