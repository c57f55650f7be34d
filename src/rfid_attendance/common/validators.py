from __future__ import annotations

from typing import Any, Mapping, Optional

from ..core.exceptions import ValidationError


def require_max_length(value: str, field_name: str, max_len: int) -> str:
    if len(value) > max_len:
        raise ValidationError(f"{field_name} must be at most {max_len} characters")
    return value


def require_fields(values: Mapping[str, Any]) -> dict[str, str]:
    """Validate several required string fields at once.

    Reports every missing field in a single error, in the order given.
    """

    missing = [name for name, value in values.items() if not isinstance(value, str) or not value.strip()]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")
    return {name: value.strip() for name, value in values.items()}


def require_token_list(value: Any, field_name: str = "rfid_tags") -> list[str]:
    if not isinstance(value, list) or not all(isinstance(token, str) for token in value):
        raise ValidationError(f"Invalid {field_name} array")
    return list(value)


def optional_positive_int(value: Any, field_name: str) -> Optional[int]:
    """Accept a JSON int or a digit string (query args); None/'' mean absent."""

    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {field_name}")
    if isinstance(value, int):
        number = value
    elif isinstance(value, str) and value.strip().isdigit():
        number = int(value.strip())
    else:
        raise ValidationError(f"Invalid {field_name}")
    if number <= 0:
        raise ValidationError(f"Invalid {field_name}")
    return number


def optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError("Filter values must be strings")
    return value or None
