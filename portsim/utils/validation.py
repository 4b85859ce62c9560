"""Argument checks shared by entity constructors."""

from portsim.config.constants import FIELD_SEPARATOR


def require_non_negative(label: str, value: int) -> int:
    if value < 0:
        raise ValueError(f"{label} must be greater than or equal to 0: {value}")
    return value


def require_text(label: str, value: str) -> str:
    """Text fields end up in colon-delimited snapshot records."""
    if not value:
        raise ValueError(f"{label} must not be empty")
    if FIELD_SEPARATOR in value or "\n" in value:
        raise ValueError(f"{label} must not contain '{FIELD_SEPARATOR}' or newlines: {value!r}")
    return value
