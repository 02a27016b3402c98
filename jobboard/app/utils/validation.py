"""
Validation utilities for request payloads.
"""
import re
from typing import Any, Iterable

from ..models.job import JOB_STATUSES
from .error_handlers import ValidationError, get_error_message

_URL_PATTERN = re.compile(r"^https?://[^\s/$.?#][^\s]*$", re.IGNORECASE)


def missing_fields(payload: dict, required: Iterable[str]) -> list[str]:
    """Names of required fields that are absent, not strings, or blank."""
    missing = []
    for field in required:
        value = payload.get(field)
        if not isinstance(value, str) or not value.strip():
            missing.append(field)
    return missing


def validate_required_fields(payload: dict, required: Iterable[str]) -> None:
    missing = missing_fields(payload, required)
    if missing:
        raise ValidationError(
            f"Missing required fields: {', '.join(missing)}",
            details={"fields": missing},
        )


def validate_string_field(
    value: Any,
    field_name: str,
    max_length: int = 5000,
    required: bool = False,
) -> str:
    """Trim a free-text field; None becomes an empty string unless required."""
    if value is None:
        if required:
            raise ValidationError(f"{field_name} is required", details={"fields": [field_name]})
        return ""

    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string", details={"fields": [field_name]})

    value = value.strip()
    if required and not value:
        raise ValidationError(f"{field_name} cannot be empty", details={"fields": [field_name]})

    if len(value) > max_length:
        raise ValidationError(
            f"{field_name} must not exceed {max_length} characters",
            details={"fields": [field_name]},
        )
    return value


def split_lines(value: str | list | None) -> list[str]:
    """
    Turn newline-delimited text (or an already-split list) into an ordered list,
    dropping blank entries.
    """
    if value is None:
        return []
    if isinstance(value, str):
        items = value.splitlines()
    elif isinstance(value, list):
        items = [item for item in value if isinstance(item, str)]
    else:
        raise ValidationError("Expected newline-separated text or a list of strings")
    return [item.strip() for item in items if item.strip()]


def validate_apply_link(value: str | None) -> str:
    link = validate_string_field(value, "applyLink", max_length=2048)
    if link and not _URL_PATTERN.match(link):
        raise ValidationError("applyLink must be an http(s) URL", details={"fields": ["applyLink"]})
    return link


def validate_job_status(status: Any) -> str:
    if not isinstance(status, str) or status.strip().lower() not in JOB_STATUSES:
        raise ValidationError(get_error_message("invalid_status"), details={"fields": ["status"]})
    return status.strip().lower()
