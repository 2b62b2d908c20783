from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

SchemaT = TypeVar("SchemaT", bound=BaseModel)

# Passwords are compared byte for byte, so surrounding whitespace is kept.
UNTRIMMED_FIELDS = frozenset({"password"})


def clean_input(raw: dict[str, Any]) -> dict[str, Any]:
    """Trim strings and treat empty ones as absent, the way form input usually arrives."""
    cleaned: dict[str, Any] = {}
    for key, value in raw.items():
        if isinstance(value, str):
            if key not in UNTRIMMED_FIELDS:
                value = value.strip()
            if value == "":
                value = None
        cleaned[key] = value
    return cleaned


def _message(field: str, error: dict) -> str:
    kind = error.get("type")
    ctx = error.get("ctx") or {}
    if kind == "missing":
        return f"The {field} field is required."
    if kind == "string_type":
        return f"The {field} field must be a string."
    if kind == "string_too_long":
        return f"The {field} field must not be greater than {ctx.get('max_length')} characters."
    if kind == "string_too_short":
        return f"The {field} field must be at least {ctx.get('min_length')} characters."
    return error.get("msg", f"The {field} field is invalid.")


def validate_input(schema: type[SchemaT], raw: dict[str, Any]) -> tuple[SchemaT | None, dict[str, list[str]]]:
    """Validate cleaned input against ``schema``.

    Returns either the parsed model and no errors, or ``None`` and a mapping of
    field name to messages. Nothing is raised for invalid input.
    """
    data = {
        key: value
        for key, value in raw.items()
        if key in schema.model_fields and value is not None
    }
    try:
        return schema.model_validate(data), {}
    except ValidationError as exc:
        errors: dict[str, list[str]] = {}
        for error in exc.errors():
            loc = error.get("loc") or ("request",)
            field = str(loc[0])
            errors.setdefault(field, []).append(_message(field, error))
        return None, errors


def merge_errors(*groups: dict[str, list[str]]) -> dict[str, list[str]]:
    merged: dict[str, list[str]] = {}
    for group in groups:
        for field, messages in group.items():
            merged.setdefault(field, []).extend(messages)
    return merged
