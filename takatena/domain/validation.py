"""
Field-level validation for listing and user data.

Validators take loosely-typed input (decoded JSON) and return the cleaned
value, collecting every failing field into a single ValidationError so the
caller can report them together.
"""
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any
from urllib.parse import urlparse

from takatena.domain.enums.listing_status import ListingStatus
from takatena.domain.enums.material import MaterialType, Unit
from takatena.domain.enums.user_type import UserType

MAX_TITLE_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500
MAX_IMAGES_PER_LISTING = 2

MIN_PASSWORD_LENGTH = 8
MIN_SIGNUP_NAME_LENGTH = 2
MAX_NAME_LENGTH = 100
MAX_LOCATION_LENGTH = 100
MAX_LISTING_LOCATION_LENGTH = 255
MAX_EMAIL_LENGTH = 320
MAX_PHONE_LENGTH = 20

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str
    code: str


class ValidationError(Exception):
    """Raised when input fails shape, length, positivity or enum constraints."""

    def __init__(self, errors: list[FieldError], message: str = "Validation failed") -> None:
        self.errors = errors
        super().__init__(message)


class _FieldInvalid(Exception):
    def __init__(self, message: str, code: str = "invalid") -> None:
        self.code = code
        super().__init__(message)


# ---- Primitive validators --------------------------------------------------

def _text(label: str, *, min_length: int = 1, max_length: int | None = None) -> Callable[[Any], str]:
    def validate(value: Any) -> str:
        if not isinstance(value, str):
            raise _FieldInvalid(f"{label} must be a string", "invalid_type")
        if len(value) < min_length:
            if min_length == 1:
                raise _FieldInvalid(f"{label} is required", "too_small")
            raise _FieldInvalid(f"{label} must be at least {min_length} characters", "too_small")
        if max_length is not None and len(value) > max_length:
            raise _FieldInvalid(f"{label} must be less than {max_length} characters", "too_big")
        return value

    return validate


def _optional_text(label: str, *, max_length: int) -> Callable[[Any], str | None]:
    check = _text(label, min_length=0, max_length=max_length)

    def validate(value: Any) -> str | None:
        return None if value is None else check(value)

    return validate


def _choice(enum_cls: type[Enum], label: str) -> Callable[[Any], Enum]:
    def validate(value: Any) -> Enum:
        try:
            return enum_cls(value)
        except ValueError:
            allowed = ", ".join(e.value for e in enum_cls)
            raise _FieldInvalid(f"{label} must be one of: {allowed}", "invalid_enum_value") from None

    return validate


def _positive_number(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _FieldInvalid("Quantity must be a number", "invalid_type")
    if value <= 0:
        raise _FieldInvalid("Quantity must be positive", "too_small")
    return float(value)


def _is_url(value: str) -> bool:
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def _images(value: Any) -> list[str]:
    if not isinstance(value, list):
        raise _FieldInvalid("Images must be a list of URLs", "invalid_type")
    if len(value) > MAX_IMAGES_PER_LISTING:
        raise _FieldInvalid(f"Maximum {MAX_IMAGES_PER_LISTING} images allowed", "too_big")
    for item in value:
        if not isinstance(item, str) or not _is_url(item):
            raise _FieldInvalid("Images must be valid URLs", "invalid_string")
    return list(value)


def _email(value: Any) -> str:
    if not isinstance(value, str) or not _EMAIL_RE.match(value):
        raise _FieldInvalid("Please enter a valid email address", "invalid_string")
    if len(value) > MAX_EMAIL_LENGTH:
        raise _FieldInvalid(f"Email must be less than {MAX_EMAIL_LENGTH} characters", "too_big")
    return value.lower()


# ---- Field tables ----------------------------------------------------------

LISTING_VALIDATORS: dict[str, Callable[[Any], Any]] = {
    "title": _text("Title", max_length=MAX_TITLE_LENGTH),
    "description": _text("Description", max_length=MAX_DESCRIPTION_LENGTH),
    "material_type": _choice(MaterialType, "Material type"),
    "quantity": _positive_number,
    "unit": _choice(Unit, "Unit"),
    "location": _text("Location", max_length=MAX_LISTING_LOCATION_LENGTH),
    "images": _images,
}

# Fields an owner may change after creation
LISTING_UPDATE_VALIDATORS: dict[str, Callable[[Any], Any]] = {
    **LISTING_VALIDATORS,
    "status": _choice(ListingStatus, "Status"),
}

PROFILE_VALIDATORS: dict[str, Callable[[Any], Any]] = {
    "name": _text("Name", max_length=MAX_NAME_LENGTH),
    "location": _text("Location", max_length=MAX_LOCATION_LENGTH),
    "phone": _optional_text("Phone", max_length=MAX_PHONE_LENGTH),
    "whatsapp": _optional_text("WhatsApp", max_length=MAX_PHONE_LENGTH),
}

SIGNUP_VALIDATORS: dict[str, Callable[[Any], Any]] = {
    "email": _email,
    "password": _text("Password", min_length=MIN_PASSWORD_LENGTH),
    "name": _text("Name", min_length=MIN_SIGNUP_NAME_LENGTH, max_length=MAX_NAME_LENGTH),
    "user_type": _choice(UserType, "User type"),
    "location": _text("Location", max_length=MAX_LOCATION_LENGTH),
    "phone": _optional_text("Phone", max_length=MAX_PHONE_LENGTH),
    "whatsapp": _optional_text("WhatsApp", max_length=MAX_PHONE_LENGTH),
}

_OPTIONAL_ON_CREATE = frozenset({"images", "phone", "whatsapp"})
_CREATE_DEFAULTS: dict[str, Any] = {"images": list}


def validate_fields(
    data: Mapping[str, Any],
    validators: Mapping[str, Callable[[Any], Any]],
    *,
    partial: bool = False,
) -> dict[str, Any]:
    """
    Validate the known keys of ``data`` and return the cleaned values.

    Keys not present in ``validators`` are dropped. With ``partial=False``
    every non-optional field must be present.
    """
    cleaned: dict[str, Any] = {}
    errors: list[FieldError] = []

    for name, validate in validators.items():
        if name not in data:
            if partial:
                continue
            if name in _OPTIONAL_ON_CREATE:
                default = _CREATE_DEFAULTS.get(name)
                cleaned[name] = default() if default else None
                continue
            errors.append(FieldError(field=name, message="Required", code="required"))
            continue
        try:
            cleaned[name] = validate(data[name])
        except _FieldInvalid as exc:
            errors.append(FieldError(field=name, message=str(exc), code=exc.code))

    if errors:
        raise ValidationError(errors)
    return cleaned


def validate_listing(data: Mapping[str, Any]) -> dict[str, Any]:
    return validate_fields(data, LISTING_VALIDATORS)


def validate_listing_changes(data: Mapping[str, Any]) -> dict[str, Any]:
    return validate_fields(data, LISTING_UPDATE_VALIDATORS, partial=True)


def validate_profile_changes(data: Mapping[str, Any]) -> dict[str, Any]:
    return validate_fields(data, PROFILE_VALIDATORS, partial=True)


def validate_signup(data: Mapping[str, Any]) -> dict[str, Any]:
    """Validate a signup payload, including the password confirmation."""
    errors: list[FieldError] = []
    cleaned: dict[str, Any] = {}
    try:
        cleaned = validate_fields(data, SIGNUP_VALIDATORS)
    except ValidationError as exc:
        errors.extend(exc.errors)

    if data.get("confirm_password") != data.get("password"):
        errors.append(
            FieldError(field="confirm_password", message="Passwords don't match", code="custom")
        )

    if errors:
        raise ValidationError(errors)
    return cleaned
