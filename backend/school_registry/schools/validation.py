"""
Field rules for the school intake form.

The same rules run in the client before submission and on the server when a
submission arrives, so a caller that skips the client checks is still held to
them. ``validate_school_form`` returns at most one message per field: the
first rule that field fails.
"""
import base64
import re
from typing import Callable, Dict, List, Mapping, Optional, Tuple

EMAIL_PATTERN = re.compile(r"^[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}$", re.IGNORECASE)
PHONE_PATTERN = re.compile(r"^[+]?[0-9\-\s]{10,}$")
PINCODE_PATTERN = re.compile(r"^[0-9]{6}$")

SCHOOL_FIELDS = ("name", "email", "phone", "address", "city", "state", "pincode")

Rule = Tuple[Callable[[str], bool], str]


def _min_length(length: int) -> Callable[[str], bool]:
    return lambda value: len(value) >= length


def _matches(pattern: "re.Pattern[str]") -> Callable[[str], bool]:
    return lambda value: pattern.fullmatch(value) is not None


FIELD_RULES: Dict[str, Tuple[str, List[Rule]]] = {
    "name": ("School name is required", [
        (_min_length(2), "School name must be at least 2 characters"),
    ]),
    "email": ("Email is required", [
        (_matches(EMAIL_PATTERN), "Please enter a valid email address"),
    ]),
    "phone": ("Phone number is required", [
        (_matches(PHONE_PATTERN), "Please enter a valid phone number"),
    ]),
    "address": ("Address is required", [
        (_min_length(10), "Address must be at least 10 characters"),
    ]),
    "city": ("City is required", []),
    "state": ("State is required", []),
    "pincode": ("Pincode is required", [
        (_matches(PINCODE_PATTERN), "Pincode must be 6 digits"),
    ]),
}

IMAGE_TYPE_MESSAGE = "Please select an image file"


def validate_field(field: str, value: Optional[str]) -> Optional[str]:
    """Return the first failing message for ``field``, or None when it passes."""
    required_message, rules = FIELD_RULES[field]
    if value is None or not value.strip():
        return required_message
    for check, message in rules:
        if not check(value):
            return message
    return None


def validate_image(content_type: Optional[str]) -> Optional[str]:
    if content_type is None or not content_type.lower().startswith("image/"):
        return IMAGE_TYPE_MESSAGE
    return None


def validate_school_form(data: Mapping[str, Optional[str]], image_content_type: Optional[str] = None) -> Dict[str, str]:
    """
    Run every field rule against ``data``.

    ``image_content_type`` is only checked when an image was attached.
    Returns a mapping of field name to message; an empty mapping means the
    form is valid.
    """
    errors: Dict[str, str] = {}
    for field in SCHOOL_FIELDS:
        message = validate_field(field, data.get(field))
        if message:
            errors[field] = message
    if image_content_type is not None:
        message = validate_image(image_content_type)
        if message:
            errors["image"] = message
    return errors


def is_valid(errors: Mapping[str, str]) -> bool:
    return not errors


def build_image_preview(data: bytes, content_type: str) -> str:
    """Encode an image as a data URI for local display, without any upload."""
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{content_type};base64,{encoded}"
