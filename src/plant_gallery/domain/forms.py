"""Structured form state for the upload dialog."""

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field

Validator = Callable[[str], str | None]

REQUIRED_MESSAGE = "This field is required"
IMAGE_LINK_MESSAGE = "Enter a valid image link"

# Loose URL shape: optional scheme, a dotted host, optional path/query.
IMAGE_SRC_PATTERN = re.compile(
    r"(https?://.)?(www\.)?[-a-zA-Z0-9@:%._+~#=]{2,256}\.[a-z]{2,6}\b"
    r"([-a-zA-Z0-9@:%_+.~#?&/=]*)"
)

# A leading "scheme:" that is not a host:port pair.
_SCHEME_PATTERN = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.-]*):(?!\d)")
_CONTROL_CHARS = re.compile(r"[\x00-\x20]")
SAFE_SCHEMES = frozenset({"http", "https"})


def required(value: str) -> str | None:
    """Reject empty values."""
    if value == "":
        return REQUIRED_MESSAGE
    return None


def has_safe_scheme(value: str) -> bool:
    """Return False for links with a scheme other than http or https."""
    match = _SCHEME_PATTERN.match(_CONTROL_CHARS.sub("", value))
    return match is None or match.group(1).lower() in SAFE_SCHEMES


def image_link(value: str) -> str | None:
    """Require a non-empty value containing something URL-shaped."""
    missing = required(value)
    if missing:
        return missing
    if not has_safe_scheme(value):
        return IMAGE_LINK_MESSAGE
    if IMAGE_SRC_PATTERN.search(value) is None:
        return IMAGE_LINK_MESSAGE
    return None


def optional(_value: str) -> str | None:
    return None


@dataclass
class FormField:
    """A named input with its current value and validator."""

    name: str
    validate: Validator
    placeholder: str = ""
    value: str = ""

    def error(self) -> str | None:
        return self.validate(self.value)


@dataclass
class UploadForm:
    """Form state for adding a new image."""

    fields: dict[str, FormField] = field(default_factory=lambda: _upload_fields())
    errors: dict[str, str] = field(default_factory=dict)

    def bind(self, data: Mapping[str, str | None]) -> None:
        """Copy submitted values onto the known fields."""
        for name, form_field in self.fields.items():
            form_field.value = data.get(name) or ""

    def validate(self) -> dict[str, str]:
        """Validate every field and remember the errors."""
        self.errors = {}
        for name, form_field in self.fields.items():
            message = form_field.error()
            if message:
                self.errors[name] = message
        return self.errors

    def value(self, name: str) -> str:
        return self.fields[name].value

    def reset(self) -> None:
        """Discard entered values and errors."""
        for form_field in self.fields.values():
            form_field.value = ""
        self.errors = {}


def _upload_fields() -> dict[str, FormField]:
    return {
        "imageSrc": FormField(
            "imageSrc", image_link, placeholder="Image link from Unsplash"
        ),
        "name": FormField("name", optional, placeholder="Give a name to image or not"),
        "username": FormField(
            "username", optional, placeholder="Introduce yourself or not"
        ),
        "key": FormField("key", required, placeholder="Your key"),
    }
