"""Input validation for catalog entries."""

import re
from typing import Final

from iot_status.utils.address import normalize_address

MAX_CATEGORY_LENGTH: Final = 50
MAX_DEVICE_NAME_LENGTH: Final = 100

_CATEGORY_INVALID_RE: Final = re.compile(r'[\[\]"]')
_DEVICE_INVALID_RE: Final = re.compile(r'[=\[\]"]')
_ADDRESS_RE: Final = re.compile(r"^[a-zA-Z0-9][a-zA-Z0-9.-]*(?::\d+)?(?:/.*)?\Z")
_CONTROL_CHARS_RE: Final = re.compile(r"[\x00-\x1f\x7f]")


class ValidationError(ValueError):
    """Catalog input rejected."""

    pass


def validate_category(name: str) -> str:
    """Validate a category name.

    Args:
        name: Raw category name

    Returns:
        Trimmed category name

    Raises:
        ValidationError: If the name is empty, too long or has [ ] " or control characters
    """
    name = name.strip()
    if not name:
        raise ValidationError("Category name cannot be empty")
    if len(name) > MAX_CATEGORY_LENGTH:
        raise ValidationError(
            f"Category name too long (max {MAX_CATEGORY_LENGTH} characters)"
        )
    if _CATEGORY_INVALID_RE.search(name) or _CONTROL_CHARS_RE.search(name):
        raise ValidationError("Category name contains invalid characters")
    return name


def validate_device_name(name: str) -> str:
    """Validate a device name.

    Args:
        name: Raw device name

    Returns:
        Trimmed device name

    Raises:
        ValidationError: If the name is empty, too long or has = [ ] " or control characters
    """
    name = name.strip()
    if not name:
        raise ValidationError("Device name cannot be empty")
    if len(name) > MAX_DEVICE_NAME_LENGTH:
        raise ValidationError(
            f"Device name too long (max {MAX_DEVICE_NAME_LENGTH} characters)"
        )
    if _DEVICE_INVALID_RE.search(name) or _CONTROL_CHARS_RE.search(name):
        raise ValidationError("Device name contains invalid characters")
    return name


def validate_address(address: str) -> str:
    """Validate a device address and strip its scheme.

    Args:
        address: Raw address, e.g. ``http://10.0.0.5:8080/status``

    Returns:
        Address without scheme, e.g. ``10.0.0.5:8080/status``

    Raises:
        ValidationError: If empty or not ``host[:port][/path]``
    """
    if not address.strip():
        raise ValidationError("Address cannot be empty")
    address = normalize_address(address)
    if not _ADDRESS_RE.match(address) or _CONTROL_CHARS_RE.search(address):
        raise ValidationError("Invalid address format")
    return address
