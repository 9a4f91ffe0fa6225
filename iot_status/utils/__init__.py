"""Utilities for iot_status."""

from iot_status.utils.address import extract_host, is_external_domain, normalize_address
from iot_status.utils.console import ColorfulFormatter, RequestFormatter
from iot_status.utils.ping import check_host_reachable, check_hosts_reachable
from iot_status.utils.validation import (
    ValidationError,
    validate_address,
    validate_category,
    validate_device_name,
)

__all__ = [
    "check_host_reachable",
    "check_hosts_reachable",
    "ColorfulFormatter",
    "extract_host",
    "is_external_domain",
    "normalize_address",
    "RequestFormatter",
    "validate_address",
    "validate_category",
    "validate_device_name",
    "ValidationError",
]
