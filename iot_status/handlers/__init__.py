"""API request handlers for iot_status."""

from iot_status.handlers.catalog import (
    handle_catalog_action,
    handle_catalog_debug,
    handle_get_catalog,
)
from iot_status.handlers.errors import InvalidRequestError
from iot_status.handlers.status import (
    handle_check_all,
    handle_check_batch,
    handle_check_single,
    handle_list_devices,
    handle_status_action,
)

__all__ = [
    "handle_catalog_action",
    "handle_catalog_debug",
    "handle_check_all",
    "handle_check_batch",
    "handle_check_single",
    "handle_get_catalog",
    "handle_list_devices",
    "handle_status_action",
    "InvalidRequestError",
]
