"""Device catalog management handlers."""

import logging
from typing import Any

from iot_status.config.store import SAVE_FAILED_MESSAGE, ConfigStore
from iot_status.dependencies import Dependencies
from iot_status.handlers.errors import InvalidRequestError
from iot_status.handlers.status import timestamp
from iot_status.models import CatalogResult

logger = logging.getLogger(__name__)


def _field(payload: dict[str, Any], name: str) -> str:
    value = payload.get(name)
    return "" if value is None else str(value)


def handle_get_catalog(deps: Dependencies) -> dict[str, Any]:
    """Return the catalog grouped by category."""
    store = deps.open_store()
    return {
        "success": True,
        "categories": store.categories(),
        "can_write": store.can_write(),
        "timestamp": timestamp(),
    }


def handle_catalog_debug(deps: Dependencies) -> dict[str, Any]:
    """Describe the catalog file (path, permissions, counts)."""
    return {"success": True, **deps.open_store().debug_info()}


def _apply_action(store: ConfigStore, action: str, payload: dict[str, Any]) -> CatalogResult:
    if action == "add_category":
        return store.add_category(_field(payload, "category"))
    if action == "add_device":
        return store.add_device(
            _field(payload, "category"),
            _field(payload, "name"),
            _field(payload, "address"),
        )
    if action == "remove_device":
        return store.remove_device(_field(payload, "category"), _field(payload, "name"))
    if action == "remove_category":
        return store.remove_category(_field(payload, "category"))
    raise InvalidRequestError("Invalid action")


def handle_catalog_action(
    payload: dict[str, Any],
    deps: Dependencies,
) -> tuple[dict[str, Any], int]:
    """Apply one catalog mutation.

    Returns:
        Tuple of (response body, HTTP status). Validation and lookup
        failures are 400, save failures are 500.

    Raises:
        InvalidRequestError: For unknown actions or a read-only catalog
    """
    action = _field(payload, "action")
    store = deps.open_store()
    if not store.can_write():
        raise InvalidRequestError("Configuration file is not writable", status_code=403)

    result = _apply_action(store, action, payload)
    if result.success:
        status_code = 200
    elif result.message == SAVE_FAILED_MESSAGE:
        status_code = 500
    else:
        status_code = 400

    logger.info("Catalog %s: %s", action, result.message)
    return {"success": result.success, "message": result.message}, status_code
