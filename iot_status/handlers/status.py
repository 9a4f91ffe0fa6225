"""Device status request handlers.

Each handler takes the decoded JSON payload and returns the response body.
The catalog is read fresh on every call.
"""

import logging
import time
from typing import Any

from starlette.concurrency import run_in_threadpool

from iot_status.dependencies import Dependencies
from iot_status.handlers.errors import InvalidRequestError
from iot_status.models import build_address_map

logger = logging.getLogger(__name__)


def timestamp() -> int:
    """Current time in epoch seconds."""
    return int(time.time())


def handle_list_devices(deps: Dependencies) -> dict[str, Any]:
    """List every device in the catalog."""
    store = deps.open_store()
    return {
        "success": True,
        "devices": [entry.to_dict() for entry in store.entries()],
        "timestamp": timestamp(),
    }


async def handle_check_single(payload: dict[str, Any], deps: Dependencies) -> dict[str, Any]:
    """Check one device given by address.

    Raises:
        InvalidRequestError: If no address is given
    """
    address = payload.get("address")
    if not isinstance(address, str) or not address.strip():
        raise InvalidRequestError("Address required")
    key = payload.get("key", "")

    status = await deps.checker().check(address)
    logger.info("Single check %s (%s): %s", key or "-", address, status)

    return {
        "success": True,
        "key": key,
        "address": address,
        "status": status,
        "timestamp": timestamp(),
    }


async def handle_check_batch(payload: dict[str, Any], deps: Dependencies) -> dict[str, Any]:
    """Check a caller-supplied list of ``{key, address}`` devices.

    Items missing a key or address are skipped.

    Raises:
        InvalidRequestError: If ``devices`` is missing, empty or not a list
    """
    devices = payload.get("devices")
    if not devices or not isinstance(devices, list):
        raise InvalidRequestError("Devices array required")

    addresses: dict[str, str] = {}
    for device in devices:
        if not isinstance(device, dict):
            continue
        key = device.get("key")
        address = device.get("address")
        if key is None or address is None:
            continue
        addresses[str(key)] = str(address)

    if len(addresses) < len(devices):
        logger.debug("Skipped %d malformed batch item(s)", len(devices) - len(addresses))

    results = await deps.coordinator().check_many(addresses)
    return {
        "success": True,
        "results": results,
        "timestamp": timestamp(),
    }


async def handle_check_all(deps: Dependencies) -> dict[str, Any]:
    """Check every device in the catalog."""
    store = await run_in_threadpool(deps.open_store)
    entries = store.entries()
    if not entries:
        return {
            "success": True,
            "results": {},
            "timestamp": timestamp(),
        }

    results = await deps.coordinator().check_many(build_address_map(entries))
    return {
        "success": True,
        "results": results,
        "count": len(results),
        "timestamp": timestamp(),
    }


async def handle_status_action(payload: dict[str, Any], deps: Dependencies) -> dict[str, Any]:
    """Dispatch a POSTed status action.

    Raises:
        InvalidRequestError: For unknown actions or bad input
    """
    action = payload.get("action", "")

    if action == "check_single":
        return await handle_check_single(payload, deps)
    if action == "check_batch":
        return await handle_check_batch(payload, deps)
    if action == "check_all":
        return await handle_check_all(deps)

    raise InvalidRequestError("Invalid action")
