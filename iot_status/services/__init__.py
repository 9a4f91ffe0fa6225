"""Device status services for iot_status."""

from iot_status.services.batch import BatchCoordinator
from iot_status.services.checker import StatusChecker
from iot_status.services.http_probe import HttpProbe

__all__ = [
    "BatchCoordinator",
    "HttpProbe",
    "StatusChecker",
]
