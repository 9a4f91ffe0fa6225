"""iot_status: device reachability polling with a small JSON API."""

__version__ = "1.0.0"
