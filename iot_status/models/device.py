"""Device catalog data models."""

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(frozen=True)
class DeviceEntry:
    """A device as loaded from the catalog.

    ``key`` is ``category:name`` and correlates the device across the
    catalog, check requests and results.
    """

    category: str
    name: str
    address: str
    key: str = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "key", f"{self.category}:{self.name}")

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON responses."""
        return asdict(self)


def build_address_map(entries: list[DeviceEntry]) -> dict[str, str]:
    """Map device keys to addresses.

    Duplicate keys keep the last entry.
    """
    return {entry.key: entry.address for entry in entries}
