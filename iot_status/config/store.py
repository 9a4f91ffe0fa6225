"""Persistent device catalog.

Wraps the INI catalog file with validated add/remove operations. Every
write keeps a timestamped backup of the previous file.
"""

import logging
import os
import re
import shutil
from datetime import datetime
from pathlib import Path
from typing import Any

from iot_status.config.parser import Catalog, DeviceConfigParser
from iot_status.models import CatalogResult, DeviceEntry
from iot_status.utils.validation import (
    ValidationError,
    validate_address,
    validate_category,
    validate_device_name,
)

logger = logging.getLogger(__name__)

_NEEDS_QUOTING_RE = re.compile(r"""[=\[\];"#]|^'""")

SAVE_FAILED_MESSAGE = "Failed to save configuration"


def escape_ini_value(value: str) -> str:
    """Quote a section, name or value if INI would misread it."""
    if _NEEDS_QUOTING_RE.search(value) or value.strip() != value:
        return '"' + value.replace('"', '""') + '"'
    return value


def render_catalog(catalog: Catalog) -> str:
    """Render a catalog as INI text."""
    lines: list[str] = []
    for category, devices in catalog.items():
        lines.append(f"[{escape_ini_value(category)}]")
        for name, address in devices.items():
            lines.append(f"{escape_ini_value(name)} = {escape_ini_value(address)}")
        lines.append("")
    return "\n".join(lines) + ("\n" if lines else "")


class ConfigStore:
    """Device catalog backed by an INI file.

    The catalog is read when the store is created. Build a new store per
    request to observe changes made by other processes.
    """

    def __init__(self, config_path: Path | str):
        """Initialize and load the catalog.

        Args:
            config_path: Path to the INI catalog file
        """
        self.config_path = Path(config_path)
        self.parser = DeviceConfigParser(self.config_path)
        self._catalog: Catalog = self.load()

    def load(self) -> Catalog:
        """Read the catalog from disk (empty on any read or parse problem)."""
        try:
            return self.parser.parse()
        except Exception as e:  # noqa: BLE001
            logger.warning("Device catalog %s is unusable: %s", self.config_path, e)
            return {}

    def categories(self) -> Catalog:
        """Return a copy of the catalog as category -> {name -> address}."""
        return {category: dict(devices) for category, devices in self._catalog.items()}

    def entries(self) -> list[DeviceEntry]:
        """Flatten the catalog into device entries in file order."""
        return [
            DeviceEntry(category=category, name=name, address=address)
            for category, devices in self._catalog.items()
            for name, address in devices.items()
        ]

    def can_write(self) -> bool:
        """Whether the catalog file can be written (or created)."""
        if self.config_path.exists():
            return os.access(self.config_path, os.W_OK)
        parent = self.config_path.parent
        return parent.is_dir() and os.access(parent, os.W_OK)

    # -------- Mutations --------

    def add_category(self, name: str) -> CatalogResult:
        """Add an empty category."""
        try:
            category = validate_category(name)
        except ValidationError as e:
            return CatalogResult(success=False, message=str(e))

        if category in self._catalog:
            return CatalogResult(success=False, message=f"Category '{category}' already exists")

        self._catalog[category] = {}
        if not self.save():
            return CatalogResult(success=False, message=SAVE_FAILED_MESSAGE)

        logger.info("Category added: %s", category)
        return CatalogResult(success=True, message=f"Category '{category}' added successfully")

    def add_device(self, category: str, name: str, address: str) -> CatalogResult:
        """Add a device to an existing category."""
        try:
            category = validate_category(category)
            name = validate_device_name(name)
            address = validate_address(address)
        except ValidationError as e:
            return CatalogResult(success=False, message=str(e))

        if category not in self._catalog:
            return CatalogResult(success=False, message=f"Category '{category}' does not exist")
        if name in self._catalog[category]:
            return CatalogResult(
                success=False,
                message=f"Device '{name}' already exists in '{category}'",
            )

        self._catalog[category][name] = address
        if not self.save():
            return CatalogResult(success=False, message=SAVE_FAILED_MESSAGE)

        logger.info("Device added: %s:%s -> %s", category, name, address)
        return CatalogResult(success=True, message=f"Device '{name}' added to '{category}'")

    def remove_device(self, category: str, name: str) -> CatalogResult:
        """Remove one device from a category."""
        if name not in self._catalog.get(category, {}):
            return CatalogResult(success=False, message=f"Device '{name}' not found in '{category}'")

        del self._catalog[category][name]
        if not self.save():
            return CatalogResult(success=False, message=SAVE_FAILED_MESSAGE)

        logger.info("Device removed: %s:%s", category, name)
        return CatalogResult(success=True, message=f"Device '{name}' removed from '{category}'")

    def remove_category(self, category: str) -> CatalogResult:
        """Remove a category and all of its devices."""
        if category not in self._catalog:
            return CatalogResult(success=False, message=f"Category '{category}' does not exist")

        del self._catalog[category]
        if not self.save():
            return CatalogResult(success=False, message=SAVE_FAILED_MESSAGE)

        logger.info("Category removed: %s", category)
        return CatalogResult(success=True, message=f"Category '{category}' removed")

    # -------- Persistence --------

    def backup_path(self, now: datetime | None = None) -> Path:
        """Path of the backup taken before the next write."""
        stamp = (now or datetime.now()).strftime("%Y-%m-%d-%H-%M-%S")
        return self.config_path.with_name(f"{self.config_path.name}.backup.{stamp}")

    def save(self) -> bool:
        """Write the catalog, backing up the current file first.

        Returns:
            True if the catalog was written and reloaded
        """
        if not self.can_write():
            logger.warning("Cannot write device catalog %s: no permission", self.config_path)
            return False

        if self.config_path.exists():
            backup = self.backup_path()
            try:
                shutil.copy2(self.config_path, backup)
                logger.debug("Backed up catalog to %s", backup)
            except OSError as e:
                logger.warning("Failed to back up catalog to %s: %s", backup, e)

        try:
            self.config_path.write_text(render_catalog(self._catalog), encoding="utf-8")
        except OSError as e:
            logger.error("Failed to save device catalog %s: %s", self.config_path, e)
            return False

        self._catalog = self.load()
        return True

    def debug_info(self) -> dict[str, Any]:
        """Describe the catalog file and its contents."""
        exists = self.config_path.exists()
        return {
            "config_path": str(self.config_path),
            "can_write": self.can_write(),
            "file_exists": exists,
            "file_readable": exists and os.access(self.config_path, os.R_OK),
            "file_writable": exists and os.access(self.config_path, os.W_OK),
            "file_size": self.config_path.stat().st_size if exists else 0,
            "sections": len(self._catalog),
            "total_devices": sum(len(devices) for devices in self._catalog.values()),
        }
