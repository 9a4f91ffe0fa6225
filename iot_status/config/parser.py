"""Device catalog INI parser.

Reads the catalog file where each section is a category and each option is
``device name = address``.
"""

import configparser
import logging
import re
from pathlib import Path

logger = logging.getLogger(__name__)

Catalog = dict[str, dict[str, str]]

_SECTION_RE = re.compile(r"^\[(.+)\]$")

# configparser treats [DEFAULT] specially; categories named DEFAULT are ordinary here
_NO_DEFAULT_SECTION = "\x00iot_status_defaults"


def unquote(value: str) -> str:
    """Trim a name or value and strip one level of surrounding quotes.

    Double-quoted values written by the store have embedded quotes doubled.
    """
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] == '"':
        return value[1:-1].replace('""', '"')
    if len(value) >= 2 and value[0] == value[-1] == "'":
        return value[1:-1]
    return value


class DeviceConfigParser:
    """Parser for the device catalog file.

    Uses configparser first and falls back to a tolerant line parser for
    files configparser rejects (duplicate sections, stray lines, etc.).
    """

    def __init__(self, config_path: Path | str):
        """Initialize catalog parser.

        Args:
            config_path: Path to the INI catalog file
        """
        self.config_path = Path(config_path)

    def parse(self) -> Catalog:
        """Read and parse the catalog file.

        Returns:
            Dictionary of category -> {device name -> address}. Empty when
            the file is missing, unreadable or holds no usable entries.
        """
        if not self.config_path.exists():
            logger.warning("Device catalog not found: %s", self.config_path)
            return {}

        try:
            content = self.config_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Cannot read device catalog %s: %s", self.config_path, e)
            return {}

        catalog = self.parse_text(content)
        logger.debug(
            "Parsed %d categories from %s",
            len(catalog),
            self.config_path,
        )
        return catalog

    def parse_text(self, content: str) -> Catalog:
        """Parse catalog content.

        Args:
            content: INI text

        Returns:
            Cleaned catalog (trimmed, unquoted, empty entries dropped)
        """
        try:
            raw = self._parse_ini(content)
        except configparser.Error as e:
            logger.info("Catalog is not strict INI (%s), using line parser", e.__class__.__name__)
            raw = {}

        if not raw:
            raw = self._parse_lines(content)

        return self._clean(raw)

    def _parse_ini(self, content: str) -> Catalog:
        parser = configparser.RawConfigParser(
            delimiters=("=",),
            comment_prefixes=(";", "#"),
            default_section=_NO_DEFAULT_SECTION,
        )
        parser.optionxform = str  # type: ignore[assignment,method-assign]
        parser.read_string(content)
        return {section: dict(parser.items(section)) for section in parser.sections()}

    def _parse_lines(self, content: str) -> Catalog:
        catalog: Catalog = {}
        current_section = ""

        for line in content.splitlines():
            line = line.strip()
            if not line or line[0] in (";", "#"):
                continue

            section_match = _SECTION_RE.match(line)
            if section_match:
                current_section = section_match.group(1).strip()
                catalog[current_section] = {}
                continue

            if "=" in line and current_section:
                name, address = (part.strip() for part in line.split("=", 1))
                if name and address:
                    catalog[current_section][name] = address

        return catalog

    def _clean(self, raw: Catalog) -> Catalog:
        catalog: Catalog = {}
        for section, values in raw.items():
            category = unquote(section)
            if not category:
                continue
            devices = catalog.setdefault(category, {})
            for name, address in values.items():
                name = unquote(name)
                address = unquote(address or "")
                if name and address:
                    devices[name] = address
        return catalog
