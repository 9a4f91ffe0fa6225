"""Device address helpers.

Addresses are stored as ``host[:port][/path]``, optionally with an
``http://`` or ``https://`` prefix that is stripped before probing.
"""

import re
from typing import Final

_SCHEME_RE: Final = re.compile(r"^https?://", re.IGNORECASE)
_PORT_SUFFIX_RE: Final = re.compile(r":[0-9]+.*$")
_PATH_SUFFIX_RE: Final = re.compile(r"/.*$")

# Public domains are only monitored over HTTP
EXTERNAL_DOMAIN_MARKERS: Final[tuple[str, ...]] = (".com", ".org", ".net")


def normalize_address(raw: str) -> str:
    """Trim whitespace and drop a leading http:// or https:// scheme.

    Args:
        raw: Address as entered by the operator.

    Returns:
        Address suitable for ``http://<address>``.
    """
    return _SCHEME_RE.sub("", raw.strip(), count=1)


def extract_host(address: str) -> str:
    """Return the host portion of an address (no port, no path)."""
    host = _PORT_SUFFIX_RE.sub("", address, count=1)
    return _PATH_SUFFIX_RE.sub("", host, count=1)


def is_external_domain(host: str) -> bool:
    """Check whether a host looks like a public internet domain."""
    return any(marker in host for marker in EXTERNAL_DOMAIN_MARKERS)
