"""pluginwiki: embeddable HTML documentation fragments for plugin wiki URLs."""

from __future__ import annotations

import warnings
from importlib.metadata import PackageNotFoundError, version

DISTRIBUTION = "pluginwiki"
UNKNOWN_VERSION = "0.0.0+unknown"

try:
    __version__ = version(DISTRIBUTION)
except PackageNotFoundError:
    warnings.warn(
        f"{DISTRIBUTION} is not installed; reporting version {UNKNOWN_VERSION}",
        RuntimeWarning,
        stacklevel=2,
    )
    __version__ = UNKNOWN_VERSION
