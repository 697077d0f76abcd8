"""Infoblox provider: Infoblox IPAM objects exposed as data sources."""

import logging
from importlib import metadata

logger = logging.getLogger("infoblox_provider")
__version__ = metadata.version("infoblox-provider")
