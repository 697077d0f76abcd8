"""Data sources exposed by the Infoblox provider."""

from infoblox_provider.datasources.network import data_source_ipv4_network, data_source_ipv6_network
from infoblox_provider.datasources.network_container import (
    data_source_ipv4_network_container,
    data_source_ipv6_network_container,
)

__all__ = (
    "data_source_ipv4_network",
    "data_source_ipv6_network",
    "data_source_ipv4_network_container",
    "data_source_ipv6_network_container",
)
