"""Data sources for Infoblox IPv4 and IPv6 network containers."""

from infoblox_provider.constant import DEFAULT_NETWORK_VIEW
from infoblox_provider.datasources.network import ext_attrs_json, read_networks
from infoblox_provider.models import Ipv4NetworkContainer, Ipv6NetworkContainer
from infoblox_provider.schema import Resource, Schema, ValueType


def data_source_network_container() -> Resource:
    """Schema shared by the IPv4 and IPv6 network container data sources."""
    return Resource(
        schema={
            "filters": Schema(type=ValueType.MAP, required=True),
            "results": Schema(
                type=ValueType.LIST,
                computed=True,
                description="List of network containers matching filters.",
                elem=Resource(
                    schema={
                        "id": Schema(type=ValueType.STRING, computed=True),
                        "network_view": Schema(type=ValueType.STRING, optional=True, default=DEFAULT_NETWORK_VIEW),
                        "cidr": Schema(type=ValueType.STRING, computed=True),
                        "comment": Schema(
                            type=ValueType.STRING,
                            computed=True,
                            description="A string describing the network container",
                        ),
                        "ext_attrs": Schema(
                            type=ValueType.STRING,
                            computed=True,
                            description="The Extensible attributes of the network container, as a map in JSON format",
                        ),
                        "utilization": Schema(
                            type=ValueType.INT,
                            computed=True,
                            description="Per-mille utilization of the network container, -1 for IPv6",
                        ),
                    }
                ),
            ),
        }
    )


def data_source_ipv4_network_container() -> Resource:
    """IPv4 network container data source."""
    resource = data_source_network_container()
    resource.read = read_ipv4_network_container
    return resource


def data_source_ipv6_network_container() -> Resource:
    """IPv6 network container data source."""
    resource = data_source_network_container()
    resource.read = read_ipv6_network_container
    return resource


def read_ipv4_network_container(data, connector):
    """Read IPv4 network containers matching the configured filters."""
    read_networks(
        data, connector, Ipv4NetworkContainer(), flatten_ipv4_network_container, kind="network container"
    )


def read_ipv6_network_container(data, connector):
    """Read IPv6 network containers matching the configured filters."""
    read_networks(
        data, connector, Ipv6NetworkContainer(), flatten_ipv6_network_container, kind="network container"
    )


def flatten_network_container(container, utilization: int) -> dict:
    """Flatten a network container into a results element."""
    res = {
        "id": container.ref,
        "network_view": container.network_view,
        "ext_attrs": ext_attrs_json(container),
        "utilization": utilization,
    }
    if container.network is not None:
        res["cidr"] = container.network
    if container.comment is not None:
        res["comment"] = container.comment
    return res


def flatten_ipv4_network_container(container: Ipv4NetworkContainer) -> dict:
    """Flatten an IPv4 network container."""
    return flatten_network_container(container, container.utilization)


def flatten_ipv6_network_container(container: Ipv6NetworkContainer) -> dict:
    """Flatten an IPv6 network container."""
    return flatten_network_container(container, -1)
