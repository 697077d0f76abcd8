"""Data sources for Infoblox IPv4 and IPv6 networks."""

import json
import logging
import time

import requests
from netutils.ip import ipaddress_interface

from infoblox_provider.constant import DEFAULT_NETWORK_VIEW
from infoblox_provider.exceptions import DataSourceReadError, RequestConnectError
from infoblox_provider.models import Ipv4Network, Ipv6Network
from infoblox_provider.schema import Resource, Schema, ValueType
from infoblox_provider.utils.client import QueryParams
from infoblox_provider.utils.filters import filter_from_map

logger = logging.getLogger("infoblox_provider.datasources")

# Errors a connector raises while fetching; anything else is a bug and propagates.
FETCH_ERRORS = (requests.exceptions.RequestException, RequestConnectError, ValueError)


def data_source_network() -> Resource:
    """Schema shared by the IPv4 and IPv6 network data sources."""
    return Resource(
        schema={
            "filters": Schema(type=ValueType.MAP, required=True),
            "results": Schema(
                type=ValueType.LIST,
                computed=True,
                description="List of networks matching filters.",
                elem=Resource(
                    schema={
                        "id": Schema(type=ValueType.STRING, computed=True),
                        "network_view": Schema(type=ValueType.STRING, optional=True, default=DEFAULT_NETWORK_VIEW),
                        "cidr": Schema(type=ValueType.STRING, computed=True),
                        "comment": Schema(
                            type=ValueType.STRING, computed=True, description="A string describing the network"
                        ),
                        "ext_attrs": Schema(
                            type=ValueType.STRING,
                            computed=True,
                            description="The Extensible attributes for network datasource, as a map in JSON format",
                        ),
                        "utilization": Schema(
                            type=ValueType.INT,
                            computed=True,
                            description="The percentage based on the IP addresses in use divided by the total addresses in the network",
                        ),
                        "est_available_ip": Schema(
                            type=ValueType.INT,
                            computed=True,
                            description="Total unused IP addresses in the network.",
                        ),
                    }
                ),
            ),
        }
    )


def data_source_ipv4_network() -> Resource:
    """IPv4 network data source."""
    resource = data_source_network()
    resource.read = read_ipv4_network
    return resource


def data_source_ipv6_network() -> Resource:
    """IPv6 network data source."""
    resource = data_source_network()
    resource.read = read_ipv6_network
    return resource


def read_networks(data, connector, obj, flatten, kind="network"):
    """Query Infoblox for objects matching the `filters` of `data` and store the flattened `results`.

    Args:
        data (ResourceData): State of the data source being read.
        connector (InfobloxApi): Connector used to fetch objects.
        obj (IBObject): Empty object describing the WAPI object type to fetch.
        flatten (callable): Turns a fetched object into a results element.
        kind (str): Human readable object kind used in error messages.

    Raises:
        DataSourceReadError: When fetching or flattening fails.
    """
    obj.set_return_fields(obj.return_fields() + ["extattrs"])

    filters = filter_from_map(data.get("filters"))
    query_params = QueryParams(False, filters)
    logger.debug("Fetching %s objects with %s", obj.object_type, query_params)
    try:
        res = connector.get_object(obj, "", query_params)
    except FETCH_ERRORS as err:
        raise DataSourceReadError(f"getting {kind} failed: {err}") from err
    if res is None:
        raise DataSourceReadError(f"API returns a nil/empty ID for the {kind}")

    results = []
    for record in res:
        try:
            results.append(flatten(record))
        except (TypeError, ValueError) as err:
            raise DataSourceReadError(f"failed to flatten {kind}: {err}") from err
    logger.info("Found %d %s object(s) matching %s", len(results), obj.object_type, filters)

    data.set("results", results)

    # always run
    data.set_id(str(int(time.time())))


def read_ipv4_network(data, connector):
    """Read IPv4 networks matching the configured filters."""
    read_networks(data, connector, Ipv4Network(), flatten_ipv4_network)


def read_ipv6_network(data, connector):
    """Read IPv6 networks matching the configured filters."""
    read_networks(data, connector, Ipv6Network(), flatten_ipv6_network)


def ext_attrs_json(network) -> str:
    """Serialize the Extensible Attributes of a network as a JSON map."""
    return json.dumps(network.ea or {}, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def flatten_ipv4_network(network: Ipv4Network) -> dict:
    """Flatten an IPv4 network into a results element."""
    res = {
        "id": network.ref,
        "network_view": network.network_view,
        "ext_attrs": ext_attrs_json(network),
        "utilization": network.utilization,
    }

    if network.network is not None:
        res["cidr"] = network.network
        res["est_available_ip"] = calculate_available_ipv4s(network.network, network.utilization)

    if network.comment is not None:
        res["comment"] = network.comment

    return res


def flatten_ipv6_network(network: Ipv6Network) -> dict:
    """Flatten an IPv6 network into a results element.

    Utilization isn't reported by the appliance for IPv6, so both `utilization` and `est_available_ip` are -1.
    """
    res = {
        "id": network.ref,
        "network_view": network.network_view,
        "ext_attrs": ext_attrs_json(network),
        "utilization": -1,
    }

    if network.network is not None:
        res["cidr"] = network.network
        res["est_available_ip"] = -1

    if network.comment is not None:
        res["comment"] = network.comment

    return res


def calculate_available_ipv4s(network: str, utilization: int) -> int:
    """Estimate the available addresses of an IPv4 network from its per-mille utilization.

    Args:
        network (str): Network in CIDR notation, e.g. '10.220.0.0/22'.
        utilization (int): Utilization reported by Infoblox, 0-1000.

    Returns:
        int: floor(utilization / 1000 * usable hosts), 0 for /31, /32 and anything that isn't an IPv4 CIDR.
    """
    try:
        ip_network = ipaddress_interface(network, "network")
    except ValueError:
        return 0
    if ip_network.version != 4:
        return 0

    total_ips = 2 ** (32 - ip_network.prefixlen) - 2
    if total_ips < 0:  # /31 or /32
        total_ips = 0

    return utilization * total_ips // 1000
