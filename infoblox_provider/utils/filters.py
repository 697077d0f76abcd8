"""Utilities to translate user filters and Extensible Attributes."""

from typing import Optional


def filter_from_map(filters: dict) -> dict:
    """Convert a user supplied filter map into WAPI query parameters.

    Args:
        filters (dict): Filters from the data source configuration, e.g. {"network_view": "default", "*Site": "HQ"}.

    Returns:
        dict: Filters with every key and value rendered as a string.
    """
    query = {}
    for key, value in (filters or {}).items():
        if isinstance(value, bool):
            value = "true" if value else "false"
        query[str(key)] = str(value)
    return query


def get_ext_attr_dict(extattrs: dict, excluded_attrs: Optional[list] = None) -> dict:
    """Rebuild Extensibility Attributes dict into standard k/v pattern.

    The extattrs dict returned by WAPI looks like so:

    {<attribute_key>: {"value": <actual_value>}}

    Args:
        extattrs (dict): Extensibility Attributes dict for object.
        excluded_attrs (list): List of Extensibility Attributes to exclude.

    Returns:
        dict: Standardized dictionary for Extensibility Attributes.
    """
    if excluded_attrs is None:
        excluded_attrs = []
    fixed_dict = {}
    for key, value in extattrs.items():
        if key in excluded_attrs:
            continue
        if isinstance(value, dict) and "value" in value:
            value = value["value"]
        fixed_dict[key] = value
    return fixed_dict
