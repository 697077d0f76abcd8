"""WAPI object models for networks and network containers."""

from typing import ClassVar, List, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

from infoblox_provider.constant import DEFAULT_NETWORK_VIEW
from infoblox_provider.utils.filters import get_ext_attr_dict


class IBObject(BaseModel):
    """Base model for objects returned by WAPI."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    object_type: ClassVar[str] = ""
    default_return_fields: ClassVar[List[str]] = []

    ref: str = Field(default="", alias="_ref")
    network_view: str = DEFAULT_NETWORK_VIEW
    network: Optional[str] = None
    comment: Optional[str] = None
    ea: dict = Field(default_factory=dict, alias="extattrs")

    _return_fields: List[str] = PrivateAttr(default_factory=list)

    def model_post_init(self, __context):
        """Start every instance with the default return fields of its type."""
        self._return_fields = list(self.default_return_fields)

    @field_validator("ea", mode="before")
    @classmethod
    def unwrap_ext_attrs(cls, value):
        """Flatten the {"Key": {"value": v}} shape WAPI returns to {"Key": v}."""
        if not value:
            return {}
        return get_ext_attr_dict(extattrs=value)

    def return_fields(self) -> List[str]:
        """Fields requested from WAPI when fetching this object."""
        return list(self._return_fields)

    def set_return_fields(self, fields: List[str]):
        """Override the fields requested from WAPI."""
        self._return_fields = list(dict.fromkeys(fields))


class Ipv4Network(IBObject):
    """IPv4 network (WAPI `network`)."""

    object_type: ClassVar[str] = "network"
    default_return_fields: ClassVar[List[str]] = ["network", "network_view", "comment", "utilization"]

    # Per-mille, 0-1000.
    utilization: int = 0


class Ipv6Network(IBObject):
    """IPv6 network (WAPI `ipv6network`). The appliance doesn't report utilization for IPv6."""

    object_type: ClassVar[str] = "ipv6network"
    default_return_fields: ClassVar[List[str]] = ["network", "network_view", "comment"]


class Ipv4NetworkContainer(IBObject):
    """IPv4 network container (WAPI `networkcontainer`)."""

    object_type: ClassVar[str] = "networkcontainer"
    default_return_fields: ClassVar[List[str]] = ["network", "network_view", "comment", "utilization"]

    utilization: int = 0


class Ipv6NetworkContainer(IBObject):
    """IPv6 network container (WAPI `ipv6networkcontainer`)."""

    object_type: ClassVar[str] = "ipv6networkcontainer"
    default_return_fields: ClassVar[List[str]] = ["network", "network_view", "comment"]
