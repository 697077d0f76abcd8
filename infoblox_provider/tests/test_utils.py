"""Util tests."""

import os
import unittest
from unittest.mock import patch

from parameterized import parameterized

from infoblox_provider.constant import is_truthy, read_provider_config
from infoblox_provider.exceptions import ConfigurationError
from infoblox_provider.models import Ipv4Network, Ipv6NetworkContainer
from infoblox_provider.utils.filters import filter_from_map, get_ext_attr_dict


class TestUtils(unittest.TestCase):
    """Test Utils."""

    def test_filter_from_map(self):
        """Test filter values are rendered as strings."""
        filters = {"network_view": "default", "*VLAN": 100, "unmanaged": True, "disable": False}
        self.assertEqual(
            filter_from_map(filters),
            {"network_view": "default", "*VLAN": "100", "unmanaged": "true", "disable": "false"},
        )

    def test_filter_from_map_empty(self):
        """Test empty or missing filters give no query parameters."""
        self.assertEqual(filter_from_map({}), {})
        self.assertEqual(filter_from_map(None), {})

    def test_get_ext_attr_dict(self):
        """Test get_ext_attr_dict."""
        test_dict = {"Site": {"value": "HQ"}, "Region": {"value": "Central"}}
        expected = {"Site": "HQ", "Region": "Central"}
        standardized_dict = get_ext_attr_dict(test_dict)
        self.assertEqual(standardized_dict, expected)

    def test_get_ext_attr_dict_exclusion_list(self):
        """Test get_ext_attr_dict correctly excludes attributes."""
        test_dict = {"Site": {"value": "HQ"}, "Region": {"value": "Central"}, "Tenant": {"value": "NTC"}}
        excluded_attrs = ["Tenant"]
        expected = {"Site": "HQ", "Region": "Central"}
        standardized_dict = get_ext_attr_dict(extattrs=test_dict, excluded_attrs=excluded_attrs)
        self.assertEqual(standardized_dict, expected)

    def test_get_ext_attr_dict_already_flat(self):
        """Test values without the `value` wrapper pass through."""
        self.assertEqual(get_ext_attr_dict({"Site": "HQ"}), {"Site": "HQ"})

    @parameterized.expand([("yes", True), ("On", True), ("1", True), ("f", False), ("0", False), ("", False)])
    def test_is_truthy(self, value, expected):
        """Test is_truthy."""
        self.assertEqual(is_truthy(value), expected)

    def test_is_truthy_invalid(self):
        """Test is_truthy rejects unknown strings."""
        with self.assertRaises(ValueError):
            is_truthy("maybe")

    @patch.dict(os.environ, {"PORT": "8443", "POOL_CONNECTIONS": "4"}, clear=True)
    def test_read_provider_config(self):
        """Test settings are merged from explicit values, the environment and defaults."""
        self.assertEqual(
            read_provider_config({"server": "infoblox.example.com", "connect_timeout": 5}),
            {
                "server": "infoblox.example.com",
                "username": None,
                "password": None,
                "wapi_version": "2.7",
                "port": "8443",
                "sslmode": False,
                "connect_timeout": 5,
                "pool_connections": 4,
            },
        )

    @parameterized.expand(
        [
            ("timeout_not_a_number", {"CONNECT_TIMEOUT": "sixty"}),
            ("pool_not_a_number", {"POOL_CONNECTIONS": "ten"}),
            ("negative_timeout", {"CONNECT_TIMEOUT": "-5"}),
            ("sslmode_unknown", {"SSLMODE": "maybe"}),
        ]
    )
    def test_read_provider_config_invalid_environment(self, _, environ):
        """Test invalid environment values raise ConfigurationError naming the variable."""
        with patch.dict(os.environ, environ, clear=True):
            with self.assertRaisesRegex(ConfigurationError, list(environ)[0]):
                read_provider_config({})


class TestModels(unittest.TestCase):
    """Test WAPI object models."""

    def test_return_fields_are_per_instance(self):
        """Test changing the return fields of one object doesn't leak into others."""
        first = Ipv4Network()
        first.set_return_fields(first.return_fields() + ["extattrs"])
        self.assertEqual(first.return_fields(), ["network", "network_view", "comment", "utilization", "extattrs"])
        self.assertEqual(Ipv4Network().return_fields(), ["network", "network_view", "comment", "utilization"])

    def test_set_return_fields_deduplicates(self):
        """Test a field requested twice is sent once."""
        obj = Ipv6NetworkContainer()
        obj.set_return_fields(obj.return_fields() + ["extattrs", "extattrs"])
        self.assertEqual(obj.return_fields(), ["network", "network_view", "comment", "extattrs"])

    def test_model_from_wapi_record(self):
        """Test aliases and defaults when building a model from WAPI JSON."""
        network = Ipv4Network.model_validate(
            {"_ref": "network/abc:10.0.0.0/24/default", "network": "10.0.0.0/24", "extattrs": None}
        )
        self.assertEqual(network.ref, "network/abc:10.0.0.0/24/default")
        self.assertEqual(network.network_view, "default")
        self.assertEqual(network.ea, {})
        self.assertIsNone(network.comment)
        self.assertEqual(network.utilization, 0)
