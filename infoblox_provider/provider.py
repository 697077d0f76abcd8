"""Provider configuration and the registry of data sources."""

import logging
from typing import Dict, Optional

from infoblox_provider.constant import (
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_POOL_CONNECTIONS,
    DEFAULT_PORT,
    DEFAULT_WAPI_VERSION,
    read_provider_config,
)
from infoblox_provider.datasources import (
    data_source_ipv4_network,
    data_source_ipv4_network_container,
    data_source_ipv6_network,
    data_source_ipv6_network_container,
)
from infoblox_provider.exceptions import ConfigurationError, MissingConfigSetting
from infoblox_provider.schema import Resource, Schema, ValueType
from infoblox_provider.utils.client import InfobloxApi, parse_url

logger = logging.getLogger("infoblox_provider")

PROVIDER_SCHEMA = Resource(
    schema={
        "server": Schema(type=ValueType.STRING, optional=True, description="Infoblox Grid Master host name or IP."),
        "username": Schema(type=ValueType.STRING, optional=True, description="User to authenticate with."),
        "password": Schema(type=ValueType.STRING, optional=True, description="Password of the user."),
        "wapi_version": Schema(
            type=ValueType.STRING, optional=True, default=DEFAULT_WAPI_VERSION, description="WAPI version."
        ),
        "port": Schema(type=ValueType.STRING, optional=True, default=DEFAULT_PORT, description="WAPI port."),
        "sslmode": Schema(type=ValueType.BOOL, optional=True, default=False, description="Verify the certificate."),
        "connect_timeout": Schema(
            type=ValueType.INT,
            optional=True,
            default=DEFAULT_CONNECT_TIMEOUT,
            description="Seconds to wait for a WAPI response.",
        ),
        "pool_connections": Schema(
            type=ValueType.INT,
            optional=True,
            default=DEFAULT_POOL_CONNECTIONS,
            description="Size of the HTTP connection pool.",
        ),
    }
)


class Provider:
    """Infoblox provider: owns the connector and dispatches data source reads."""

    def __init__(self, debug=False):
        """Initialize the provider with its data sources."""
        self.debug = debug
        self.connector = None
        self.data_sources_map: Dict[str, Resource] = {
            "infoblox_ipv4_network": data_source_ipv4_network(),
            "infoblox_ipv6_network": data_source_ipv6_network(),
            "infoblox_ipv4_network_container": data_source_ipv4_network_container(),
            "infoblox_ipv6_network_container": data_source_ipv6_network_container(),
        }

    def configure(self, config: Optional[dict] = None) -> InfobloxApi:
        """Build the Infoblox connector from explicit settings, the environment and defaults.

        Args:
            config (dict): Explicit provider settings.

        Raises:
            MissingConfigSetting: When server, username or password are not set anywhere.
            ConfigurationError: When a setting from the config or the environment has an invalid value.
        """
        PROVIDER_SCHEMA.validate({key: value for key, value in (config or {}).items() if value is not None})
        settings = read_provider_config(config)
        for setting in ("server", "username", "password"):
            if not settings[setting]:
                raise MissingConfigSetting(setting)

        self.connector = InfobloxApi(
            url=self._server_url(settings["server"], settings["port"]),
            username=settings["username"],
            password=settings["password"],
            verify_ssl=settings["sslmode"],
            wapi_version=settings["wapi_version"],
            timeout=settings["connect_timeout"],
            debug=self.debug,
            pool_connections=settings["pool_connections"],
        )
        logger.info("Configured Infoblox connector for %s (WAPI %s)", self.connector.url, settings["wapi_version"])
        return self.connector

    @staticmethod
    def _server_url(server: str, port: str) -> str:
        """Add the WAPI port to the server address unless one is already present."""
        parsed = parse_url(server.strip())
        if parsed.port is None and str(port) != DEFAULT_PORT:
            parsed = parsed._replace(netloc=f"{parsed.netloc}:{port}")
        return parsed.geturl()

    def read_data_source(self, name: str, config: dict) -> dict:
        """Run the read of a data source and return its state.

        Args:
            name (str): Registered name of the data source, e.g. 'infoblox_ipv4_network'.
            config (dict): Data source arguments, e.g. {"filters": {"network_view": "default"}}.

        Raises:
            ConfigurationError: When the data source is unknown or the provider isn't configured.
        """
        try:
            resource = self.data_sources_map[name]
        except KeyError:
            raise ConfigurationError(f"Unknown data source {name!r}.") from None
        if self.connector is None:
            raise ConfigurationError("Provider must be configured before reading data sources.")

        data = resource.data(config)
        logger.debug("Reading data source %s", name)
        resource.read(data, self.connector)
        return data.state()
