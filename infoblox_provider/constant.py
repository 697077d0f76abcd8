"""Constants and configuration defaults for the Infoblox provider."""

import os

from infoblox_provider.exceptions import ConfigurationError

DEFAULT_NETWORK_VIEW = "default"
DEFAULT_WAPI_VERSION = "2.7"
DEFAULT_PORT = "443"
DEFAULT_CONNECT_TIMEOUT = 60
DEFAULT_POOL_CONNECTIONS = 10
DEFAULT_MAX_RESULTS = 1000

# Provider setting -> environment variable consulted when the setting is not given explicitly.
ENV_VARS = {
    "server": "INFOBLOX_SERVER",
    "username": "INFOBLOX_USERNAME",
    "password": "INFOBLOX_PASSWORD",
    "wapi_version": "WAPI_VERSION",
    "port": "PORT",
    "sslmode": "SSLMODE",
    "connect_timeout": "CONNECT_TIMEOUT",
    "pool_connections": "POOL_CONNECTIONS",
}


def is_truthy(arg):
    """Convert "truthy" strings into Booleans.

    Examples:
        >>> is_truthy('yes')
        True

    Args:
        arg (str): Truthy string (True values are y, yes, t, true, on and 1; false values are n, no,
        f, false, off and 0. Raises ValueError if val is anything else.
    """
    if isinstance(arg, bool):
        return arg
    value = str(arg).strip().lower()
    if value in ("y", "yes", "t", "true", "on", "1"):
        return True
    if value in ("n", "no", "f", "false", "off", "0", ""):
        return False
    raise ValueError(f"Invalid truthy value: {arg!r}")


def _bool_setting(config, setting, default):
    value = config.get(setting)
    if value in (None, ""):
        return default
    try:
        return is_truthy(value)
    except ValueError as err:
        raise ConfigurationError(f"Invalid value for {setting} ({ENV_VARS[setting]}): {value!r}") from err


def _int_setting(config, setting, default):
    value = config.get(setting)
    if value in (None, ""):
        return default
    try:
        value = int(value)
    except (TypeError, ValueError) as err:
        raise ConfigurationError(f"Invalid value for {setting} ({ENV_VARS[setting]}): {value!r}") from err
    if value < 1:
        raise ConfigurationError(f"Invalid value for {setting} ({ENV_VARS[setting]}): must be at least 1, got {value}")
    return value


def read_provider_config(config=None):
    """Merge explicit provider settings with the environment and defaults.

    Args:
        config (dict): Settings given explicitly to the provider. These win over the environment.

    Returns:
        dict: Complete provider settings.
    """
    config = dict(config or {})
    for setting, env_var in ENV_VARS.items():
        if config.get(setting) in (None, ""):
            env_value = os.getenv(env_var)
            if env_value is not None:
                config[setting] = env_value

    return {
        "server": config.get("server"),
        "username": config.get("username"),
        "password": config.get("password"),
        "wapi_version": str(config.get("wapi_version") or DEFAULT_WAPI_VERSION),
        "port": str(config.get("port") or DEFAULT_PORT),
        "sslmode": _bool_setting(config, "sslmode", False),
        "connect_timeout": _int_setting(config, "connect_timeout", DEFAULT_CONNECT_TIMEOUT),
        "pool_connections": _int_setting(config, "pool_connections", DEFAULT_POOL_CONNECTIONS),
    }
