"""Custom Exceptions to be used with the Infoblox provider."""


class ConfigurationError(Exception):
    """Exception thrown when provider configuration is wrong."""


class InvalidUrlScheme(Exception):
    """Exception raised for wrong scheme being passed for URL.

    Attributes:
        message (str): Returned explanation of Error.
    """

    def __init__(self, scheme):
        """Initialize Exception with wrong scheme in message."""
        self.message = f"Invalid URL scheme '{scheme}' found for Infoblox URL. Please correct to use HTTPS."
        super().__init__(self.message)


class MissingConfigSetting(ConfigurationError):
    """Exception raised for missing configuration settings.

    Attributes:
        message (str): Returned explanation of Error.
    """

    def __init__(self, setting):
        """Initialize Exception with Setting that is missing and message."""
        self.setting = setting
        self.message = f"Missing configuration setting - {setting}!"
        super().__init__(self.message)


class RequestConnectError(Exception):
    """Exception class to be raised upon requests module connection errors."""


class SchemaError(Exception):
    """Raised when a value does not fit the declared schema of a data source."""


class DataSourceReadError(Exception):
    """Raised when a data source read against Infoblox fails."""
