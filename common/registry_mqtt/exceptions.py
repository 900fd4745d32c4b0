"""
Exceptions raised by the registry MQTT notification adapter.

All errors propagate synchronously to the caller. Nothing here is retried
or recovered locally.
"""

from typing import Optional


class RegistryMqttError(Exception):
    """Base class for all errors of this package."""


class ConfigurationError(RegistryMqttError, ValueError):
    """
    Invalid publisher configuration or a broker that cannot be reached
    while the publisher is being constructed.
    """


class BrokerConnectionError(RegistryMqttError, ConnectionError):
    """
    The broker connection is lost, was never established or has been closed
    when a message is handed to the transport.

    Args:
        message: Error description
        rc: paho-mqtt return code, if the transport reported one
    """

    def __init__(self, message: str, rc: Optional[int] = None):
        super().__init__(message)
        self.rc = rc


class SerializationError(RegistryMqttError, ValueError):
    """An identifier is absent or malformed and no payload can be built."""
