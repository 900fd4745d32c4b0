"""
Observing Package

Registry observer capability, the MQTT observer implementation and the
topics and payloads it publishes.
"""

from .base import RegistryServiceObserver
from .events import RegistryEventType, concat_aas_sm_id, create_payload, identifier_to_str
from .mqtt_observer import MqttRegistryServiceObserver
from .observable import ObservableRegistryNotifier
from .topics import (
    ALL_TOPICS,
    TOPIC_DELETEAAS,
    TOPIC_DELETESUBMODEL,
    TOPIC_REGISTERAAS,
    TOPIC_REGISTERSUBMODEL,
)

__all__ = [
    "RegistryServiceObserver",
    "MqttRegistryServiceObserver",
    "ObservableRegistryNotifier",
    "RegistryEventType",
    "concat_aas_sm_id",
    "create_payload",
    "identifier_to_str",
    "TOPIC_REGISTERAAS",
    "TOPIC_REGISTERSUBMODEL",
    "TOPIC_DELETEAAS",
    "TOPIC_DELETESUBMODEL",
    "ALL_TOPICS",
]
