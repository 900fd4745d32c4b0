# MQTT publish channel and persistence strategies
from .base import EventPublisher
from .persistence import ClientPersistence, FilePersistence, MemoryPersistence, PersistedMessage
from .publisher import MqttEventPublisher, PublisherState, create_paho_client, create_persistence

__all__ = [
    "EventPublisher",
    "MqttEventPublisher",
    "PublisherState",
    "ClientPersistence",
    "MemoryPersistence",
    "FilePersistence",
    "PersistedMessage",
    "create_paho_client",
    "create_persistence",
]
