"""
Registry MQTT notifications

Publishes lifecycle events of an AAS registry (shells and submodels
registered or deleted) as MQTT messages on four fixed topics.

Components:
- observing: registry observer capability, topics and payloads
- mqtt: MQTT publish channel and persistence strategies
- config: publisher settings
"""

__version__ = "1.0.0"

from .config import Credentials, PersistenceKind, PublisherSettings, build_settings, load_settings
from .exceptions import (
    BrokerConnectionError,
    ConfigurationError,
    RegistryMqttError,
    SerializationError,
)
from .mqtt import (
    ClientPersistence,
    EventPublisher,
    FilePersistence,
    MemoryPersistence,
    MqttEventPublisher,
    PublisherState,
)
from .observing import (
    ALL_TOPICS,
    TOPIC_DELETEAAS,
    TOPIC_DELETESUBMODEL,
    TOPIC_REGISTERAAS,
    TOPIC_REGISTERSUBMODEL,
    MqttRegistryServiceObserver,
    ObservableRegistryNotifier,
    RegistryEventType,
    RegistryServiceObserver,
    concat_aas_sm_id,
)

__all__ = [
    "Credentials",
    "PersistenceKind",
    "PublisherSettings",
    "build_settings",
    "load_settings",
    "RegistryMqttError",
    "ConfigurationError",
    "BrokerConnectionError",
    "SerializationError",
    "EventPublisher",
    "MqttEventPublisher",
    "PublisherState",
    "ClientPersistence",
    "MemoryPersistence",
    "FilePersistence",
    "RegistryServiceObserver",
    "MqttRegistryServiceObserver",
    "ObservableRegistryNotifier",
    "RegistryEventType",
    "concat_aas_sm_id",
    "TOPIC_REGISTERAAS",
    "TOPIC_REGISTERSUBMODEL",
    "TOPIC_DELETEAAS",
    "TOPIC_DELETESUBMODEL",
    "ALL_TOPICS",
]
