"""
Registry observer that publishes every lifecycle event over MQTT.

Each callback maps to one fixed topic and results in exactly one publish
call on the injected EventPublisher. Publish errors are not caught; they
reach whoever triggered the registry operation.
"""

import logging
from typing import Any, Mapping, Optional, Union

from ..config.config_model import PublisherSettings
from ..mqtt.base import EventPublisher
from ..mqtt.persistence import ClientPersistence
from ..mqtt.publisher import MqttEventPublisher
from .base import RegistryServiceObserver
from .events import RegistryEventType, concat_aas_sm_id, create_payload


class MqttRegistryServiceObserver(RegistryServiceObserver):
    """
    Publishes registry events on the BaSyxRegistry_* topics.

    Args:
        publisher: Publish channel the events are forwarded to
        logger: Logger for this observer (module logger if None)
    """

    concat_aas_sm_id = staticmethod(concat_aas_sm_id)

    def __init__(self, publisher: EventPublisher, logger: Optional[logging.Logger] = None):
        self.publisher = publisher
        self.logger = logger or logging.getLogger(__name__)
        self.logger.info(f"Created MQTT registry observer on {type(publisher).__name__}")

    @classmethod
    def from_config(
        cls,
        config: Union[PublisherSettings, Mapping[str, Any]],
        persistence: Optional[ClientPersistence] = None,
        logger: Optional[logging.Logger] = None,
    ) -> "MqttRegistryServiceObserver":
        """
        Creates an observer together with its MQTT publisher.

        Args:
            config: PublisherSettings or mapping with at least endpoint and
                client_id; credentials and persistence are optional
            persistence: Custom persistence strategy
            logger: Logger for the observer

        Raises:
            ConfigurationError: if the configuration is invalid or the
                broker cannot be reached
        """
        publisher = MqttEventPublisher(config, persistence=persistence)
        observer = cls(publisher, logger=logger)
        observer.logger.info(f"MQTT registry observer publishes to {publisher.settings.endpoint}")
        return observer

    def aas_registered(self, aas_id):
        self._notify(RegistryEventType.AAS_REGISTERED, aas_id)

    def submodel_registered(self, aas_id, sm_id):
        self._notify(RegistryEventType.SUBMODEL_REGISTERED, aas_id, sm_id)

    def aas_deleted(self, aas_id):
        self._notify(RegistryEventType.AAS_DELETED, aas_id)

    def submodel_deleted(self, aas_id, sm_id):
        self._notify(RegistryEventType.SUBMODEL_DELETED, aas_id, sm_id)

    def _notify(self, event_type: RegistryEventType, aas_id, sm_id=None):
        payload = create_payload(event_type, aas_id, sm_id)
        self.logger.debug(f"{event_type.name}: {payload}")
        self.publisher.publish(event_type.topic, payload)

    def close(self):
        """Closes the underlying publisher."""
        self.publisher.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
