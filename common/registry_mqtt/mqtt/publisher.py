"""
MQTT publish channel for registry notifications.

MqttEventPublisher owns one paho-mqtt client session:
- connects once at construction and waits for the broker's CONNACK
- hands payloads to the transport and returns without waiting for PUBACK
- buffers unacknowledged QoS > 0 messages in a persistence strategy
- leaves reconnecting to paho's network loop (reconnect delays are settings)

Publishing never retries. If the session is not connected the caller gets
a BrokerConnectionError.
"""

import logging
import threading
import time
import uuid
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Union

import paho.mqtt.client as mqtt

from ..config.config_model import PersistenceKind, PublisherSettings
from ..config.manager import build_settings
from ..exceptions import BrokerConnectionError, ConfigurationError
from .base import EventPublisher
from .persistence import ClientPersistence, FilePersistence, MemoryPersistence, PersistedMessage

logger = logging.getLogger(__name__)

ClientFactory = Callable[[PublisherSettings], mqtt.Client]


class PublisherState(Enum):
    """Connection states of a publisher."""
    DISCONNECTED = "disconnected"
    CONNECTED = "connected"
    CLOSED = "closed"


def create_paho_client(settings: PublisherSettings) -> mqtt.Client:
    """
    Creates and configures a paho-mqtt client for the given settings.

    Args:
        settings: Validated publisher settings

    Returns:
        Configured, not yet connected client
    """
    if settings.protocol == "5":
        client = mqtt.Client(
            callback_api_version=mqtt.CallbackAPIVersion.VERSION2,
            client_id=settings.client_id,
            protocol=mqtt.MQTTv5,
            transport=settings.transport,
        )
    else:
        client = mqtt.Client(
            callback_api_version=mqtt.CallbackAPIVersion.VERSION2,
            client_id=settings.client_id,
            clean_session=settings.clean_session,
            protocol=mqtt.MQTTv311,
            transport=settings.transport,
        )

    if settings.credentials is not None:
        client.username_pw_set(settings.credentials.username, settings.credentials.password)
    if settings.use_tls:
        client.tls_set()

    client.reconnect_delay_set(settings.reconnect_min_delay, settings.reconnect_max_delay)
    client.max_queued_messages_set(settings.max_queued_messages)
    return client


def create_persistence(settings: PublisherSettings) -> ClientPersistence:
    """Returns the persistence strategy selected in the settings."""
    if settings.persistence == PersistenceKind.FILE:
        return FilePersistence(settings.persistence_dir)
    return MemoryPersistence()


class MqttEventPublisher(EventPublisher):
    """
    Publishes plain-text payloads on MQTT topics over a single session.

    Args:
        settings: PublisherSettings or a mapping of its fields. Optional
            when a pre-built client is passed.
        persistence: Custom persistence strategy; overrides the one
            selected in the settings
        client_factory: Creates the paho client from the settings
        client: Pre-built paho client to use instead of creating one

    Raises:
        ConfigurationError: if the settings are invalid or the broker
            cannot be reached or refuses the connection
    """

    def __init__(
        self,
        settings: Optional[Union[PublisherSettings, Mapping[str, Any]]] = None,
        persistence: Optional[ClientPersistence] = None,
        client_factory: Optional[ClientFactory] = None,
        client: Optional[mqtt.Client] = None,
    ):
        if settings is None:
            if client is None:
                raise ConfigurationError("Either settings or a pre-built client is required")
            settings = self._settings_for_client(client)
        self.settings = build_settings(settings)

        self._lock = threading.Lock()
        self._state = PublisherState.DISCONNECTED
        self._connack_event = threading.Event()
        self._connack_failure: Optional[str] = None
        self._closing = False

        # paho mid -> persistence key
        self._inflight: Dict[int, str] = {}
        self._early_acks = set()

        self.stats = {
            "messages_sent": 0,
            "messages_acknowledged": 0,
            "connection_attempts": 0,
            "successful_connections": 0,
            "connection_losses": 0,
        }

        self.persistence = persistence if persistence is not None else create_persistence(self.settings)
        self.persistence.open(self.settings.client_id, self.settings.endpoint)

        prebuilt = client is not None
        if client is None:
            client = (client_factory or create_paho_client)(self.settings)
        self.client = client
        self.client.on_connect = self._on_connect
        self.client.on_disconnect = self._on_disconnect
        self.client.on_publish = self._on_publish

        try:
            self._connect(prebuilt)
        except ConfigurationError:
            self.persistence.close()
            raise

        try:
            self._restore_pending()
        except BrokerConnectionError as e:
            self._abort_connect()
            self.persistence.close()
            raise ConfigurationError(f"Cannot re-publish stored messages: {e}") from e

    @classmethod
    def from_client(
        cls,
        client: mqtt.Client,
        settings: Optional[Union[PublisherSettings, Mapping[str, Any]]] = None,
        persistence: Optional[ClientPersistence] = None,
    ) -> "MqttEventPublisher":
        """
        Wraps an already configured paho client.

        The client is connected with its own host and credentials if it is
        not connected yet. Settings only contribute qos, retain, timeouts and
        the persistence naming.
        """
        return cls(settings, persistence=persistence, client=client)

    @staticmethod
    def _settings_for_client(client: mqtt.Client) -> PublisherSettings:
        host = getattr(client, "host", "") or "localhost"
        port = getattr(client, "port", 1883) or 1883
        return PublisherSettings(endpoint=f"tcp://{host}:{port}", client_id="prebuilt-client")

    @property
    def state(self) -> PublisherState:
        return self._state

    def is_connected(self) -> bool:
        return self._state == PublisherState.CONNECTED

    def get_stats(self) -> Dict[str, int]:
        with self._lock:
            return self.stats.copy()

    def _connect(self, prebuilt: bool):
        settings = self.settings
        self.stats["connection_attempts"] += 1

        if prebuilt and self.client.is_connected():
            self._state = PublisherState.CONNECTED
            self.stats["successful_connections"] += 1
            self.client.loop_start()
            logger.info(f"Using connected MQTT client for {settings.endpoint}")
            return

        logger.info(f"Connecting to MQTT broker {settings.endpoint} as {settings.client_id}")
        try:
            if prebuilt:
                self.client.reconnect()
            elif settings.protocol == "5":
                self.client.connect(
                    settings.host,
                    settings.port,
                    keepalive=settings.keepalive,
                    clean_start=settings.clean_session,
                )
            else:
                self.client.connect(settings.host, settings.port, keepalive=settings.keepalive)
        except (OSError, ValueError) as e:
            logger.error(f"Cannot connect to MQTT broker {settings.endpoint}: {e}")
            raise ConfigurationError(
                f"Cannot connect to MQTT broker {settings.endpoint}: {e}"
            ) from e

        self.client.loop_start()

        if not self._connack_event.wait(settings.connect_timeout):
            self._abort_connect()
            logger.error(f"No CONNACK from {settings.endpoint} within {settings.connect_timeout}s")
            raise ConfigurationError(
                f"MQTT broker {settings.endpoint} did not answer within {settings.connect_timeout}s"
            )

        if self._connack_failure is not None:
            self._abort_connect()
            logger.error(f"MQTT broker {settings.endpoint} refused connection: {self._connack_failure}")
            raise ConfigurationError(
                f"MQTT broker {settings.endpoint} refused connection: {self._connack_failure}"
            )

    def _abort_connect(self):
        self._closing = True
        self.client.loop_stop()
        self.client.disconnect()
        with self._lock:
            self._state = PublisherState.CLOSED

    def _restore_pending(self):
        """Publishes messages left in the persistence by an earlier session."""
        leftovers = self.persistence.keys()
        if not leftovers:
            return

        logger.info(f"Re-publishing {len(leftovers)} unacknowledged message(s)")
        for key in leftovers:
            message = self.persistence.get(key)
            if message is not None:
                # the stored record is kept under its key until acknowledged
                self._send(message, key=key)

    def publish(self, topic: str, payload: str) -> int:
        """
        Hands a message to the transport.

        Args:
            topic: MQTT topic
            payload: Plain-text payload, sent as UTF-8

        Returns:
            int: paho message id

        Raises:
            BrokerConnectionError: if the session is not connected or the
                transport rejects the message
        """
        message = PersistedMessage(
            topic=topic, payload=payload, qos=self.settings.qos, retain=self.settings.retain
        )
        return self._send(message)

    def _send(self, message: PersistedMessage, key: Optional[str] = None) -> int:
        state = self._state
        if state != PublisherState.CONNECTED:
            logger.error(f"Cannot publish on {message.topic}: publisher is {state.value}")
            raise BrokerConnectionError(
                f"Cannot publish on {message.topic}: MQTT connection to "
                f"{self.settings.endpoint} is {state.value}",
                rc=mqtt.MQTT_ERR_NO_CONN,
            )

        stored = key is not None
        if key is None and message.qos > 0:
            key = f"{time.time_ns():020d}-{uuid.uuid4().hex[:8]}"
            self.persistence.put(key, message)

        info = self.client.publish(
            message.topic, message.payload.encode("utf-8"), qos=message.qos, retain=message.retain
        )

        if info.rc not in (mqtt.MQTT_ERR_SUCCESS, mqtt.MQTT_ERR_NO_CONN) and key is not None:
            if not stored:
                self.persistence.remove(key)
            key = None

        if key is not None:
            with self._lock:
                acked = info.mid in self._early_acks
                self._early_acks.discard(info.mid)
                if not acked:
                    self._inflight[info.mid] = key
            if acked:
                self.persistence.remove(key)

        if info.rc != mqtt.MQTT_ERR_SUCCESS:
            reason = mqtt.error_string(info.rc)
            logger.error(f"Publishing on {message.topic} failed: {reason}")
            raise BrokerConnectionError(f"Publishing on {message.topic} failed: {reason}", rc=info.rc)

        with self._lock:
            self.stats["messages_sent"] += 1
        logger.debug(f"Message {info.mid} handed over for {message.topic}")
        return info.mid

    def close(self):
        """Disconnects from the broker and closes the persistence."""
        with self._lock:
            if self._state == PublisherState.CLOSED:
                return
            self._closing = True
            self._state = PublisherState.CLOSED
            self._inflight.clear()
            self._early_acks.clear()

        self.client.disconnect()
        self.client.loop_stop()
        self.persistence.close()
        logger.info(f"MQTT publisher for {self.settings.endpoint} closed")

    def _on_connect(self, client, userdata, flags, reason_code, properties):
        """CONNACK callback, runs on the paho network thread."""
        if reason_code.is_failure:
            self._connack_failure = str(reason_code)
            logger.warning(f"Connection to {self.settings.endpoint} refused: {reason_code}")
            self._connack_event.set()
            return

        with self._lock:
            if self._state == PublisherState.CLOSED:
                return
            self._state = PublisherState.CONNECTED
            self.stats["successful_connections"] += 1
        self._connack_failure = None
        self._connack_event.set()
        logger.info(f"Connected to MQTT broker {self.settings.endpoint}")

    def _on_disconnect(self, client, userdata, disconnect_flags, reason_code, properties):
        """Disconnect callback, runs on the paho network thread."""
        with self._lock:
            if self._state == PublisherState.CLOSED:
                return
            was_connected = self._state == PublisherState.CONNECTED
            self._state = PublisherState.DISCONNECTED
            if was_connected:
                self.stats["connection_losses"] += 1

        if not self._closing:
            # also reached when another session takes over the client id
            logger.warning(
                f"Connection to {self.settings.endpoint} lost ({reason_code}), "
                f"client id {self.settings.client_id}"
            )

    def _on_publish(self, client, userdata, mid, reason_code, properties):
        """PUBACK/PUBCOMP callback, runs on the paho network thread."""
        with self._lock:
            self.stats["messages_acknowledged"] += 1
            key = self._inflight.pop(mid, None)
            if key is None and self.settings.qos > 0:
                self._early_acks.add(mid)
        if key is not None:
            self.persistence.remove(key)
