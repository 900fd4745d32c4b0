"""
Gemeinsame Test-Fixtures

FakePahoClient ersetzt den paho-mqtt Client, damit keine echte
Broker-Verbindung benötigt wird. Die Callbacks werden mit den Signaturen
von CallbackAPIVersion.VERSION2 aufgerufen.
"""

import pytest
import paho.mqtt.client as mqtt

from registry_mqtt.config.config_model import PublisherSettings
from registry_mqtt.mqtt.base import EventPublisher
from registry_mqtt.mqtt.publisher import MqttEventPublisher


class FakeReasonCode:
    def __init__(self, value=0, name="Success"):
        self.value = value
        self.name = name

    @property
    def is_failure(self):
        return self.value >= 0x80

    def __str__(self):
        return self.name


class FakeMessageInfo:
    def __init__(self, rc, mid):
        self.rc = rc
        self.mid = mid


class FakePahoClient:
    """Simuliert einen paho-mqtt Client ohne Netzwerk."""

    def __init__(self, connack=0, connect_error=None, host="localhost", port=1883, connected=False):
        # None = Broker antwortet nie mit CONNACK
        self.connack = connack
        self.connect_error = connect_error
        self.host = host
        self.port = port
        self.connected = connected

        self.on_connect = None
        self.on_disconnect = None
        self.on_publish = None

        self.published = []
        self.connect_calls = []
        self.reconnect_calls = 0
        self.disconnect_calls = 0
        self.loop_started = False
        self.publish_rc = mqtt.MQTT_ERR_SUCCESS
        self.auto_ack = False
        self._mid = 0

    def connect(self, host, port=1883, keepalive=60, **kwargs):
        self.connect_calls.append((host, port, keepalive))
        if self.connect_error is not None:
            raise self.connect_error
        return mqtt.MQTT_ERR_SUCCESS

    def reconnect(self):
        self.reconnect_calls += 1
        if self.connect_error is not None:
            raise self.connect_error
        return mqtt.MQTT_ERR_SUCCESS

    def loop_start(self):
        self.loop_started = True
        if self.connack is not None and not self.connected:
            if self.connack == 0:
                self.connected = True
                self.on_connect(self, None, {}, FakeReasonCode(0, "Success"), None)
            else:
                self.on_connect(self, None, {}, FakeReasonCode(self.connack, "Not authorized"), None)
        return mqtt.MQTT_ERR_SUCCESS

    def loop_stop(self):
        self.loop_started = False
        return mqtt.MQTT_ERR_SUCCESS

    def disconnect(self):
        self.disconnect_calls += 1
        was_connected = self.connected
        self.connected = False
        if was_connected and self.on_disconnect:
            self.on_disconnect(self, None, {}, FakeReasonCode(0, "Normal disconnection"), None)
        return mqtt.MQTT_ERR_SUCCESS

    def is_connected(self):
        return self.connected

    def publish(self, topic, payload=None, qos=0, retain=False):
        self._mid += 1
        mid = self._mid
        self.published.append((topic, payload, qos, retain))
        if self.auto_ack and self.publish_rc == mqtt.MQTT_ERR_SUCCESS:
            self.on_publish(self, None, mid, FakeReasonCode(0), None)
        return FakeMessageInfo(self.publish_rc, mid)

    # Hilfsfunktionen für Tests

    def drop_connection(self, reason="Session taken over"):
        self.connected = False
        self.on_disconnect(self, None, {}, FakeReasonCode(0x8E, reason), None)

    def restore_connection(self):
        self.connected = True
        self.on_connect(self, None, {}, FakeReasonCode(0, "Success"), None)

    def ack(self, mid):
        self.on_publish(self, None, mid, FakeReasonCode(0), None)

    @property
    def payloads(self):
        return [(topic, payload.decode("utf-8")) for topic, payload, _, _ in self.published]


class RecordingPublisher(EventPublisher):
    """EventPublisher, der Aufrufe aufzeichnet und optional fehlschlägt."""

    def __init__(self, error=None):
        self.calls = []
        self.error = error
        self.closed = False

    def publish(self, topic, payload):
        self.calls.append((topic, payload))
        if self.error is not None:
            raise self.error
        return len(self.calls)

    def is_connected(self):
        return not self.closed

    def close(self):
        self.closed = True


@pytest.fixture
def fake_client():
    return FakePahoClient()


@pytest.fixture
def settings():
    return PublisherSettings(
        endpoint="tcp://localhost:1883",
        client_id="test-1",
        connect_timeout=0.1,
    )


@pytest.fixture
def publisher(settings, fake_client):
    publisher = MqttEventPublisher(settings, client_factory=lambda s: fake_client)
    yield publisher
    publisher.close()


@pytest.fixture
def recording_publisher():
    return RecordingPublisher()


@pytest.fixture
def fake_client_class():
    return FakePahoClient


@pytest.fixture
def recording_publisher_class():
    return RecordingPublisher
