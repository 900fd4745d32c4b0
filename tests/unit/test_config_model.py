"""
Tests für die Pydantic-basierte Publisher-Konfiguration.
"""

import pytest
from pydantic import ValidationError

from registry_mqtt.config.config_model import (
    Credentials,
    PersistenceKind,
    PublisherSettings,
    parse_endpoint,
)


def test_default_values():
    settings = PublisherSettings(endpoint="tcp://localhost:1883", client_id="test-1")

    assert settings.host == "localhost"
    assert settings.port == 1883
    assert settings.qos == 1
    assert settings.retain is False
    assert settings.credentials is None
    assert settings.persistence == PersistenceKind.MEMORY
    assert settings.use_tls is False
    assert settings.transport == "tcp"
    assert settings.protocol == "3.1.1"


@pytest.mark.parametrize(
    "endpoint, expected",
    [
        ("tcp://broker.example.com", ("tcp", "broker.example.com", 1883)),
        ("mqtt://10.0.0.5:1884", ("mqtt", "10.0.0.5", 1884)),
        ("ssl://broker:8884", ("ssl", "broker", 8884)),
        ("mqtts://broker", ("mqtts", "broker", 8883)),
        ("ws://broker", ("ws", "broker", 80)),
        ("wss://broker:9443", ("wss", "broker", 9443)),
    ],
)
def test_parse_endpoint(endpoint, expected):
    assert parse_endpoint(endpoint) == expected


@pytest.mark.parametrize("endpoint", ["localhost:1883", "http://localhost", "tcp://", "tcp://host:notaport"])
def test_invalid_endpoint_rejected(endpoint):
    with pytest.raises(ValidationError):
        PublisherSettings(endpoint=endpoint, client_id="test-1")


def test_tls_and_websocket_schemes():
    settings = PublisherSettings(endpoint="wss://broker.example.com", client_id="ws-1")

    assert settings.use_tls is True
    assert settings.transport == "websockets"
    assert settings.port == 443


def test_blank_client_id_rejected():
    with pytest.raises(ValidationError):
        PublisherSettings(endpoint="tcp://localhost", client_id="  ")


def test_credentials():
    settings = PublisherSettings(
        endpoint="tcp://localhost",
        client_id="auth-1",
        credentials={"username": "registry", "password": "secret"},
    )

    assert settings.credentials == Credentials(username="registry", password="secret")


def test_blank_username_rejected():
    with pytest.raises(ValidationError):
        PublisherSettings(
            endpoint="tcp://localhost",
            client_id="auth-1",
            credentials={"username": "", "password": "secret"},
        )


@pytest.mark.parametrize("qos", [-1, 3])
def test_qos_range(qos):
    with pytest.raises(ValidationError):
        PublisherSettings(endpoint="tcp://localhost", client_id="q", qos=qos)


def test_reconnect_delays_must_be_ordered():
    with pytest.raises(ValidationError):
        PublisherSettings(
            endpoint="tcp://localhost",
            client_id="r",
            reconnect_min_delay=10,
            reconnect_max_delay=5,
        )


def test_settings_are_immutable():
    settings = PublisherSettings(endpoint="tcp://localhost", client_id="test-1")

    with pytest.raises(ValidationError):
        settings.qos = 2
