"""
Configuration package for the registry MQTT publisher.
"""

from .config_model import Credentials, PersistenceKind, PublisherSettings, parse_endpoint
from .manager import build_settings, load_settings

__all__ = [
    "Credentials",
    "PersistenceKind",
    "PublisherSettings",
    "parse_endpoint",
    "build_settings",
    "load_settings",
]
