"""
Persistence strategies for in-flight MQTT messages.

A persistence strategy buffers every message handed to the transport with
QoS > 0 until the broker acknowledges it. MemoryPersistence keeps the
buffer in process memory and loses it on restart; FilePersistence writes
one JSON file per message so that unacknowledged messages survive a
restart and are published again after the next connect.
"""

import logging
import re
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)


class PersistedMessage(BaseModel):
    """Stored copy of an outbound message."""
    model_config = ConfigDict(frozen=True)

    topic: str
    payload: str
    qos: int = 1
    retain: bool = False


class ClientPersistence(ABC):
    """
    Storage for outbound messages that have not been acknowledged yet.

    open() is called once by the publisher before any other method and
    close() when the publisher shuts down.
    """

    @abstractmethod
    def open(self, client_id: str, server_uri: str):
        """
        Prepares the store for one client session.

        Args:
                client_id: MQTT client id of the session
                server_uri: Broker endpoint the session connects to
        """

    @abstractmethod
    def close(self):
        """Releases the store."""

    @abstractmethod
    def put(self, key: str, message: PersistedMessage):
        """Stores a message under key, replacing any previous one."""

    @abstractmethod
    def get(self, key: str) -> Optional[PersistedMessage]:
        """Returns the message stored under key, or None."""

    @abstractmethod
    def remove(self, key: str):
        """Deletes the message stored under key. Missing keys are ignored."""

    @abstractmethod
    def keys(self) -> List[str]:
        """Returns all stored keys."""

    def contains_key(self, key: str) -> bool:
        return key in self.keys()

    def clear(self):
        for key in self.keys():
            self.remove(key)


class MemoryPersistence(ClientPersistence):
    """Non-durable persistence in process memory (default)."""

    def __init__(self):
        self._messages: Dict[str, PersistedMessage] = {}
        self._lock = threading.Lock()

    def open(self, client_id: str, server_uri: str):
        logger.debug(f"Memory persistence opened for {client_id}@{server_uri}")

    def close(self):
        with self._lock:
            self._messages.clear()

    def put(self, key: str, message: PersistedMessage):
        with self._lock:
            self._messages[key] = message

    def get(self, key: str) -> Optional[PersistedMessage]:
        with self._lock:
            return self._messages.get(key)

    def remove(self, key: str):
        with self._lock:
            self._messages.pop(key, None)

    def keys(self) -> List[str]:
        with self._lock:
            return list(self._messages)

    def contains_key(self, key: str) -> bool:
        with self._lock:
            return key in self._messages


class FilePersistence(ClientPersistence):
    """
    Durable persistence on disk.

    Messages are stored as "<key>.msg" JSON files in a subdirectory of
    the base directory that is specific to the client id and broker, so
    several publishers can share one base directory.

    Args:
            directory: Base directory, created if missing
    """

    SUFFIX = ".msg"

    def __init__(self, directory: Union[str, Path] = ".mqtt-persistence"):
        self.directory = Path(directory)
        self.client_dir: Optional[Path] = None
        self._lock = threading.Lock()

    def open(self, client_id: str, server_uri: str):
        name = re.sub(r"[^A-Za-z0-9_.-]", "-", f"{client_id}-{server_uri}")
        self.client_dir = self.directory / name
        self.client_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"File persistence opened at {self.client_dir}")

    def close(self):
        self.client_dir = None

    def _path(self, key: str) -> Path:
        if self.client_dir is None:
            raise RuntimeError("FilePersistence is not open")
        return self.client_dir / f"{key}{self.SUFFIX}"

    def put(self, key: str, message: PersistedMessage):
        path = self._path(key)
        tmp_path = path.with_suffix(".tmp")
        with self._lock:
            tmp_path.write_text(message.model_dump_json(), encoding="utf-8")
            tmp_path.replace(path)

    def get(self, key: str) -> Optional[PersistedMessage]:
        path = self._path(key)
        with self._lock:
            if not path.exists():
                return None
            return PersistedMessage.model_validate_json(path.read_text(encoding="utf-8"))

    def remove(self, key: str):
        path = self._path(key)
        with self._lock:
            try:
                path.unlink()
            except FileNotFoundError:
                pass

    def keys(self) -> List[str]:
        if self.client_dir is None:
            raise RuntimeError("FilePersistence is not open")
        with self._lock:
            return sorted(p.stem for p in self.client_dir.glob(f"*{self.SUFFIX}"))
