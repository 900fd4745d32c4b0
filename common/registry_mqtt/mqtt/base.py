# registry_mqtt/mqtt/base.py
from abc import ABC, abstractmethod


class EventPublisher(ABC):
    """
    Abstract publish channel used by registry observers.

    Implementations own exactly one broker connection and hand messages to
    their transport without waiting for the broker to process them.
    """

    @abstractmethod
    def publish(self, topic: str, payload: str):
        """
        Hands a payload to the transport for the given topic.

        Args:
                topic: Target topic
                payload: Plain-text payload

        Raises:
                BrokerConnectionError: if the connection is not available
        """

    @abstractmethod
    def is_connected(self) -> bool:
        """
        Returns:
                True while the broker connection is established
        """

    @abstractmethod
    def close(self):
        """
        Tears down the broker connection. Further publish calls fail.
        """

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
