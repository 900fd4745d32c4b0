"""
Observer slot of a registry.

A registry owns one ObservableRegistryNotifier and calls its notification
methods after each successful change. The notifier forwards the event to
every attached observer in attach order.
"""

import logging
import threading
from typing import List

from .base import RegistryServiceObserver

logger = logging.getLogger(__name__)


class ObservableRegistryNotifier(RegistryServiceObserver):
    """
    Fans registry events out to attached observers.

    The first observer that raises stops the fan-out and its error reaches
    the caller unchanged.
    """

    def __init__(self):
        self._observers: List[RegistryServiceObserver] = []
        self._lock = threading.Lock()

    def add_observer(self, observer: RegistryServiceObserver):
        """
        Attaches an observer. Attaching the same observer twice has no effect.

        Args:
            observer: Observer to attach
        """
        with self._lock:
            if observer not in self._observers:
                self._observers.append(observer)
                logger.debug(f"Observer attached: {type(observer).__name__}")

    def remove_observer(self, observer: RegistryServiceObserver):
        with self._lock:
            if observer in self._observers:
                self._observers.remove(observer)
                logger.debug(f"Observer removed: {type(observer).__name__}")

    @property
    def observers(self) -> List[RegistryServiceObserver]:
        with self._lock:
            return list(self._observers)

    def aas_registered(self, aas_id):
        for observer in self.observers:
            observer.aas_registered(aas_id)

    def submodel_registered(self, aas_id, sm_id):
        for observer in self.observers:
            observer.submodel_registered(aas_id, sm_id)

    def aas_deleted(self, aas_id):
        for observer in self.observers:
            observer.aas_deleted(aas_id)

    def submodel_deleted(self, aas_id, sm_id):
        for observer in self.observers:
            observer.submodel_deleted(aas_id, sm_id)
