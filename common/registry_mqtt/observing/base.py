# registry_mqtt/observing/base.py
from abc import ABC, abstractmethod


class RegistryServiceObserver(ABC):
    """
    Observer capability of an AAS registry.

    The registry calls these methods synchronously after it has changed its
    state, in the order the changes happened.
    """

    @abstractmethod
    def aas_registered(self, aas_id):
        """
        Called after an asset administration shell was registered.

        Args:
                aas_id: Identifier of the shell
        """

    @abstractmethod
    def submodel_registered(self, aas_id, sm_id):
        """
        Called after a submodel was registered for a shell.

        Args:
                aas_id: Identifier of the shell
                sm_id: Identifier of the submodel
        """

    @abstractmethod
    def aas_deleted(self, aas_id):
        """
        Called after an asset administration shell was deleted.

        Args:
                aas_id: Identifier of the shell
        """

    @abstractmethod
    def submodel_deleted(self, aas_id, sm_id):
        """
        Called after a submodel was removed from a shell.

        Args:
                aas_id: Identifier of the shell
                sm_id: Identifier of the submodel
        """
