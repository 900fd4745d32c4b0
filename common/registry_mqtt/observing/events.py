"""
Registry event kinds and their message payloads.

Single-identifier events carry the identifier as-is. Paired events carry
"(<aasId>,<smId>)". Identifiers are not escaped, so an identifier that
contains a comma or parenthesis makes the paired payload ambiguous for
consumers.
"""

from enum import Enum
from typing import Any, Optional

from ..exceptions import SerializationError
from .topics import (
    TOPIC_DELETEAAS,
    TOPIC_DELETESUBMODEL,
    TOPIC_REGISTERAAS,
    TOPIC_REGISTERSUBMODEL,
)


class RegistryEventType(Enum):
    """Registry lifecycle events; the value is the topic they are published on."""
    AAS_REGISTERED = TOPIC_REGISTERAAS
    SUBMODEL_REGISTERED = TOPIC_REGISTERSUBMODEL
    AAS_DELETED = TOPIC_DELETEAAS
    SUBMODEL_DELETED = TOPIC_DELETESUBMODEL

    @property
    def topic(self) -> str:
        return self.value

    @property
    def is_paired(self) -> bool:
        return self in (RegistryEventType.SUBMODEL_REGISTERED, RegistryEventType.SUBMODEL_DELETED)


def identifier_to_str(identifier: Any) -> str:
    """
    Returns the string form of an identifier.

    Accepts plain strings and identifier objects with a string ``id``
    attribute.

    Raises:
        SerializationError: if the identifier is missing or has no string form
    """
    if identifier is None:
        raise SerializationError("Identifier is missing")

    value = identifier if isinstance(identifier, str) else getattr(identifier, "id", None)
    if not isinstance(value, str):
        raise SerializationError(
            f"Identifier of type {type(identifier).__name__} has no string id"
        )
    return value


def concat_aas_sm_id(aas_id: Any, sm_id: Any) -> str:
    """Builds the paired payload "(<aasId>,<smId>)"."""
    return f"({identifier_to_str(aas_id)},{identifier_to_str(sm_id)})"


def create_payload(event_type: RegistryEventType, aas_id: Any, sm_id: Optional[Any] = None) -> str:
    """
    Create the message payload for a registry event.

    Args:
        event_type: Kind of registry event
        aas_id: Identifier of the asset administration shell
        sm_id: Identifier of the submodel, only for submodel events

    Returns:
        The plain-text payload
    """
    if event_type.is_paired:
        return concat_aas_sm_id(aas_id, sm_id)
    if sm_id is not None:
        raise SerializationError(f"{event_type.name} does not take a submodel identifier")
    return identifier_to_str(aas_id)
