"""
MQTT topics of the registry notifications.

The set is closed: every registry event kind maps to exactly one of these
topics and no topics are added at runtime.
"""

TOPIC_REGISTERAAS = "BaSyxRegistry_registeredAAS"
TOPIC_REGISTERSUBMODEL = "BaSyxRegistry_registeredSubmodel"
TOPIC_DELETEAAS = "BaSyxRegistry_deletedAAS"
TOPIC_DELETESUBMODEL = "BaSyxRegistry_deletedSubmodel"

ALL_TOPICS = frozenset(
    {
        TOPIC_REGISTERAAS,
        TOPIC_REGISTERSUBMODEL,
        TOPIC_DELETEAAS,
        TOPIC_DELETESUBMODEL,
    }
)
