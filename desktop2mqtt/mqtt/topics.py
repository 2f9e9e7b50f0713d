"""Topic naming for entity state, commands and discovery.

All functions are pure: the same hostname and entity id always give the
same topics, so Home Assistant sees a stable identity across reconnects.
"""

DEFAULT_DISCOVERY_PREFIX = "homeassistant"

# Entity id reserved for the availability node. Its state topic is the
# availability topic every other entity points at.
AVAILABILITY_ID = "connected"

PAYLOAD_AVAILABLE = "on"
PAYLOAD_NOT_AVAILABLE = "off"

UNIQUE_ID_PREFIX = "linux_ha_control"
DEVICE_ID_PREFIX = "linux_ha_bridge"


def base_topic(hostname: str, entity_id: str) -> str:
    """Build the base topic shared by an entity's state and sub-topics.

    Args:
        hostname: Lower-cased host name
        entity_id: Entity identifier

    Returns:
        Topic string, e.g. 'desktop1/inhibit'
    """
    return f"{hostname}/{entity_id}"


def availability_topic(hostname: str) -> str:
    """Build the host-wide availability topic."""
    return base_topic(hostname, AVAILABILITY_ID)


def attributes_topic(base: str) -> str:
    """Build the JSON attributes topic for a base topic."""
    return f"{base}/attributes"


def command_topic(base: str, suffix: str = "set") -> str:
    """Build a command topic below a base topic."""
    return f"{base}/{suffix}"


def discovery_topic(prefix: str, ha_type: str, hostname: str, entity_id: str) -> str:
    """Build a Home Assistant discovery config topic.

    Args:
        prefix: Discovery prefix (usually 'homeassistant')
        ha_type: HA component type (switch, sensor, ...)
        hostname: Lower-cased host name
        entity_id: Entity identifier

    Returns:
        Discovery topic string
    """
    return f"{prefix}/{ha_type}/{hostname}/{entity_id}/config"


def unique_id(hostname: str, entity_id: str) -> str:
    """Build the globally unique id Home Assistant keys the entity on."""
    return f"{UNIQUE_ID_PREFIX}_{hostname}_{entity_id}"


def device_identifier(hostname: str) -> str:
    return f"{DEVICE_ID_PREFIX}_{hostname}"
