"""Tests for the Entity base: registration, availability and attributes."""

import json
from datetime import datetime

import pytest

from desktop2mqtt.entities import AvailabilityNode, Entity, Sensor, Switch


class PlainEntity(Entity):
    """Entity with a type but no init() behaviour of its own."""

    ha_type = "sensor"


DISCOVERY = "homeassistant/sensor/desktop1/plain/config"
AVAILABILITY = "desktop1/connected"


class TestRegistration:
    """Tests for discovery document publication."""

    def test_scenario_inhibit_switch(self, client, broker):
        """Test topics and ids for the 'inhibit' switch on 'desktop1'."""
        switch = Switch(client, "inhibit", "Sleep and screen lock inhibitor")
        broker.connect()

        assert switch.discovery_topic == "homeassistant/switch/desktop1/inhibit/config"
        assert switch.base_topic == "desktop1/inhibit"

        document = broker.last_json("homeassistant/switch/desktop1/inhibit/config")
        assert document["unique_id"] == "linux_ha_control_desktop1_inhibit"
        assert document["state_topic"] == "desktop1/inhibit"
        assert document["command_topic"] == "desktop1/inhibit/set"
        assert "desktop1/inhibit/set" in broker.subscriptions

    def test_document_fields(self, client, broker):
        """Test the fields added to every document."""
        entity = PlainEntity(client, "plain", "Plain")
        entity.set_discovery_config("state_topic", entity.base_topic)
        broker.connect()
        broker.run(entity.send_registration())

        document = broker.last_json(DISCOVERY)
        assert document == {
            "name": "Plain",
            "state_topic": "desktop1/plain",
            "availability_topic": AVAILABILITY,
            "payload_available": "on",
            "payload_not_available": "off",
            "json_attributes_topic": "desktop1/plain/attributes",
            "device": {"identifiers": "linux_ha_bridge_desktop1"},
            "unique_id": "linux_ha_control_desktop1_plain",
        }

    def test_document_is_compact_and_retained(self, client, broker):
        entity = PlainEntity(client, "plain")
        broker.connect()
        broker.run(entity.send_registration())

        topic, payload, qos, retain = broker.published[0]
        assert topic == DISCOVERY
        assert " " not in payload
        assert qos == 0
        assert retain is True

    def test_repeated_registration_is_byte_identical(self, client, broker):
        """Test two registrations with the same overlay publish the same bytes."""
        entity = PlainEntity(client, "plain", icon="mdi:eye")
        broker.connect()
        broker.run(entity.send_registration())
        broker.run(entity.send_registration())

        first, second = broker.published_to(DISCOVERY)
        assert first == second

    def test_availability_ping(self, client, broker):
        """Test registration pings the availability topic, not retained."""
        entity = PlainEntity(client, "plain")
        broker.connect()
        broker.run(entity.send_registration())

        assert broker.published[1] == (AVAILABILITY, "on", 0, False)

    def test_empty_type_does_not_register(self, client, broker):
        """Test an entity without a type publishes nothing."""
        entity = Entity(client, "untyped")
        broker.connect()
        broker.run(entity.send_registration())

        assert broker.published == []

    def test_disconnected_registration_is_dropped(self, client, broker):
        entity = PlainEntity(client, "plain")
        broker.run(entity.send_registration())

        assert broker.published == []

    def test_existing_device_is_kept(self, client, broker):
        """Test a device supplied in the overlay is not replaced."""
        entity = PlainEntity(client, "plain")
        entity.set_discovery_config("device", {"identifiers": ["custom"], "name": "Mine"})
        broker.connect()
        broker.run(entity.send_registration())

        assert broker.last_json(DISCOVERY)["device"] == {"identifiers": ["custom"], "name": "Mine"}

    def test_unique_id_cannot_be_overridden(self, client):
        entity = PlainEntity(client, "plain")
        entity.set_discovery_config("unique_id", "other")
        entity.set_discovery_config("name", "Other")

        document = entity.discovery_document()
        assert document["unique_id"] == "linux_ha_control_desktop1_plain"
        assert document["name"] == "plain"

    def test_name_defaults_to_id(self, client):
        assert PlainEntity(client, "plain").name == "plain"

    def test_empty_id_rejected(self, client):
        with pytest.raises(ValueError):
            PlainEntity(client, "")

    def test_set_discovery_config_does_not_publish(self, client, broker):
        entity = PlainEntity(client, "plain")
        broker.connect()
        entity.set_discovery_config("unit_of_measurement", "%")

        assert broker.published == []
        assert entity.discovery_document()["unit_of_measurement"] == "%"

    def test_reregisters_on_every_connection(self, client, broker):
        """Test discovery is republished after a reconnect."""
        Switch(client, "inhibit")
        broker.connect()
        broker.go_offline()
        broker.connect()

        assert len(broker.published_to("homeassistant/switch/desktop1/inhibit/config")) == 2


class TestAvailabilityNode:
    """Tests for the reserved 'connected' entity."""

    def test_no_availability_wiring(self, client, broker):
        """Test the 'connected' entity has no availability fields or ping."""
        node = Sensor(client, "connected", icon="mdi:lan")
        broker.connect()

        document = broker.last_json("homeassistant/sensor/desktop1/connected/config")
        assert "availability_topic" not in document
        assert "payload_available" not in document
        assert "icon" not in document
        assert (AVAILABILITY, "on", 0, False) not in broker.published
        assert node.is_availability_node

    def test_node_publishes_retained_on(self, client, broker):
        AvailabilityNode(client)
        broker.connect()

        document = broker.last_json("homeassistant/binary_sensor/desktop1/connected/config")
        assert document["device_class"] == "connectivity"
        assert document["state_topic"] == AVAILABILITY
        assert document["payload_on"] == "on"
        assert document["payload_off"] == "off"
        assert (AVAILABILITY, "on", 0, True) in broker.published


class TestIcon:
    """Tests for set_icon."""

    def test_set_icon_reregisters(self, client, broker):
        """Test changing the icon republishes discovery immediately."""
        entity = PlainEntity(client, "plain")
        broker.connect()
        broker.run(entity.set_icon("mdi:monitor"))

        assert broker.last_json(DISCOVERY)["icon"] == "mdi:monitor"

    def test_no_icon_field_without_icon(self, client):
        assert "icon" not in PlainEntity(client, "plain").discovery_document()


class TestAttributes:
    """Tests for attribute publication."""

    def test_set_attributes_publishes(self, client, broker):
        entity = PlainEntity(client, "plain")
        broker.connect()
        broker.run(entity.set_attributes({"count": 3, "active": True}))

        topic, payload, qos, retain = broker.published[-1]
        assert topic == "desktop1/plain/attributes"
        assert json.loads(payload) == {"count": 3, "active": "true"}
        assert (qos, retain) == (0, True)

    def test_attributes_are_converted(self, client, broker):
        entity = PlainEntity(client, "plain")
        broker.connect()
        broker.run(entity.set_attributes({"since": datetime(2025, 1, 2, 3, 4, 5)}))

        assert broker.last_json("desktop1/plain/attributes") == {"since": "2025-01-02T03:04:05"}

    def test_nested_mixed_keys_publish(self, client, broker):
        """Test nested mappings with int and str keys still publish."""
        entity = PlainEntity(client, "plain")
        broker.connect()
        broker.run(entity.set_attributes({"outer": {"inner": {1: "a", "b": 2}}}))

        assert broker.last_json("desktop1/plain/attributes") == {
            "outer": {"inner": {"1": "a", "b": 2}}
        }

    def test_set_attributes_replaces(self, client, broker):
        entity = PlainEntity(client, "plain")
        broker.connect()
        broker.run(entity.set_attributes({"a": 1}))
        broker.run(entity.set_attributes({"b": 2}))

        assert entity.attributes == {"b": 2}
        assert broker.last_json("desktop1/plain/attributes") == {"b": 2}

    def test_disconnected_attributes_are_dropped(self, client, broker):
        """Test no publish while disconnected and none after reconnecting."""
        entity = Switch(client, "inhibit")
        broker.run(entity.set_attributes({"active": True}))
        assert broker.published == []

        broker.connect()
        assert broker.published_to("desktop1/inhibit/attributes") == []

        broker.run(entity.set_attributes({"active": True}))
        assert broker.published_to("desktop1/inhibit/attributes") == ['{"active":"true"}']

    def test_empty_attributes(self, client, broker):
        entity = PlainEntity(client, "plain")
        broker.connect()
        broker.run(entity.set_attributes({}))

        assert broker.published_to("desktop1/plain/attributes") == ["{}"]
