"""Test cases for the type adapter registry."""

from mirrorconf import AdapterRegistry, yaml_adapter
from tests.conftest import make_store
from tests.data.schemas import Duration


def test_register_and_resolve(registry: AdapterRegistry):
    """Test registering an adapter for a type.

    Given an empty registry
    When registering an adapter for Duration
    Then resolving Duration returns it and other types resolve to None
    """

    def duration_adapter(key, raw_value, store):
        return Duration.parse(raw_value)

    registry.register(Duration, duration_adapter)

    assert registry.resolve(Duration) is duration_adapter
    assert registry.resolve(complex) is None
    assert Duration in registry
    assert len(registry) == 1


def test_last_registration_wins(registry: AdapterRegistry):
    """Test that re-registering a type replaces the adapter without error."""
    registry.register(Duration, lambda key, raw_value, store: "first")
    registry.register(Duration, lambda key, raw_value, store: "second")

    assert len(registry) == 1
    assert registry.resolve(Duration)("timeout", "30s", make_store()) == "second"


def test_decorator_registration_and_unregister(registry: AdapterRegistry):
    @registry.adapter(Duration)
    def parse_duration(key, raw_value, store):
        return Duration.parse(raw_value)

    assert parse_duration("timeout", "2m", make_store()) == Duration(120)
    assert registry.resolve(Duration) is parse_duration

    registry.unregister(Duration)
    assert registry.resolve(Duration) is None
    registry.unregister(Duration)  # no-op when absent


def test_adapter_can_read_the_store(registry: AdapterRegistry):
    """Test that adapters receive the active store for nested lookups.

    Given an adapter that reads a unit from another key
    When invoking it with a store holding that key
    Then the adapter combines the raw value with the nested lookup
    """

    def scaled_adapter(key, raw_value, store):
        return Duration(int(raw_value) * Duration.UNITS[store.get(f"{key}_unit")])

    registry.register(Duration, scaled_adapter)
    store = make_store("timeout=3\ntimeout_unit=m")

    assert registry.resolve(Duration)("timeout", store.get("timeout"), store) == Duration(180)


def test_yaml_adapter_parses_flow_values():
    store = make_store()

    assert yaml_adapter("hosts", "[a, b, c]", store) == ["a", "b", "c"]
    assert yaml_adapter("limits", "{cpu: 2, memory: 1e-4}", store) == {"cpu": 2, "memory": 1e-4}
