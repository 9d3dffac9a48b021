"""Test cases for field policies and raw value resolution."""

from typing import Annotated

import pytest

from mirrorconf import Default, FieldPolicy, FieldSpec, Ignore, Rename, Required, fields_of, resolve_field
from mirrorconf.policy import ResolutionKind
from tests.conftest import make_store
from tests.data.schemas import RenamedSettings, ServiceSettings, WorkerSettings


def test_fields_follow_declaration_order():
    """Test deriving field descriptors from a schema class.

    Given a schema with annotated markers
    When deriving its fields
    Then fields keep declaration order, declared types and policies
    """
    specs = fields_of(ServiceSettings)

    assert [spec.name for spec in specs] == ["port", "name", "debug", "missing"]
    assert [spec.type for spec in specs] == [int, str, bool, str]
    assert specs[0].policy == FieldPolicy(required=True)
    assert specs[1].policy == FieldPolicy()
    assert specs[2].policy == FieldPolicy(default="false")
    assert specs[3].policy == FieldPolicy(ignored=True)


def test_fields_of_instance_and_class_vars():
    """Test that instances work like their class and ClassVar is not a field."""
    specs = fields_of(WorkerSettings())
    assert [spec.name for spec in specs] == ["workers", "ratio", "label"]


def test_markers_combine():
    specs = fields_of(RenamedSettings)

    assert specs[0].key == "API_TOKEN"
    assert specs[1].policy == FieldPolicy(rename="request_timeout", default="2.5")
    assert specs[1].key == "request_timeout"


def test_bare_marker_classes_and_unrelated_metadata():
    class Schema:
        a: Annotated[int, Required, "unrelated"]
        b: Annotated[str, Ignore]

    specs = fields_of(Schema)
    assert specs[0].policy == FieldPolicy(required=True)
    assert specs[1].policy == FieldPolicy(ignored=True)


def test_non_string_default_is_kept_as_raw_string():
    assert Default(8080).value == "8080"
    assert Default(True).value == "True"
    assert Default(0.5).value == "0.5"


@pytest.mark.parametrize("value", [None, [1, 2], object()])
def test_non_scalar_default_is_rejected(value):
    """Test that a default which is neither a string nor a scalar fails at declaration."""
    with pytest.raises(TypeError):
        Default(value)


def test_ignored_field_is_skipped_without_lookup():
    """Test that an ignored field resolves to skipped even when a value exists."""
    store = make_store("cache=yes")

    resolution = resolve_field("cache", FieldPolicy(ignored=True, required=True), store)
    assert resolution.kind is ResolutionKind.SKIPPED
    assert not resolution.has_value


def test_found_value_uses_effective_key():
    """Test that a rename changes the lookup key.

    Given a file with `api_token=abc` and a field `token` renamed to API_TOKEN
    When resolving the field
    Then the value is found under the renamed key
    """
    store = make_store("api_token=abc\ntoken=wrong")

    resolution = resolve_field("token", FieldPolicy(rename="API_TOKEN"), store)
    assert resolution.kind is ResolutionKind.FOUND
    assert resolution.key == "API_TOKEN"
    assert resolution.raw_value == "abc"


def test_found_value_wins_over_default():
    resolution = resolve_field("debug", FieldPolicy(default="false"), make_store("debug=true"))
    assert resolution.kind is ResolutionKind.FOUND
    assert resolution.raw_value == "true"


def test_default_applies_when_absent():
    resolution = resolve_field("debug", FieldPolicy(default="false"), make_store())
    assert resolution.kind is ResolutionKind.DEFAULTED
    assert resolution.raw_value == "false"
    assert resolution.has_value


def test_required_takes_precedence_over_default():
    """Test a field declaring both a default and required.

    Given no value in the file or the environment
    When resolving a field that is required and has a default
    Then the field is missing, the default does not satisfy it
    """
    resolution = resolve_field("port", FieldPolicy(required=True, default="8080"), make_store())
    assert resolution.kind is ResolutionKind.MISSING_REQUIRED
    assert resolution.raw_value is None


def test_optional_without_default_is_missing_optional():
    resolution = resolve_field("name", FieldPolicy(), make_store())
    assert resolution.kind is ResolutionKind.MISSING_OPTIONAL


def test_environment_satisfies_required_field():
    store = make_store("", environ={"PORT": "9000"})

    resolution = resolve_field("port", FieldPolicy(rename="PORT", required=True), store)
    assert resolution.kind is ResolutionKind.FOUND
    assert resolution.raw_value == "9000"


def test_explicit_field_spec_defaults():
    spec = FieldSpec("name", str)
    assert spec.policy == FieldPolicy()
    assert spec.key == "name"
    assert FieldSpec("name", str, FieldPolicy(rename="NAME")).key == "NAME"
    assert Rename("x") == Rename("x")
