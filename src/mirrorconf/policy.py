"""Per-field policies and the resolution of a field's raw value.

A schema is a plain class with annotated attributes. Policies are attached
with ``typing.Annotated`` markers::

    class Settings:
        port: Annotated[int, Required()]
        name: str
        debug: Annotated[bool, Default("false")]
        token: Annotated[str, Rename("API_TOKEN")]
        cache: Annotated[object, Ignore()]
"""

import inspect
from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, ClassVar, List, NamedTuple, Optional, get_args, get_origin, get_type_hints

from .store import SourceStore


@dataclass(frozen=True)
class Ignore:
    """Leave the field untouched."""


@dataclass(frozen=True)
class Rename:
    """Look the field up under another key."""

    key: str


@dataclass(frozen=True)
class Default:
    """Raw value used when no source provides one."""

    value: str

    def __post_init__(self):
        if isinstance(self.value, str):
            return
        # Defaults are raw strings and go through the same coercion as found values
        if not isinstance(self.value, (bool, int, float)):
            raise TypeError(f"Default value must be a string or a scalar, got {self.value!r}")
        object.__setattr__(self, "value", str(self.value))


@dataclass(frozen=True)
class Required:
    """Binding fails when no source provides a value."""


@dataclass(frozen=True)
class FieldPolicy:
    """Policy facets of one field. The facets are independent of each other."""

    ignored: bool = False
    rename: Optional[str] = None
    default: Optional[str] = None
    required: bool = False

    @classmethod
    def from_markers(cls, markers: tuple) -> "FieldPolicy":
        """Build a policy from ``Annotated`` metadata, ignoring unrelated metadata."""
        facets = {}
        for marker in markers:
            if isinstance(marker, Ignore) or marker is Ignore:
                facets["ignored"] = True
            elif isinstance(marker, Rename):
                facets["rename"] = marker.key
            elif isinstance(marker, Default):
                facets["default"] = marker.value
            elif isinstance(marker, Required) or marker is Required:
                facets["required"] = True
        return cls(**facets)

    def effective_key(self, name: str) -> str:
        return self.rename if self.rename is not None else name


class FieldSpec(NamedTuple):
    """Descriptor of one schema field: name, declared type and policy."""

    name: str
    type: Any
    policy: FieldPolicy = FieldPolicy()

    @property
    def key(self) -> str:
        return self.policy.effective_key(self.name)


def fields_of(schema: Any) -> List[FieldSpec]:
    """Derive the field descriptors of a schema in declaration order.

    Args:
        schema: Schema class or instance  # (annotated attributes are the fields)

    Returns:
        Ordered field descriptors  # (base class fields come first)
    """
    cls = schema if inspect.isclass(schema) else type(schema)
    specs = []

    for name, hint in get_type_hints(cls, include_extras=True).items():
        if hint is ClassVar or get_origin(hint) is ClassVar:
            continue

        if get_origin(hint) is Annotated:
            declared_type, *markers = get_args(hint)
            specs.append(FieldSpec(name, declared_type, FieldPolicy.from_markers(tuple(markers))))
        else:
            specs.append(FieldSpec(name, hint))

    return specs


class ResolutionKind(Enum):
    SKIPPED = "skipped"
    FOUND = "found"
    DEFAULTED = "defaulted"
    MISSING_REQUIRED = "missing_required"
    MISSING_OPTIONAL = "missing_optional"


@dataclass
class Resolution:
    """Where a field's raw value comes from, if anywhere."""

    kind: ResolutionKind
    key: str
    raw_value: Optional[str] = None

    @property
    def has_value(self) -> bool:
        return self.kind in (ResolutionKind.FOUND, ResolutionKind.DEFAULTED)


def resolve_field(name: str, policy: FieldPolicy, store: SourceStore) -> Resolution:
    """Resolve the raw value of one field.

    Required takes precedence over a declared default: a required field with no
    value in the store is missing even when it also declares a default.

    Args:
        name: Declared field name
        policy: Field policy
        store: Source store to look the value up in

    Returns:
        Resolution describing the outcome and the raw value to coerce
    """
    key = policy.effective_key(name)

    if policy.ignored:
        return Resolution(ResolutionKind.SKIPPED, key)

    raw_value = store.get(key)
    if raw_value is not None:
        return Resolution(ResolutionKind.FOUND, key, raw_value)

    if policy.required:
        return Resolution(ResolutionKind.MISSING_REQUIRED, key)

    if policy.default is not None:
        return Resolution(ResolutionKind.DEFAULTED, key, policy.default)

    return Resolution(ResolutionKind.MISSING_OPTIONAL, key)
