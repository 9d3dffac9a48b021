"""Binder: projects resolved raw values onto the fields of a schema."""

import logging
import re
import types
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Union, get_args, get_origin

from .adapters import AdapterRegistry, default_registry
from .exceptions import (
    BindingError,
    ConversionError,
    MissingOptionalValue,
    MissingRequiredValueError,
    NoAdapterAvailableError,
)
from .policy import FieldSpec, ResolutionKind, fields_of, resolve_field
from .store import SourceStore

logger = logging.getLogger(__name__)


def parse_bool(raw_value: str) -> bool:
    """Only a case-insensitive ``true`` is true; anything else is false, never an error."""
    return raw_value.lower() == "true"


INT_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_int(raw_value: str) -> int:
    """Parse a plain ASCII integer; whitespace, `_` separators and non-ASCII digits are rejected."""
    if not INT_PATTERN.fullmatch(raw_value):
        raise ValueError(f"invalid integer literal: {raw_value!r}")
    return int(raw_value)


BUILTIN_COERCERS: Dict[type, Callable[[str], Any]] = {
    bool: parse_bool,
    int: parse_int,
    float: float,
    str: lambda raw_value: raw_value,
}


def unwrap_optional(type_: Any) -> Any:
    """Return ``T`` for ``Optional[T]`` / ``T | None``, otherwise the type unchanged."""
    origin = get_origin(type_)
    if origin is Union or origin is getattr(types, "UnionType", None):
        args = [arg for arg in get_args(type_) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return type_


class OutcomeStatus(Enum):
    BOUND = "bound"
    DEFAULTED = "defaulted"
    SKIPPED = "skipped"
    UNSET = "unset"
    MISSING_REQUIRED = "missing_required"
    CONVERSION_ERROR = "conversion_error"
    NO_ADAPTER = "no_adapter"


FATAL_STATUSES = (OutcomeStatus.MISSING_REQUIRED, OutcomeStatus.CONVERSION_ERROR, OutcomeStatus.NO_ADAPTER)


@dataclass
class BindingOutcome:
    """Result of binding one field."""

    field: str
    status: OutcomeStatus
    value: Any = None
    error: Optional[BindingError] = None

    @property
    def is_fatal(self) -> bool:
        return self.status in FATAL_STATUSES


@dataclass
class BindingResult:
    """Aggregate result of one binding pass.

    Either every field was processed and assigned, or ``error`` holds the first
    fatal failure and the target was left unmodified.
    """

    outcomes: List[BindingOutcome] = field(default_factory=list)
    warnings: List[MissingOptionalValue] = field(default_factory=list)
    error: Optional[BindingError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> None:
        """Raise the fatal binding error, if any."""
        if self.error is not None:
            raise self.error

    def values(self) -> Dict[str, Any]:
        """Values assigned by this pass, keyed by field name."""
        return {
            outcome.field: outcome.value
            for outcome in self.outcomes
            if outcome.status in (OutcomeStatus.BOUND, OutcomeStatus.DEFAULTED, OutcomeStatus.UNSET)
        }

    def __getitem__(self, field_name: str) -> BindingOutcome:
        for outcome in self.outcomes:
            if outcome.field == field_name:
                return outcome
        raise KeyError(field_name)


_ERROR_STATUSES = {
    MissingRequiredValueError: OutcomeStatus.MISSING_REQUIRED,
    ConversionError: OutcomeStatus.CONVERSION_ERROR,
    NoAdapterAvailableError: OutcomeStatus.NO_ADAPTER,
}


class Binder:
    """Resolves, coerces and assigns schema fields from a source store."""

    def __init__(self, store: SourceStore, registry: Optional[AdapterRegistry] = None):
        """Initialize binder.

        Args:
            store: Source store values are looked up in
            registry: Adapters for non-scalar types  # (defaults to the process-wide registry)
        """
        self.store = store
        self.registry = default_registry if registry is None else registry

    def bind(self, target: Any, fields: Optional[Sequence[FieldSpec]] = None) -> BindingResult:
        """Bind configuration values onto a schema class or instance.

        Fields are processed in declaration order. The first fatal field stops the
        pass; later fields are not resolved and nothing is assigned to the target.

        Args:
            target: Schema class or instance receiving the values
            fields: Explicit field descriptors  # (derived from target annotations if omitted)

        Returns:
            Aggregate binding result
        """
        specs = fields_of(target) if fields is None else fields
        result = BindingResult()
        assignments: Dict[str, Any] = {}

        for spec in specs:
            resolution = resolve_field(spec.name, spec.policy, self.store)

            if resolution.kind is ResolutionKind.SKIPPED:
                result.outcomes.append(BindingOutcome(spec.name, OutcomeStatus.SKIPPED))
                continue

            if resolution.kind is ResolutionKind.MISSING_REQUIRED:
                self._fail(result, spec, MissingRequiredValueError(spec.name, resolution.key))
                return result

            if resolution.kind is ResolutionKind.MISSING_OPTIONAL:
                warning = MissingOptionalValue(spec.name, resolution.key)
                logger.warning(warning.format_warning_message())
                result.warnings.append(warning)
                # An existing value (e.g. a class-level default) is kept
                if not hasattr(target, spec.name):
                    assignments[spec.name] = None
                current = getattr(target, spec.name, None)
                result.outcomes.append(BindingOutcome(spec.name, OutcomeStatus.UNSET, current))
                continue

            try:
                value = self.coerce(spec, resolution.key, resolution.raw_value)
            except BindingError as e:
                self._fail(result, spec, e)
                return result

            status = OutcomeStatus.DEFAULTED if resolution.kind is ResolutionKind.DEFAULTED else OutcomeStatus.BOUND
            assignments[spec.name] = value
            result.outcomes.append(BindingOutcome(spec.name, status, value))

        for name, value in assignments.items():
            setattr(target, name, value)

        return result

    def coerce(self, spec: FieldSpec, key: str, raw_value: str) -> Any:
        """Coerce a raw string into the declared type of a field.

        Args:
            spec: Field descriptor
            key: Effective lookup key  # (passed to adapters)
            raw_value: Raw string value

        Returns:
            Typed value

        Raises:
            ConversionError: If parsing fails or the adapter fails
            NoAdapterAvailableError: If the type has no built-in coercion and no adapter
        """
        target_type = unwrap_optional(spec.type)

        coercer = BUILTIN_COERCERS.get(target_type)
        if coercer is not None:
            try:
                return coercer(raw_value)
            except ValueError as e:
                raise ConversionError(spec.name, key, raw_value, target_type, e) from e

        adapter = self.registry.resolve(target_type)
        if adapter is None and target_type is not spec.type:
            adapter = self.registry.resolve(spec.type)
        if adapter is None:
            raise NoAdapterAvailableError(spec.name, spec.type)

        try:
            return adapter(key, raw_value, self.store)
        except BindingError:
            raise
        except Exception as e:
            raise ConversionError(spec.name, key, raw_value, target_type, e) from e

    def _fail(self, result: BindingResult, spec: FieldSpec, error: BindingError) -> None:
        status = _ERROR_STATUSES.get(type(error), OutcomeStatus.CONVERSION_ERROR)
        result.error = error
        result.outcomes.append(BindingOutcome(spec.name, status, error=error))
