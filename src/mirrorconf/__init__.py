"""MirrorConf - Environment-style configuration binding.

Loads ``key=value`` files, falls back to environment variables, and mirrors the
resolved values onto the annotated fields of a schema class with type coercion.
"""
# ruff: noqa: F401

from .adapters import AdapterRegistry, default_registry, yaml_adapter
from .binder import Binder, BindingOutcome, BindingResult, OutcomeStatus
from .configurator import Configurator
from .exceptions import (
    BindingError,
    ConversionError,
    FileLoadError,
    MirrorConfError,
    MissingOptionalValue,
    MissingRequiredValueError,
    NoAdapterAvailableError,
)
from .exit_codes import ExitCode
from .help import describe
from .policy import Default, FieldPolicy, FieldSpec, Ignore, Rename, Required, fields_of, resolve_field
from .store import SourceStore

__version__ = "0.1.0"
