"""MirrorConf configurator module."""

import logging
import sys
from pathlib import Path
from typing import Any, Mapping, NoReturn, Optional, Sequence, Union

from .adapters import AdapterRegistry, TypeAdapter, default_registry
from .binder import Binder, BindingResult
from .exceptions import FileLoadError, MirrorConfError
from .exit_codes import ExitCode
from .policy import FieldSpec
from .store import SourceStore

logger = logging.getLogger(__name__)


class Configurator:
    """Main MirrorConf entry point: loads a file and mirrors it onto schemas."""

    def __init__(
        self,
        path: Optional[Union[str, Path]] = None,
        allow_environment_fallback: bool = True,
        exit_on_error: bool = True,
        registry: Optional[AdapterRegistry] = None,
        environ: Optional[Mapping[str, str]] = None,
        encoding: str = "utf-8-sig",
    ):
        """Initialize configurator.

        Args:
            path: Configuration file  # (None or a missing file means environment only)
            allow_environment_fallback: Consult the environment for keys missing from the file
            exit_on_error: Terminate the process on fatal errors instead of raising them
            registry: Adapter registry  # (defaults to the process-wide registry)
            environ: Environment lookup  # (defaults to os.environ)
            encoding: Configuration file encoding
        """
        self.exit_on_error = exit_on_error
        self.registry = default_registry if registry is None else registry

        if path is None:
            self.store = SourceStore(allow_environment_fallback=allow_environment_fallback, environ=environ)
        else:
            try:
                self.store = SourceStore.load(path, encoding, allow_environment_fallback, environ)
            except FileLoadError as e:
                self._fatal(e, ExitCode.IO_ERROR)

    def get(self, key: str) -> Optional[str]:
        """Raw value of a key from the file, or the environment when allowed."""
        return self.store.get(key)

    def allow_default_to_environment(self, allow: bool) -> "Configurator":
        """Toggle environment fallback and return the configurator for chaining."""
        self.store.set_environment_fallback(allow)
        return self

    def add_adapter(self, type_: Any, adapter: TypeAdapter) -> "Configurator":
        """Register an adapter for a type and return the configurator for chaining."""
        self.registry.register(type_, adapter)
        return self

    def mirror(self, schema: Any, fields: Optional[Sequence[FieldSpec]] = None) -> BindingResult:
        """Bind configuration values onto a schema class or instance.

        Args:
            schema: Schema class or instance
            fields: Explicit field descriptors  # (derived from schema annotations if omitted)

        Returns:
            Successful binding result

        Raises:
            SystemExit: On a fatal binding error when ``exit_on_error`` is set
            BindingError: On a fatal binding error otherwise
        """
        result = Binder(self.store, self.registry).bind(schema, fields)
        if not result.ok:
            self._fatal(result.error, ExitCode.CONFIG_ERROR)
        return result

    def _fatal(self, error: MirrorConfError, code: ExitCode) -> NoReturn:
        logger.error("%s", error)
        if self.exit_on_error:
            sys.exit(code)
        raise error
