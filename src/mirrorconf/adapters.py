"""Type adapter registry for field types without a built-in coercion."""

import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional

from .utils import load_yaml

if TYPE_CHECKING:
    from .store import SourceStore

logger = logging.getLogger(__name__)

# (key, raw value, active store) -> typed value
TypeAdapter = Callable[[str, str, "SourceStore"], Any]


class AdapterRegistry:
    """Mapping from a target type to the adapter that builds it from a raw string.

    Registration is expected to happen once at startup, before any binding.
    """

    def __init__(self, adapters: Optional[Dict[Any, TypeAdapter]] = None):
        self._adapters: Dict[Any, TypeAdapter] = dict(adapters or {})

    def register(self, type_: Any, adapter: TypeAdapter) -> None:
        """Register an adapter for a type, replacing any previous one.

        Args:
            type_: Target type  # (the field annotation the adapter produces)
            adapter: Callable taking (key, raw value, store)
        """
        if type_ in self._adapters:
            logger.debug("Replacing adapter for %r.", type_)
        self._adapters[type_] = adapter

    def adapter(self, type_: Any) -> Callable[[TypeAdapter], TypeAdapter]:
        """Decorator form of :meth:`register`."""

        def decorator(func: TypeAdapter) -> TypeAdapter:
            self.register(type_, func)
            return func

        return decorator

    def unregister(self, type_: Any) -> None:
        self._adapters.pop(type_, None)

    def resolve(self, type_: Any) -> Optional[TypeAdapter]:
        """Return the adapter for a type, or None if nothing is registered."""
        return self._adapters.get(type_)

    def __contains__(self, type_: Any) -> bool:
        return type_ in self._adapters

    def __len__(self) -> int:
        return len(self._adapters)


default_registry = AdapterRegistry()


def yaml_adapter(key: str, raw_value: str, store: "SourceStore") -> Any:
    """Parse a raw value as a YAML flow value.

    Lets collection fields bind from values like ``[a, b]`` or ``{k: v}``.
    Not registered by default.
    """
    return load_yaml(raw_value)
