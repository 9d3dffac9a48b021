"""Utility functions for MirrorConf."""

import builtins
import importlib
import re
from typing import Any

import yaml


class _ScalarLoader(yaml.SafeLoader):
    """Safe loader that also reads ``1e-4`` style numbers as floats."""


_ScalarLoader.add_implicit_resolver(
    "tag:yaml.org,2002:float",
    re.compile(r"-? [1-9] ( \. [0-9]* [1-9] )? ( e [-+] [1-9] [0-9]* )?", re.X),
    list("-+0123456789."),
)


def load_yaml(stream: Any) -> Any:
    """Load YAML content from a stream.

    Args:
        stream: Stream to read YAML from  # (file-like object or string)
    Returns:
        Parsed YAML content  # (scalar, list or dict)
    """
    return yaml.load(stream, Loader=_ScalarLoader)


def dump_yaml(data: Any) -> str:
    """Dump data as block-style YAML."""
    return yaml.safe_dump(data, default_flow_style=False, indent=2, sort_keys=False)


def import_object(path: str) -> Any:
    """Import an object by its module path.

    Args:
        path: Import path like 'module.submodule.ClassName' or 'module.ClassName.attribute'

    Returns:
        Imported object  # (class, function, or other importable object)

    Raises:
        ImportError: If object cannot be imported
    """
    # Handle simple names without dots (built-in objects)
    if "." not in path:
        if hasattr(builtins, path):
            return getattr(builtins, path)
        raise ImportError(f"Cannot import {path}")

    parts = path.split(".")

    # Start from the full path and work backwards
    for i in range(len(parts) - 1, 0, -1):
        module_path = ".".join(parts[:i])
        remaining_parts = parts[i:]

        try:
            module = importlib.import_module(module_path)

            obj = module
            for part in remaining_parts:
                obj = getattr(obj, part)

            return obj
        except (ImportError, AttributeError):
            continue

    raise ImportError(f"Cannot import {path}")
