"""Custom exceptions for MirrorConf."""

from dataclasses import dataclass
from pathlib import Path
from textwrap import dedent
from typing import Any, Optional, Union


def format_type(type_obj: Any) -> str:
    """Format type object for display.

    Args:
        type_obj: Type object to format

    Returns:
        Formatted type string
    """
    if type_obj in (int, float, str, bool):
        return type_obj.__name__

    # Parameterized generics keep their full representation
    type_str = str(type_obj).replace("typing.", "")
    if "[" in type_str:
        return type_str

    if hasattr(type_obj, "__name__") and hasattr(type_obj, "__module__"):
        if type_obj.__module__ == "builtins":
            return type_obj.__name__
        return f"{type_obj.__module__}.{type_obj.__qualname__}"

    return type_str


class MirrorConfError(Exception):
    """Base exception for MirrorConf errors."""

    pass


class FileLoadError(MirrorConfError):
    """Raised when an existing configuration file cannot be read."""

    def __init__(self, path: Union[str, Path], cause: BaseException):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"❌ Failed to load configuration file\nPath: {self.path}\nReason: {cause}")


class BindingError(MirrorConfError):
    """Base class for fatal errors raised while binding a single field."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message)


class MissingRequiredValueError(BindingError):
    """Raised when a required field has no value in the file or the environment."""

    def __init__(self, field: str, key: str):
        self.key = key
        super().__init__(
            field,
            dedent(f"""\
                ❌ Missing required value
                Field: {field}
                Key: {key}\
                """),
        )


class ConversionError(BindingError):
    """Raised when a present value cannot be coerced to the field type."""

    def __init__(self, field: str, key: str, raw_value: str, target_type: Any, cause: Optional[BaseException] = None):
        self.key = key
        self.raw_value = raw_value
        self.target_type = target_type
        self.cause = cause
        reason = f"\nReason: {cause}" if cause is not None else ""
        super().__init__(
            field,
            dedent(f"""\
                ❌ Conversion failed
                Field: {field}
                Key: {key}
                Expected: {format_type(target_type)}
                Actual: {raw_value!r}\
                """)
            + reason,
        )


class NoAdapterAvailableError(BindingError):
    """Raised when a field type has neither a built-in coercion nor a registered adapter."""

    def __init__(self, field: str, target_type: Any):
        self.target_type = target_type
        super().__init__(
            field,
            dedent(f"""\
                ❌ No adapter available
                Field: {field}
                Type: {format_type(target_type)}
                Hint: mark the field with Ignore() or register an adapter for the type\
                """),
        )


@dataclass
class MissingOptionalValue:
    """Represents an optional field that received no value and has no default."""

    field: str
    key: str

    def format_warning_message(self) -> str:
        """Format warning message for a missing optional value.

        Returns:
            Formatted warning message string
        """
        return f"Failed to find a value for a field. [field={self.field}, key={self.key}]"
