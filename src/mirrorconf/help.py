"""Help display for schemas."""

import inspect
from typing import Any, Dict, List

import docstring_parser

from .exceptions import format_type
from .policy import FieldSpec, fields_of


def describe(schema: Any) -> str:
    """Format the fields of a schema for help display.

    Args:
        schema: Schema class or instance

    Returns:
        Formatted help string  # (one line per field, in declaration order)
    """
    cls = schema if inspect.isclass(schema) else type(schema)
    field_docs = _get_all_field_docstrings(cls)

    lines = [f"{cls.__module__}.{cls.__qualname__}:"]
    for spec in fields_of(cls):
        lines.append(_format_field_line(spec, field_docs.get(spec.name)))
    return "\n".join(lines)


def _format_field_line(spec: FieldSpec, docstring: Any) -> str:
    policy = spec.policy
    line = f"    {spec.name}"
    if policy.rename is not None:
        line += f" → {policy.rename}"

    details: List[str] = [format_type(spec.type)]
    if policy.ignored:
        details.append("ignored")
    if policy.required:
        details.append("required")
    if policy.default is not None:
        details.append(f"default='{policy.default}'")
    line += f"({', '.join(details)})"

    if docstring:
        line += f": {docstring}"
    return line


def _get_all_field_docstrings(cls: type) -> Dict[str, str]:
    """Get field descriptions from the ``Attributes:`` section of a class docstring.

    Args:
        cls: Schema class

    Returns:
        Dict mapping field names to their descriptions  # (field name -> description)
    """
    docstring = inspect.getdoc(cls)
    if not docstring:
        return {}

    # Fix docstring if it starts with Attributes: directly (missing description)
    if docstring.strip().startswith("Attributes:"):
        docstring = f"Description.\n\n{docstring}"

    try:
        parsed = docstring_parser.parse(docstring)
    except docstring_parser.ParseError:
        return {}

    field_docs = {}
    for param in parsed.params:
        if param.description:
            field_docs[param.arg_name] = param.description.strip().rstrip(".")
    return field_docs
