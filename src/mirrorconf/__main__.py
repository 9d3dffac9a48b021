"""Command line entry point: ``python -m mirrorconf``."""

import argparse
import logging
import sys
from typing import Any, Dict, List, Optional

from .configurator import Configurator
from .exit_codes import ExitCode
from .help import describe
from .utils import dump_yaml, import_object

PLAIN_TYPES = (bool, int, float, str, list, dict, type(None))


def _parse_command_line(args: List[str]) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        args: Command line arguments

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(prog="mirrorconf", description="MirrorConf Configuration Binder")
    parser.add_argument("schema", help="Import path of the schema class, e.g. package.module.Settings.")
    parser.add_argument("--file", dest="path", default=".env", help="Configuration file (default: .env)")
    parser.add_argument(
        "--no-env", dest="allow_environment_fallback", action="store_false", help="Do not consult the environment"
    )
    parser.add_argument("--print", dest="print_config", action="store_true", help="Print bound configuration")
    parser.add_argument("--help.schema", dest="help_schema", action="store_true", help="Show schema field help")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser.parse_args(args)


def _printable(values: Dict[str, Any]) -> Dict[str, Any]:
    # Adapter-built objects are shown by their string form
    return {key: value if isinstance(value, PLAIN_TYPES) else str(value) for key, value in values.items()}


def main(args: Optional[List[str]] = None) -> int:
    """Run the command line.

    Args:
        args: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Process exit code
    """
    if args is None:
        args = sys.argv[1:]
    parsed_args = _parse_command_line(args)

    logging.basicConfig(level=parsed_args.log_level, format="%(levelname)s %(name)s: %(message)s")

    schema = import_object(parsed_args.schema)

    if parsed_args.help_schema:
        print(describe(schema))
        return ExitCode.SUCCESS

    configurator = Configurator(parsed_args.path, allow_environment_fallback=parsed_args.allow_environment_fallback)
    result = configurator.mirror(schema)

    if parsed_args.print_config:
        print("Final Configuration:")
        print("=" * 50)
        print(dump_yaml(_printable(result.values())))

    return ExitCode.SUCCESS


if __name__ == "__main__":
    sys.exit(main())
