import argparse
import logging
import sys
from typing import Dict, List, Optional, Sequence

from ontovault.cli import SupportsCliCommand, DEFAULT_DOCS_URL, EXIT_OK, EXIT_INVALID_ARGUMENTS
from ontovault.cli.exceptions import CliCommandException
from ontovault.cli.commands.generate_command import GenerateCommand
from ontovault.shared.logging_utils import get_logger, setup_logging
from ontovault.version import get_ontovault_version

logger = get_logger(__name__)

ACTION_EXECUTE_COMMAND = "command"


def _discover_commands() -> List[SupportsCliCommand]:
    """All commands offered by the ontovault CLI"""
    return [GenerateCommand()]


def _create_parser(commands: Dict[str, SupportsCliCommand]) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ontovault",
        description="Generate Obsidian vault schemas from an ontology",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"ontovault {get_ontovault_version()}",
    )

    subparsers = parser.add_subparsers(title="Available commands", dest=ACTION_EXECUTE_COMMAND)
    for command in commands.values():
        command_parser = subparsers.add_parser(
            command.command_string,
            help=command.help_string,
            description=command.description,
        )
        command.configure_parser(command_parser)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Run the ontovault CLI.

    Returns:
        0 on success, the command's error code on failure, 2 on usage errors
    """
    commands = {command.command_string: command for command in _discover_commands()}
    parser = _create_parser(commands)

    try:
        args = parser.parse_args(argv)
    except SystemExit as exit_request:
        return exit_request.code if isinstance(exit_request.code, int) else EXIT_INVALID_ARGUMENTS

    command = commands.get(getattr(args, ACTION_EXECUTE_COMMAND, None))
    if command is None:
        parser.print_help()
        return EXIT_INVALID_ARGUMENTS

    setup_logging(logging.INFO)
    try:
        command.execute(args)
    except CliCommandException as error:
        logger.error(error.message)
        docs_url = error.docs_url or DEFAULT_DOCS_URL
        if error.error_code == EXIT_INVALID_ARGUMENTS:
            logger.error("See %s for usage", docs_url)
        return error.error_code

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
