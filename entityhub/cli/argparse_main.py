##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Builds the `entityhub` argument parser.

Global options live on the main parser. Everything else is contributed by the
commands listed in `entityhub.cli.commands.ALL_COMMANDS`.
"""

import sys
from argparse import ArgumentParser, RawDescriptionHelpFormatter

from entityhub import VERSION
from entityhub.cli.commands import ALL_COMMANDS


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
DEFAULT_LOG_LEVEL = "INFO"

DESCRIPTION = "Manage the entity definitions, flows and generated artifacts of a data hub project."


class HelpParser(ArgumentParser):
    """
    An `ArgumentParser` that answers a usage error with the full help text.

    Most mistakes on the `entityhub` command line are a missing action or
    positional argument, and the help lists both.
    """

    def error(self, message: str):
        sys.stderr.write(f"error: {message}\n")
        self.print_help()
        sys.exit(2)


def build_main_parser() -> ArgumentParser:
    """
    Build the parser for the whole `entityhub` command line.

    Returns:
        A parser whose namespace carries `level`, the chosen command in
        `subparsers` and that command's `func`.
    """
    parser = HelpParser(
        prog="entityhub",
        description=DESCRIPTION,
        formatter_class=RawDescriptionHelpFormatter,
        epilog="Run 'entityhub <command> --help' for the options of a command.",
    )
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument(
        "-lvl",
        "--level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=DEFAULT_LOG_LEVEL,
        help="Level of the console output [Default: %(default)s]",
    )
    subparsers = parser.add_subparsers(dest="subparsers", metavar="<command>", required=True)

    for command in ALL_COMMANDS:
        command.add_parser(subparsers)

    return parser
