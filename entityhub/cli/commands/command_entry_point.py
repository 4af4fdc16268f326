##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
The contract every `entityhub` subcommand implements.

[`build_main_parser`][cli.argparse_main.build_main_parser] calls `add_parser` on
each entry of `ALL_COMMANDS`. The parser a command registers must set `func`
to its `process_command` so `main` can dispatch to it.
"""

from abc import ABC, abstractmethod
from argparse import ArgumentParser, Namespace


class CommandEntryPoint(ABC):
    """
    One `entityhub` subcommand.

    Methods:
        add_parser: Register the subcommand with its actions and options.
        process_command: Run the subcommand for a parsed command line.
    """

    @abstractmethod
    def add_parser(self, subparsers: ArgumentParser):
        """
        Register this subcommand.

        Args:
            subparsers: The subparsers action of the main parser.
        """

    @abstractmethod
    def process_command(self, args: Namespace):
        """
        Run this subcommand.

        Args:
            args: The parsed command line, including `--config` where the command has one.
        """
