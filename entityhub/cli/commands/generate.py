##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
CLI module for regenerating the artifacts derived from entity definitions.

This module defines the `GenerateCommand` class, which implements the
`generate` subcommand. Results are printed as a table and the command exits
with a non-zero code if any pipeline failed.
"""

import logging
import sys
from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser, Namespace
from typing import List

from entityhub.cli.commands.command_entry_point import CommandEntryPoint
from entityhub.cli.utils import add_config_argument, environment_from_args, print_table
from entityhub.common.enums import ReturnCode
from entityhub.generation.artifact_generator import ArtifactGenerator, GenerationResult
from entityhub.generation.modules_loader import DEFAULT_AWAIT_TERMINATION_SECONDS, DEFAULT_POOL_SIZE


LOG = logging.getLogger("entityhub")

TARGETS = ("options", "indexes", "all")


class GenerateCommand(CommandEntryPoint):
    """
    Handles the `generate` CLI command for regenerating search options and database indexes.

    Methods:
        add_parser: Adds the `generate` command to the CLI parser.
        process_command: Runs the requested generation pipelines and reports their outcome.
    """

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `generate` command parser to the CLI argument parser.

        Parameters:
            subparsers: The subparsers object to which the `generate` command parser will be added.
        """
        generate: ArgumentParser = subparsers.add_parser(
            "generate",
            help="Regenerate search options and/or database index configuration.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        generate.set_defaults(func=self.process_command)
        generate.add_argument(
            "target",
            choices=TARGETS,
            nargs="?",
            default="all",
            help="Which artifacts to regenerate.",
        )
        generate.add_argument(
            "--pool-size",
            type=int,
            default=DEFAULT_POOL_SIZE,
            help="Maximum number of concurrent module uploads.",
        )
        generate.add_argument(
            "--timeout",
            type=float,
            default=DEFAULT_AWAIT_TERMINATION_SECONDS,
            help="Seconds to wait for module uploads to finish.",
        )
        add_config_argument(generate)

    def process_command(self, args: Namespace):
        """
        Run the requested pipelines and print their results.

        Args:
            args: Parsed CLI arguments.
        """
        with environment_from_args(args) as env:
            generator = ArtifactGenerator(env, pool_size=args.pool_size, await_termination_seconds=args.timeout)
            results: List[GenerationResult] = []
            if args.target in ("options", "all"):
                results.append(generator.save_search_options())
            if args.target in ("indexes", "all"):
                results.append(generator.save_db_indexes())

        rows = [
            (result.artifact, result.status.value, "\n".join(result.files), result.error or "") for result in results
        ]
        print_table(rows, headers=("Artifact", "Status", "Files", "Error"))

        if not all(result.ok for result in results):
            LOG.error("One or more artifacts failed to generate.")
            sys.exit(ReturnCode.ERROR)
