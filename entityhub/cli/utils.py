##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Utility functions to support Entityhub CLI command handlers.

Every command that touches a project takes a `--config` option pointing at an
`entityhub.yaml` file (or the directory holding one); the helpers here add
that option and turn it into an
[`EnvironmentConfig`][config.environment.EnvironmentConfig].
"""

import logging
from argparse import ArgumentParser, Namespace
from contextlib import contextmanager
from typing import Iterator, List, Sequence

from tabulate import tabulate

from entityhub.config.configfile import load_environment
from entityhub.config.environment import EnvironmentConfig


LOG = logging.getLogger("entityhub")


def add_config_argument(parser: ArgumentParser):
    """
    Add the `--config` option to a command parser.

    Args:
        parser: The parser of the command.
    """
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to an entityhub.yaml file or the directory holding one. "
        "Defaults to the current directory, then ~/.entityhub/.",
    )


@contextmanager
def environment_from_args(args: Namespace) -> Iterator[EnvironmentConfig]:
    """
    Load the environment named by `args.config` and close its connections afterwards.

    Args:
        args: Parsed CLI arguments. `args.config` may be None.

    Yields:
        The loaded environment.
    """
    env = load_environment(getattr(args, "config", None))
    LOG.debug(f"Loaded environment for {env.project_dir} (server version {env.server_version}).")
    try:
        yield env
    finally:
        env.close()


def print_table(rows: List[Sequence], headers: Sequence[str]):
    """
    Print rows as a table, or a short notice when there are none.

    Args:
        rows: The table rows.
        headers: The column headers.
    """
    if not rows:
        print("Nothing to show.")
        return
    print()
    print(tabulate(rows, headers=headers))
    print()
