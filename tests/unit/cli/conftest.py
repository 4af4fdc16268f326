##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Fixtures for files in this `cli/` test directory.
"""

import os
from argparse import ArgumentParser

import pytest
import yaml

from entityhub.cli.commands.command_entry_point import CommandEntryPoint
from tests.fixture_types import FixtureCallable, FixtureStr
from tests.utils import write_file


@pytest.fixture
def create_parser() -> FixtureCallable:
    """
    A fixture to help create a parser for any command.

    Returns:
        A function that creates a parser.
    """

    def _create_parser(cmd: CommandEntryPoint) -> ArgumentParser:
        """
        Returns an `ArgumentParser` configured with the `cmd` command and its subcommands.

        Returns:
            Parser with the `cmd` command and its subcommands registered.
        """
        parser = ArgumentParser()
        subparsers = parser.add_subparsers(dest="main_command")
        cmd.add_parser(subparsers)
        return parser

    return _create_parser


@pytest.fixture
def cli_config_file(project_dir: FixtureStr) -> FixtureStr:
    """
    An `entityhub.yaml` inside the test project, pointing at a current-format server.

    Args:
        project_dir: The project root.

    Returns:
        The path to the configuration file.
    """
    config = {
        "server": {"version": "9.0-5", "host": "localhost"},
        "connections": {"staging": {"port": 8010}, "final": {"port": 8011}, "admin": {"port": 8002}},
    }
    return write_file(os.path.join(project_dir, "entityhub.yaml"), yaml.safe_dump(config))
