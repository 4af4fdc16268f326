##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Entityhub CLI Commands Package.

Each module encapsulates the logic and argument parsing for one top-level
command of the `entityhub` command-line interface, built around the
`CommandEntryPoint` interface.

Modules:
    command_entry_point: Defines the abstract base class `CommandEntryPoint` for all CLI commands.
    entity: Implements the `entity` command for listing, showing, creating and deleting entities.
    flow: Implements the `flow` command for showing, creating and deleting flows.
    generate: Implements the `generate` command for regenerating search options and database indexes.
    plugin: Implements the `plugin` command for validating and saving plugin files.
"""

from entityhub.cli.commands.entity import EntityCommand
from entityhub.cli.commands.flow import FlowCommand
from entityhub.cli.commands.generate import GenerateCommand
from entityhub.cli.commands.plugin import PluginCommand


# Keep these in alphabetical order
ALL_COMMANDS = [
    EntityCommand(),
    FlowCommand(),
    GenerateCommand(),
    PluginCommand(),
]
