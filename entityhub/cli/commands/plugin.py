##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
CLI module for validating and saving flow plugin files.

This module defines the `PluginCommand` class, which implements the `plugin`
subcommand on top of [`PluginEditor`][plugins.plugin_editor.PluginEditor].
"""

import json
import logging
from argparse import ArgumentParser, Namespace

from entityhub.cli.commands.command_entry_point import CommandEntryPoint
from entityhub.cli.utils import add_config_argument, environment_from_args
from entityhub.models.plugin import PluginModel
from entityhub.plugins.plugin_editor import PluginEditor


LOG = logging.getLogger("entityhub")


class PluginCommand(CommandEntryPoint):
    """
    Handles `plugin` CLI commands for validating and saving plugin files.

    Methods:
        add_parser: Adds the `plugin` command and its subcommands to the CLI parser.
        process_command: Processes the CLI input and dispatches the appropriate action.
    """

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `plugin` command parser to the CLI argument parser.

        Parameters:
            subparsers: The subparsers object to which the `plugin` command parser will be added.
        """
        plugin: ArgumentParser = subparsers.add_parser("plugin", help="Validate and save flow plugin files.")
        plugin.set_defaults(func=self.process_command)
        plugin_commands = plugin.add_subparsers(dest="plugin_action", required=True)

        plugin_validate = plugin_commands.add_parser(
            "validate", help="Validate a plugin file against the server and print the report."
        )
        plugin_validate.add_argument("entity", type=str, help="The entity the plugin's flow belongs to.")
        plugin_validate.add_argument("flow", type=str, help="The flow the plugin belongs to.")
        plugin_validate.add_argument("path", type=str, help="Path to the plugin file.")
        add_config_argument(plugin_validate)

        plugin_save = plugin_commands.add_parser(
            "save", help="Overwrite an existing plugin file with the contents of another file."
        )
        plugin_save.add_argument("path", type=str, help="Path to the plugin file to overwrite. It must exist.")
        plugin_save.add_argument("source", type=str, help="Path to the file holding the new contents.")

    def process_command(self, args: Namespace):
        """
        Process the `plugin` command and dispatch to the requested action.

        Args:
            args: Parsed CLI arguments.
        """
        if args.plugin_action == "validate":
            plugin = PluginModel.from_file(args.path)
            with environment_from_args(args) as env:
                report = PluginEditor.for_environment(env).validate(args.entity, args.flow, plugin)
            print(json.dumps(report, indent=2))
        elif args.plugin_action == "save":
            with open(args.source, "r", encoding="utf-8") as source_file:
                contents = source_file.read()
            # Saving never touches the validator
            PluginEditor(validator=None).save(PluginModel.from_file(args.path, file_contents=contents))
