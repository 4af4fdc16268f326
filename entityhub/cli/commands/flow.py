##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
CLI module for managing the flows of an entity.

This module defines the `FlowCommand` class, which implements the `flow`
subcommand with `show`, `create` and `delete` actions.
"""

# pylint: disable=duplicate-code

import logging
from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser, Namespace

from entityhub.cli.commands.command_entry_point import CommandEntryPoint
from entityhub.cli.utils import add_config_argument, environment_from_args, print_table
from entityhub.common.enums import CodeFormat, DataFormat, FlowType
from entityhub.entity_managers.entity_catalog import EntityCatalog
from entityhub.exceptions import EntityNotFoundError
from entityhub.models.flow_definition import FlowDefinition


LOG = logging.getLogger("entityhub")


class FlowCommand(CommandEntryPoint):
    """
    Handles `flow` CLI commands for showing, creating and deleting flows.

    Methods:
        add_parser: Adds the `flow` command and its subcommands to the CLI parser.
        process_command: Processes the CLI input and dispatches the appropriate action.
    """

    @staticmethod
    def _add_flow_arguments(parser: ArgumentParser):
        """
        Add the positional arguments that address a single flow.

        Parameters:
            parser: The parser of a `flow` subcommand.
        """
        parser.add_argument("entity", type=str, help="The title of the entity the flow belongs to.")
        parser.add_argument("flow_type", choices=[flow_type.value for flow_type in FlowType], help="The type of flow.")
        parser.add_argument("flow", type=str, help="The name of the flow.")
        add_config_argument(parser)

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `flow` command parser to the CLI argument parser.

        Parameters:
            subparsers: The subparsers object to which the `flow` command parser will be added.
        """
        flow: ArgumentParser = subparsers.add_parser(
            "flow",
            help="Show, create and delete the flows of an entity.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        flow.set_defaults(func=self.process_command)
        flow_commands = flow.add_subparsers(dest="flow_action", required=True)

        flow_show = flow_commands.add_parser("show", help="Show the settings of a flow.")
        self._add_flow_arguments(flow_show)

        flow_create = flow_commands.add_parser(
            "create",
            help="Scaffold a new flow under an existing entity.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        self._add_flow_arguments(flow_create)
        flow_create.add_argument(
            "--code-format",
            choices=[code_format.value for code_format in CodeFormat],
            default=CodeFormat.JAVASCRIPT.value,
            help="Code format of the flow's modules.",
        )
        flow_create.add_argument(
            "--data-format",
            choices=[data_format.value for data_format in DataFormat],
            default=DataFormat.JSON.value,
            help="Data format of the documents the flow produces.",
        )
        flow_create.add_argument(
            "--use-es-model",
            action="store_true",
            help="Scaffold the flow from the entity services model.",
        )

        flow_delete = flow_commands.add_parser("delete", help="Delete a flow's directory.")
        self._add_flow_arguments(flow_delete)

    def process_command(self, args: Namespace):
        """
        Process the `flow` command and dispatch to the requested action.

        Args:
            args: Parsed CLI arguments.

        Raises:
            EntityNotFoundError: If `show` or `create` can't find the flow (or its entity).
        """
        flow_type = FlowType(args.flow_type)

        with environment_from_args(args) as env:
            catalog = EntityCatalog(env)

            if args.flow_action == "show":
                flow = catalog.get_flow(args.entity, flow_type, args.flow)
                if flow is None:
                    raise EntityNotFoundError(
                        f"No {flow_type.value} flow '{args.flow}' found for entity '{args.entity}'."
                    )
                self.print_flow(flow)
            elif args.flow_action == "create":
                if catalog.get_entity(args.entity) is None:
                    raise EntityNotFoundError(f"Entity '{args.entity}' does not exist.")
                new_flow = FlowDefinition(
                    flow_name=args.flow,
                    flow_type=flow_type,
                    code_format=args.code_format,
                    data_format=args.data_format,
                    use_es_model=args.use_es_model,
                )
                created = catalog.create_flow(args.entity, flow_type, new_flow)
                if created is None:
                    raise EntityNotFoundError(f"Flow '{args.flow}' was scaffolded but could not be read back.")
                self.print_flow(created)
            elif args.flow_action == "delete":
                catalog.delete_flow(args.entity, args.flow, flow_type)

    @staticmethod
    def print_flow(flow: FlowDefinition):
        """
        Print a flow's settings as a two-column table.

        Args:
            flow: The flow to print.
        """
        print_table(list(flow.to_dict().items()), headers=("Setting", "Value"))
