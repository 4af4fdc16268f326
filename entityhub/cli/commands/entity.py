##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
CLI module for managing the entities of a project.

This module defines the `EntityCommand` class, which implements the `entity`
subcommand with `list`, `show`, `create` and `delete` actions on top of
[`EntityCatalog`][entity_managers.entity_catalog.EntityCatalog].
"""

import json
import logging
from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser, Namespace

from entityhub.cli.commands.command_entry_point import CommandEntryPoint
from entityhub.cli.utils import add_config_argument, environment_from_args, print_table
from entityhub.common.enums import CodeFormat, DataFormat
from entityhub.entity_managers.entity_catalog import EntityCatalog
from entityhub.exceptions import EntityNotFoundError
from entityhub.models.entity_definition import EntityDefinition
from entityhub.models.flow_definition import FlowDefinition


LOG = logging.getLogger("entityhub")


class EntityCommand(CommandEntryPoint):
    """
    Handles `entity` CLI commands for listing, showing, creating and deleting entities.

    Methods:
        add_parser: Adds the `entity` command and its subcommands to the CLI parser.
        process_command: Processes the CLI input and dispatches the appropriate action.
    """

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `entity` command parser to the CLI argument parser.

        Parameters:
            subparsers: The subparsers object to which the `entity` command parser will be added.
        """
        entity: ArgumentParser = subparsers.add_parser(
            "entity",
            help="List, show, create and delete entities.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        entity.set_defaults(func=self.process_command)
        entity_commands = entity.add_subparsers(dest="entity_action", required=True)

        entity_list = entity_commands.add_parser("list", help="List every entity with its flows.")
        add_config_argument(entity_list)

        entity_show = entity_commands.add_parser("show", help="Show one entity as JSON.")
        entity_show.add_argument("name", type=str, help="The title of the entity.")
        add_config_argument(entity_show)

        entity_create = entity_commands.add_parser(
            "create",
            help="Scaffold a new entity and, optionally, some of its flows.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        entity_create.add_argument("name", type=str, help="The title of the new entity.")
        entity_create.add_argument(
            "--input-flow",
            dest="input_flows",
            action="append",
            default=[],
            help="Name of an input flow to scaffold. May be given more than once.",
        )
        entity_create.add_argument(
            "--harmonize-flow",
            dest="harmonize_flows",
            action="append",
            default=[],
            help="Name of a harmonize flow to scaffold. May be given more than once.",
        )
        entity_create.add_argument(
            "--code-format",
            choices=[code_format.value for code_format in CodeFormat],
            default=CodeFormat.JAVASCRIPT.value,
            help="Code format of the scaffolded flows.",
        )
        entity_create.add_argument(
            "--data-format",
            choices=[data_format.value for data_format in DataFormat],
            default=DataFormat.JSON.value,
            help="Data format of the scaffolded flows.",
        )
        add_config_argument(entity_create)

        entity_delete = entity_commands.add_parser("delete", help="Delete an entity and all of its flows.")
        entity_delete.add_argument("name", type=str, help="The title of the entity.")
        add_config_argument(entity_delete)

    def process_command(self, args: Namespace):
        """
        Process the `entity` command and dispatch to the requested action.

        Args:
            args: Parsed CLI arguments.

        Raises:
            EntityNotFoundError: If `show` names an entity that doesn't exist.
        """
        with environment_from_args(args) as env:
            catalog = EntityCatalog(env)

            if args.entity_action == "list":
                self.list_entities(catalog)
            elif args.entity_action == "show":
                entity = catalog.get_entity(args.name)
                if entity is None:
                    raise EntityNotFoundError(f"Entity '{args.name}' does not exist.")
                print(json.dumps(entity.to_dict(), indent=2))
            elif args.entity_action == "create":
                self.create_entity(catalog, args)
            elif args.entity_action == "delete":
                catalog.delete_entity(args.name)

    @staticmethod
    def list_entities(catalog: EntityCatalog):
        """
        Print a table of every entity and its flows.

        Args:
            catalog: The catalog to list from.
        """
        entities = catalog.get_entities()
        rows = [
            (
                entity.title,
                ", ".join(flow.flow_name for flow in entity.input_flows),
                ", ".join(flow.flow_name for flow in entity.harmonize_flows),
                entity.filename or "",
            )
            for entity in entities
        ]
        print_table(rows, headers=("Entity", "Input Flows", "Harmonize Flows", "Definition File"))

        for error in catalog.store.last_errors:
            LOG.warning(f"Skipped {error.path}: {error.error}")

    @staticmethod
    def create_entity(catalog: EntityCatalog, args: Namespace):
        """
        Scaffold the entity described by the CLI arguments.

        Args:
            catalog: The catalog to create the entity in.
            args: Parsed CLI arguments for `entity create`.
        """

        def _flows(names):
            return [
                FlowDefinition(
                    entity_name=args.name,
                    flow_name=name,
                    code_format=args.code_format,
                    data_format=args.data_format,
                )
                for name in names
            ]

        template = EntityDefinition(
            title=args.name,
            input_flows=_flows(args.input_flows),
            harmonize_flows=_flows(args.harmonize_flows),
        )
        created = catalog.create_entity(template)
        if created is None:
            LOG.warning(f"Entity '{args.name}' was scaffolded but could not be read back.")
            return
        LOG.info(
            f"Entity '{created.title}' created with {len(created.input_flows)} input and "
            f"{len(created.harmonize_flows)} harmonize flow(s)."
        )
