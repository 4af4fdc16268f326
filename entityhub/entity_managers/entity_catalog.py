##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
This module defines `EntityCatalog`, the entry point for create/read/update/delete
operations on a project's entities and their flows.

The catalog reconciles three loosely synchronized stores into one view:

- the entity definition files (through
  [`EntityDefinitionStore`][stores.entity_definition_store.EntityDefinitionStore]),
- the shared UI layout file (through
  [`UIMetadataStore`][stores.ui_metadata_store.UIMetadataStore]),
- the flow directories (through [`FlowLinker`][flows.flow_linker.FlowLinker]).

Lookups that find nothing return `None` rather than raising.
"""

import logging
import os
import shutil
from typing import Iterable, List, Optional

from entityhub.common.enums import FlowType
from entityhub.config.environment import EnvironmentConfig
from entityhub.flows.collaborators import (
    DirectoryFlowLister,
    DirectoryScaffolding,
    FileWatcher,
    FlowLister,
    NullFileWatcher,
    Scaffolding,
)
from entityhub.flows.flow_linker import FlowLinker
from entityhub.models.entity_definition import EntityDefinition
from entityhub.models.flow_definition import FlowDefinition
from entityhub.stores.entity_definition_store import EntityDefinitionStore
from entityhub.stores.entity_layouts import select_layout
from entityhub.stores.ui_metadata_store import UIMetadataStore


LOG = logging.getLogger("entityhub")


class EntityCatalog:
    """
    Manages the entities of one project.

    Attributes:
        env: The environment the catalog operates on.
        store: Reads and writes entity definition files.
        ui_store: Reads and writes the shared UI layout file.
        flow_linker: Attaches flows to entities.
        scaffolding: Creates entity and flow skeletons on disk.

    Methods:
        get_entities: List every entity with its flows and, where supported, its UI metadata.
        get_entity: Look up one entity by title.
        create_entity: Scaffold a new entity and its flows.
        save_entity: Write an entity's definition file.
        delete_entity: Remove an entity's directory.
        get_flow: Look up one flow of an entity.
        create_flow: Scaffold a new flow under an existing entity.
        delete_flow: Remove a flow's directory.
        save_entity_ui_data: Store the UI metadata of one entity.
        save_all_ui_data: Store the UI metadata of several entities.
    """

    def __init__(
        self,
        env: EnvironmentConfig,
        flow_lister: FlowLister = None,
        scaffolding: Scaffolding = None,
        watcher: FileWatcher = None,
    ):
        """
        Initialize the catalog.

        Args:
            env: The environment to operate on.
            flow_lister: Lists an entity's flows. Defaults to reading flow directories.
            scaffolding: Creates entity and flow skeletons. Defaults to bare directories.
            watcher: Told to stop watching before an entity is deleted. Defaults to a no-op.
        """
        self.env = env
        self.store = EntityDefinitionStore(env, watcher or NullFileWatcher())
        self.ui_store = UIMetadataStore(env)
        self.flow_linker = FlowLinker(env.project_dir, flow_lister or DirectoryFlowLister())
        self.scaffolding = scaffolding or DirectoryScaffolding(env.project_dir)

    def get_entities(self) -> List[EntityDefinition]:
        """
        List every entity of the project.

        On a legacy server the entities come from directory names and never get
        UI metadata. Otherwise the UI layout is read once and each entity gets its
        entry, or an empty one when it has none. Flows are attached in both cases.

        Returns:
            The entities, in directory order.

        Raises:
            MalformedDefinitionError: If the UI layout file is malformed.
            OSError: If flows can't be listed.
        """
        layout = select_layout(self.env.server_version)

        ui_data = self.ui_store.load_all() if layout.supports_ui_metadata else None
        entities = self.store.list_entities(layout)
        for entity in entities:
            if ui_data is not None:
                entity.hub_ui = ui_data.get(entity.title, {})
            self.flow_linker.link(entity)

        LOG.debug(f"Catalog holds {len(entities)} entities.")
        return entities

    def get_entity(self, name: str) -> Optional[EntityDefinition]:
        """
        Look up an entity by title.

        Args:
            name: The title to look for.

        Returns:
            The entity with its flows attached, or `None` if there is none.
        """
        for entity in self.get_entities():
            if entity.name == name:
                return entity
        LOG.debug(f"No entity titled '{name}'.")
        return None

    def create_entity(self, template: EntityDefinition) -> Optional[EntityDefinition]:
        """
        Scaffold a new entity along with every flow listed in the template.

        Args:
            template: The entity to create. Its `input_flows` and `harmonize_flows`
                name the flows to scaffold, with their code and data formats.

        Returns:
            The newly created entity as read back from disk, or `None` if it
            can't be found afterwards.
        """
        name = template.name
        self.scaffolding.create_entity(name)

        for flow_type, flows in ((FlowType.INPUT, template.input_flows), (FlowType.HARMONIZE, template.harmonize_flows)):
            for flow in flows or []:
                self.scaffolding.create_flow(name, flow.flow_name, flow_type, flow.code_format, flow.data_format)

        return self.get_entity(name)

    def save_entity(self, entity: EntityDefinition) -> EntityDefinition:
        """
        Write an entity's definition file.

        Args:
            entity: The entity to save.

        Returns:
            The same entity object.
        """
        return self.store.save(entity)

    def delete_entity(self, title: str):
        """
        Remove an entity's directory. Missing entities are ignored.

        Args:
            title: The title of the entity to delete.
        """
        self.store.delete(title)

    def get_flow(self, entity_name: str, flow_type: FlowType, flow_name: str) -> Optional[FlowDefinition]:
        """
        Look up one flow of an entity.

        Args:
            entity_name: The title of the entity.
            flow_type: The type of flow.
            flow_name: The name of the flow.

        Returns:
            The flow, or `None` if the entity or the flow doesn't exist.
        """
        entity = self.get_entity(entity_name)
        if entity is None:
            return None

        for flow in entity.get_flows(flow_type):
            if flow.flow_name == flow_name:
                return flow
        return None

    def create_flow(self, entity_name: str, flow_type: FlowType, new_flow: FlowDefinition) -> Optional[FlowDefinition]:
        """
        Scaffold a new flow under an existing entity.

        Args:
            entity_name: The title of the entity.
            flow_type: The type of flow.
            new_flow: The flow to create. Its `entity_name` is set to `entity_name`.

        Returns:
            The flow as read back from disk, or `None` if it can't be found afterwards.
        """
        new_flow.entity_name = entity_name
        self.scaffolding.create_flow(
            entity_name,
            new_flow.flow_name,
            flow_type,
            new_flow.code_format,
            new_flow.data_format,
            new_flow.use_es_model,
        )
        return self.get_flow(entity_name, flow_type, new_flow.flow_name)

    def delete_flow(self, entity_name: str, flow_name: str, flow_type: FlowType):
        """
        Remove a flow's directory. Missing flows are ignored.

        Args:
            entity_name: The title of the entity.
            flow_name: The name of the flow.
            flow_type: The type of flow.
        """
        flow_dir = self.scaffolding.get_flow_dir(entity_name, flow_name, flow_type)
        if not os.path.exists(flow_dir):
            LOG.debug(f"Flow directory {flow_dir} does not exist. Nothing to delete.")
            return
        shutil.rmtree(flow_dir)
        LOG.info(f"Flow '{flow_name}' of entity '{entity_name}' has been successfully deleted.")

    def save_entity_ui_data(self, entity: EntityDefinition):
        """
        Store the UI metadata of one entity in the shared layout file.

        Args:
            entity: The entity whose UI metadata should be stored.
        """
        self.ui_store.save_one(entity)

    def save_all_ui_data(self, entities: Iterable[EntityDefinition]):
        """
        Store the UI metadata of several entities in the shared layout file.

        Args:
            entities: The entities whose UI metadata should be stored.
        """
        self.ui_store.save_all(entities)
