##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
This module defines `EntityDefinitionStore`, which reads and writes individual
entity definition files under `plugins/entities/`.
"""

import logging
import os
import shutil
from typing import Any, List

from entityhub.config.config_filepaths import ENTITY_FILE_EXTENSION
from entityhub.config.environment import EnvironmentConfig
from entityhub.flows.collaborators import FileWatcher, NullFileWatcher, entity_dir
from entityhub.models.entity_definition import EntityDefinition
from entityhub.stores.entity_layouts import (
    EntityFileError,
    EntityLayout,
    iter_definition_files,
    select_layout,
)
from entityhub.utils import ensure_directory_exists, read_json_file, write_json_file


LOG = logging.getLogger("entityhub")


class EntityDefinitionStore:
    """
    Reads and writes entity definition files for one project.

    Attributes:
        env: The environment the store operates on.
        watcher: The file watcher told to stop watching before a delete.
        last_errors: Definition files that failed to read during the last listing.

    Methods:
        list_entities: Enumerate the project's entities using the layout for the server version.
        list_raw_documents: Read every definition file as plain JSON.
        save: Write an entity's structural payload to disk.
        delete: Remove an entity's directory.
    """

    def __init__(self, env: EnvironmentConfig, watcher: FileWatcher = None):
        """
        Initialize the store.

        Args:
            env: The environment to operate on.
            watcher: The file watcher. Defaults to one that does nothing.
        """
        self.env = env
        self.watcher = watcher or NullFileWatcher()
        self.last_errors: List[EntityFileError] = []

    def list_entities(self, layout: EntityLayout = None) -> List[EntityDefinition]:
        """
        Enumerate the project's entities.

        Unless a layout is given it is chosen from the server version. A definition
        file that fails to read is logged and recorded in `last_errors`; its
        siblings are still returned.

        Args:
            layout: The layout to read the entities with.

        Returns:
            The entities, without flows or UI metadata attached.
        """
        self.last_errors = []
        layout = layout or select_layout(self.env.server_version)
        return layout.list_entities(self.env, self.last_errors)

    def list_raw_documents(self) -> List[Any]:
        """
        Read every current-format definition file as plain JSON.

        Returns:
            The parsed documents, unmodified, in directory order.

        Raises:
            MalformedDefinitionError: If any definition file isn't valid JSON.
        """
        return [read_json_file(def_file) for _, def_file in iter_definition_files(self.env.entities_dir)]

    def save(self, entity: EntityDefinition) -> EntityDefinition:
        """
        Write an entity's structural payload to its definition file.

        An entity that was never saved gets the file
        `plugins/entities/<title>/<title>.entity.json`; its directory is created
        if needed. Existing content is replaced.

        Args:
            entity: The entity to save.

        Returns:
            The same entity, with `filename` set.
        """
        if entity.filename is None:
            directory = entity_dir(self.env.project_dir, entity.title)
            ensure_directory_exists(directory)
            entity.filename = os.path.join(directory, f"{entity.title}{ENTITY_FILE_EXTENSION}")

        write_json_file(entity.filename, entity.to_json())
        LOG.info(f"Saved entity '{entity.title}' to {entity.filename}.")
        return entity

    def delete(self, title: str):
        """
        Remove an entity's directory and everything in it.

        The watcher is told to stop watching the directory's parent first. A
        missing directory is not an error.

        Args:
            title: The title of the entity to delete.
        """
        directory = entity_dir(self.env.project_dir, title)
        if not os.path.exists(directory):
            LOG.debug(f"Entity directory {directory} does not exist. Nothing to delete.")
            return

        self.watcher.unwatch(os.path.dirname(directory))
        shutil.rmtree(directory)
        LOG.info(f"Entity '{title}' has been successfully deleted.")
