##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
This module defines `UIMetadataStore`, which manages the single shared UI layout
file (`user-config/entities.layout.json`).

The layout file is one JSON object mapping entity titles to free-form UI metadata.
Every write is a read-modify-write of the whole document that only touches the
titles being saved, so entries for other entities are carried over unchanged.
"""

import logging
import os
from typing import Any, Dict, Iterable

from filelock import FileLock

from entityhub.config.environment import EnvironmentConfig
from entityhub.exceptions import MalformedDefinitionError
from entityhub.models.entity_definition import EntityDefinition
from entityhub.utils import ensure_directory_exists, read_json_file, write_json_file


LOG = logging.getLogger("entityhub")


class UIMetadataStore:
    """
    Reads and writes the shared UI layout file of a project.

    Attributes:
        layout_file: Path to the shared UI layout file.
        lock_timeout: Seconds to wait for the layout file lock.

    Methods:
        load_all: Read the title -> UI metadata mapping.
        save_one: Store the UI metadata of one entity.
        save_all: Store the UI metadata of several entities.
    """

    def __init__(self, env: EnvironmentConfig, lock_timeout: int = 10):
        """
        Initialize the store.

        Args:
            env: The environment whose layout file is managed.
            lock_timeout: Seconds to wait for the layout file lock.
        """
        self.layout_file = env.ui_layout_file
        self.lock_timeout = lock_timeout

    @property
    def _lock_file(self) -> str:
        return f"{self.layout_file}.lock"

    def _read_document(self) -> Dict[str, Any]:
        if not os.path.isfile(self.layout_file):
            return {}
        document = read_json_file(self.layout_file)
        if not isinstance(document, dict):
            raise MalformedDefinitionError(self.layout_file, "the UI layout must be a JSON object")
        return document

    def load_all(self) -> Dict[str, Any]:
        """
        Read the UI metadata of every entity.

        Returns:
            A dictionary of entity title to UI metadata. Empty if the layout file doesn't exist.

        Raises:
            MalformedDefinitionError: If the layout file isn't a valid JSON object.
        """
        ui_data = self._read_document()
        LOG.debug(f"Loaded UI metadata for {len(ui_data)} entities from {self.layout_file}.")
        return ui_data

    def save_one(self, entity: EntityDefinition):
        """
        Store the UI metadata of a single entity.

        Args:
            entity: The entity whose `hub_ui` should be written.
        """
        self.save_all([entity])

    def save_all(self, entities: Iterable[EntityDefinition]):
        """
        Store the UI metadata of several entities.

        Titles are written in order, so the last entity with a given title wins.
        Titles that aren't being saved keep whatever the file already had.

        Args:
            entities: The entities whose `hub_ui` should be written.

        Raises:
            MalformedDefinitionError: If the existing layout file isn't a valid JSON object.
            filelock.Timeout: If the layout file lock couldn't be acquired.
        """
        ensure_directory_exists(os.path.dirname(self.layout_file))

        # Pylint complains that we're instantiating an abstract class but this is correct usage
        lock = FileLock(self._lock_file)  # pylint: disable=abstract-class-instantiated
        with lock.acquire(timeout=self.lock_timeout):
            ui_data = self._read_document()
            titles = []
            for entity in entities:
                ui_data[entity.title] = entity.hub_ui if entity.hub_ui is not None else {}
                titles.append(entity.title)
            write_json_file(self.layout_file, ui_data)

        LOG.info(f"Saved UI metadata for {len(titles)} entities to {self.layout_file}.")
