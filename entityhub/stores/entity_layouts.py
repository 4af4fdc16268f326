##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
This module defines the two on-disk layouts entity definitions can come in.

- [`LegacyEntityLayout`][stores.entity_layouts.LegacyEntityLayout]: every
  subdirectory of the entities root is an entity. There are no definition files,
  no structural payload and no UI metadata.
- [`CurrentEntityLayout`][stores.entity_layouts.CurrentEntityLayout]: every
  `*.entity.json` file inside an entity subdirectory is an entity definition.

Which layout applies is decided from the target server's version through
`select_layout`, once per listing.
"""

import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterator, List, Tuple

from entityhub.config.config_filepaths import ENTITY_FILE_EXTENSION, LEGACY_SERVER_PREFIX
from entityhub.config.environment import EnvironmentConfig
from entityhub.exceptions import MalformedDefinitionError
from entityhub.models.entity_definition import EntityDefinition
from entityhub.utils import list_direct_folders, list_files_with_suffix, read_json_file


LOG = logging.getLogger("entityhub")


@dataclass
class EntityFileError:
    """
    A definition file that could not be read during enumeration.

    Attributes:
        path: The file that failed.
        error: The exception raised while reading it.
    """

    path: str
    error: Exception


def iter_definition_files(entities_dir: str) -> Iterator[Tuple[str, str]]:
    """
    Walk the entity directories and yield every definition file.

    A directory may hold no definition file or several; each file is yielded
    on its own.

    Args:
        entities_dir: The directory holding one subdirectory per entity.

    Yields:
        Tuples of (entity directory name, absolute definition file path).
    """
    for entity_name in list_direct_folders(entities_dir):
        for def_file in list_files_with_suffix(os.path.join(entities_dir, entity_name), ENTITY_FILE_EXTENSION):
            yield entity_name, def_file


class EntityLayout(ABC):
    """
    One way of laying entity definitions out on disk.

    Attributes:
        supports_ui_metadata: Whether entities in this layout carry a UI overlay.

    Methods:
        list_entities: Enumerate the entities of a project.
    """

    supports_ui_metadata: bool = False

    @abstractmethod
    def list_entities(self, env: EnvironmentConfig, errors: List[EntityFileError]) -> List[EntityDefinition]:
        """
        Enumerate the entities of a project.

        Args:
            env: The environment to read from.
            errors: A list that per-file read failures are appended to.

        Returns:
            The entities, in directory order.
        """
        raise NotImplementedError("Subclasses of `EntityLayout` must implement a `list_entities` method.")


class LegacyEntityLayout(EntityLayout):
    """Entities are nothing more than directory names."""

    supports_ui_metadata = False

    def list_entities(self, env: EnvironmentConfig, errors: List[EntityFileError]) -> List[EntityDefinition]:
        entity_names = list_direct_folders(env.legacy_entities_dir)
        LOG.debug(f"Found {len(entity_names)} legacy entity directories in {env.legacy_entities_dir}.")
        return [EntityDefinition.from_legacy_dir(entity_name) for entity_name in entity_names]


class CurrentEntityLayout(EntityLayout):
    """Entities are `*.entity.json` files inside per-entity directories."""

    supports_ui_metadata = True

    def list_entities(self, env: EnvironmentConfig, errors: List[EntityFileError]) -> List[EntityDefinition]:
        entities = []
        for entity_name, def_file in iter_definition_files(env.entities_dir):
            try:
                node = read_json_file(def_file)
            except (MalformedDefinitionError, OSError) as exc:
                LOG.error(f"Could not read entity definition '{def_file}': {exc}")
                errors.append(EntityFileError(path=def_file, error=exc))
                continue

            entity = EntityDefinition.from_json(def_file, node, entity_name=entity_name)
            if entity is not None:
                entities.append(entity)
        LOG.debug(f"Read {len(entities)} entity definitions from {env.entities_dir}.")
        return entities


LEGACY_LAYOUT = LegacyEntityLayout()
CURRENT_LAYOUT = CurrentEntityLayout()


def select_layout(server_version: str) -> EntityLayout:
    """
    Pick the entity layout used by a server version.

    Args:
        server_version: The target server's version string.

    Returns:
        The legacy layout for versions starting with "8", the current layout otherwise.
    """
    if str(server_version).startswith(LEGACY_SERVER_PREFIX):
        return LEGACY_LAYOUT
    return CURRENT_LAYOUT
