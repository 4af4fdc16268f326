##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
This module defines the interfaces of the collaborators Entityhub relies on but
does not own: the flow lister, the scaffolding engine and the filesystem watcher.

Each interface comes with a plain filesystem implementation so the command line
tool works on a bare project. Applications embedding Entityhub are expected to
pass their own implementations in.

Flows live on disk as

    plugins/entities/<entity>/<input|harmonize>/<flow>/<flow>.properties

where the properties file records the flow's code format, data format and main module.
"""

import logging
import os
from abc import ABC, abstractmethod
from typing import List

from entityhub.common.enums import CodeFormat, DataFormat, FlowType
from entityhub.config.config_filepaths import (
    ENTITIES_DIR,
    ENTITY_FILE_EXTENSION,
    FLOW_PROPERTIES_EXTENSION,
    PLUGINS_DIR,
)
from entityhub.models.flow_definition import FlowDefinition
from entityhub.utils import (
    ensure_directory_exists,
    list_direct_folders,
    read_properties,
    write_json_file,
    write_properties,
)


LOG = logging.getLogger("entityhub")


def entity_dir(project_dir: str, entity_name: str) -> str:
    """
    Get the directory of one entity.

    Args:
        project_dir: The project root.
        entity_name: The entity's directory name.

    Returns:
        The path to `plugins/entities/<entity_name>`.
    """
    return os.path.join(project_dir, PLUGINS_DIR, ENTITIES_DIR, entity_name)


def flow_type_dir(project_dir: str, entity_name: str, flow_type: FlowType) -> str:
    """
    Get the directory holding every flow of one type for an entity.

    Args:
        project_dir: The project root.
        entity_name: The entity's directory name.
        flow_type: The type of flow.

    Returns:
        The path to `plugins/entities/<entity_name>/<flow_type>`.
    """
    return os.path.join(entity_dir(project_dir, entity_name), FlowType(flow_type).value)


class FlowLister(ABC):
    """
    Lists the flows of one type that belong to an entity.

    Methods:
        get_flows: Return the ordered flows of a type for an entity.
    """

    @abstractmethod
    def get_flows(self, project_dir: str, entity_name: str, flow_type: FlowType) -> List[FlowDefinition]:
        """
        Return the flows of `flow_type` that belong to `entity_name`.

        Args:
            project_dir: The project root.
            entity_name: The entity's directory name.
            flow_type: The type of flow to list.

        Returns:
            The flows in a stable order.

        Raises:
            OSError: If the flows can't be read.
        """
        raise NotImplementedError("Subclasses of `FlowLister` must implement a `get_flows` method.")


class Scaffolding(ABC):
    """
    Creates on-disk skeletons for entities and flows.

    Methods:
        create_entity: Create the skeleton of a new entity.
        create_flow: Create the skeleton of a new flow under an entity.
        get_flow_dir: Resolve where a flow lives without creating anything.
    """

    @abstractmethod
    def create_entity(self, entity_name: str):
        """
        Create the skeleton of a new entity.

        Args:
            entity_name: The name of the entity.
        """
        raise NotImplementedError("Subclasses of `Scaffolding` must implement a `create_entity` method.")

    @abstractmethod
    def create_flow(  # pylint: disable=too-many-arguments
        self,
        entity_name: str,
        flow_name: str,
        flow_type: FlowType,
        code_format: CodeFormat,
        data_format: DataFormat,
        use_es_model: bool = False,
    ):
        """
        Create the skeleton of a new flow.

        Args:
            entity_name: The entity the flow belongs to.
            flow_name: The name of the flow.
            flow_type: The type of flow.
            code_format: The language of the flow's plugins.
            data_format: The document format the flow produces.
            use_es_model: Whether the flow's plugins are generated from the entity model.
        """
        raise NotImplementedError("Subclasses of `Scaffolding` must implement a `create_flow` method.")

    @abstractmethod
    def get_flow_dir(self, entity_name: str, flow_name: str, flow_type: FlowType) -> str:
        """
        Resolve the directory of a flow without creating it.

        Args:
            entity_name: The entity the flow belongs to.
            flow_name: The name of the flow.
            flow_type: The type of flow.

        Returns:
            The flow's directory.
        """
        raise NotImplementedError("Subclasses of `Scaffolding` must implement a `get_flow_dir` method.")


class FileWatcher(ABC):
    """
    Watches project directories for changes.

    Methods:
        unwatch: Stop monitoring a directory.
    """

    @abstractmethod
    def unwatch(self, path: str):
        """
        Stop monitoring `path`.

        Args:
            path: The directory to stop watching.
        """
        raise NotImplementedError("Subclasses of `FileWatcher` must implement an `unwatch` method.")


class NullFileWatcher(FileWatcher):
    """A watcher for when nothing is watching the project."""

    def unwatch(self, path: str):
        LOG.debug(f"No file watcher configured; nothing to unwatch at '{path}'.")


class DirectoryFlowLister(FlowLister):
    """
    Lists flows straight from the project's flow directories.

    The code and data formats come from each flow's properties file. When a flow
    has no properties file its code format is guessed from the plugin files present.
    """

    def get_flows(self, project_dir: str, entity_name: str, flow_type: FlowType) -> List[FlowDefinition]:
        flow_type = FlowType(flow_type)
        type_dir = flow_type_dir(project_dir, entity_name, flow_type)
        flows = []
        for flow_name in list_direct_folders(type_dir):
            flow_dir = os.path.join(type_dir, flow_name)
            properties = read_properties(os.path.join(flow_dir, f"{flow_name}{FLOW_PROPERTIES_EXTENSION}"))
            flows.append(
                FlowDefinition(
                    entity_name=entity_name,
                    flow_name=flow_name,
                    flow_type=flow_type,
                    code_format=properties.get("codeFormat") or self._guess_code_format(flow_dir),
                    data_format=properties.get("dataFormat") or DataFormat.JSON,
                    use_es_model=properties.get("useEsModel", "false").lower() == "true",
                    flow_dir=flow_dir,
                )
            )
        LOG.debug(f"Found {len(flows)} {flow_type.value} flow(s) for entity '{entity_name}'.")
        return flows

    @staticmethod
    def _guess_code_format(flow_dir: str) -> CodeFormat:
        for _, _, filenames in os.walk(flow_dir):
            if any(filename.endswith(".xqy") for filename in filenames):
                return CodeFormat.XQUERY
        return CodeFormat.JAVASCRIPT


class DirectoryScaffolding(Scaffolding):
    """
    Creates bare entity and flow directories inside a project.

    A new entity gets its directory and a minimal definition file holding just
    its title. A new flow gets its directory and properties file; plugin sources
    are left for the user to write.
    """

    def __init__(self, project_dir: str):
        self.project_dir = project_dir

    def create_entity(self, entity_name: str):
        directory = entity_dir(self.project_dir, entity_name)
        ensure_directory_exists(directory)
        definition_file = os.path.join(directory, f"{entity_name}{ENTITY_FILE_EXTENSION}")
        if not os.path.exists(definition_file):
            skeleton = {"info": {"title": entity_name, "version": "0.0.1"}, "definitions": {entity_name: {}}}
            write_json_file(definition_file, skeleton)
            LOG.info(f"Created entity '{entity_name}' at {directory}.")

    def create_flow(  # pylint: disable=too-many-arguments
        self,
        entity_name: str,
        flow_name: str,
        flow_type: FlowType,
        code_format: CodeFormat,
        data_format: DataFormat,
        use_es_model: bool = False,
    ):
        flow_dir = self.get_flow_dir(entity_name, flow_name, flow_type)
        ensure_directory_exists(flow_dir)
        code_format = CodeFormat(code_format)
        write_properties(
            os.path.join(flow_dir, f"{flow_name}{FLOW_PROPERTIES_EXTENSION}"),
            {
                "mainModule": f"main.{code_format.value}",
                "codeFormat": code_format.value,
                "dataFormat": DataFormat(data_format).value,
                "useEsModel": str(bool(use_es_model)).lower(),
            },
        )
        LOG.info(f"Created {FlowType(flow_type).value} flow '{flow_name}' for entity '{entity_name}'.")

    def get_flow_dir(self, entity_name: str, flow_name: str, flow_type: FlowType) -> str:
        return os.path.join(flow_type_dir(self.project_dir, entity_name, flow_type), flow_name)
