##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
This module houses the dataclass that represents an entity definition in memory.

An entity definition is read from a single `*.entity.json` file (current format)
or synthesized from a directory name (legacy format). The structural payload of
the file is never interpreted here beyond its `info.title`; it is carried around
as-is and written back untouched apart from the title.
"""

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from entityhub.common.enums import FlowType
from entityhub.models.flow_definition import FlowDefinition


LOG = logging.getLogger("entityhub")


@dataclass
class EntityDefinition:
    """
    A domain entity plus the flows and UI metadata attached to it.

    Attributes:
        title: The entity's identity. Unique within a project and used as the
            join key between definition files, the UI layout file and flow directories.
        definition: The structural payload of the definition file, passed through unparsed.
        filename: Absolute path of the definition file. `None` until the first save.
        entity_name: Name of the directory the definition lives in. Flows are
            looked up under this name.
        hub_ui: UI-only presentation metadata. `None` when it was never attached.
        input_flows: The entity's input flows.
        harmonize_flows: The entity's harmonize flows.
    """

    title: str
    definition: Dict[str, Any] = field(default_factory=dict)
    filename: Optional[str] = None
    entity_name: Optional[str] = None
    hub_ui: Optional[Any] = None
    input_flows: List[FlowDefinition] = field(default_factory=list)
    harmonize_flows: List[FlowDefinition] = field(default_factory=list)

    def __post_init__(self):
        if self.entity_name is None:
            self.entity_name = self.title

    @property
    def name(self) -> str:
        """The name used to look the entity up, which is its title."""
        return self.title

    @classmethod
    def from_json(cls, filename: str, node: Any, entity_name: str = None) -> Optional["EntityDefinition"]:
        """
        Build an entity from a parsed definition document.

        Args:
            filename: Absolute path the document was read from.
            node: The parsed JSON document.
            entity_name: The directory the document was found in.

        Returns:
            An `EntityDefinition`, or `None` if the document has no `info.title`.
        """
        info = node.get("info") if isinstance(node, dict) else None
        title = info.get("title") if isinstance(info, dict) else None
        if not title:
            LOG.warning(f"Entity definition '{filename}' has no info.title. Skipping it.")
            return None
        return cls(title=title, definition=node, filename=filename, entity_name=entity_name or title)

    @classmethod
    def from_legacy_dir(cls, dirname: str) -> "EntityDefinition":
        """
        Build a bare entity from a legacy entity directory name.

        Args:
            dirname: The name of the entity directory.

        Returns:
            An `EntityDefinition` whose only structural content is its title.
        """
        return cls(title=dirname, definition={"info": {"title": dirname}}, entity_name=dirname)

    def to_json(self) -> Dict[str, Any]:
        """
        Get the structural payload to persist for this entity.

        Returns:
            A copy of the definition with `info.title` set to the entity's title.
        """
        node = copy.deepcopy(self.definition)
        info = node.get("info")
        if not isinstance(info, dict):
            info = node["info"] = {}
        info["title"] = self.title
        return node

    def get_flows(self, flow_type: FlowType) -> List[FlowDefinition]:
        """
        Get the flows of one type.

        Args:
            flow_type: The type of flow wanted.

        Returns:
            The matching list of flows.
        """
        return self.input_flows if FlowType(flow_type) == FlowType.INPUT else self.harmonize_flows

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the entity, with its flows and UI metadata, to a dictionary.

        Returns:
            A JSON-friendly dictionary.
        """
        return {
            "title": self.title,
            "entity_name": self.entity_name,
            "filename": self.filename,
            "definition": self.definition,
            "hub_ui": self.hub_ui,
            "input_flows": [flow.to_dict() for flow in self.input_flows],
            "harmonize_flows": [flow.to_dict() for flow in self.harmonize_flows],
        }
