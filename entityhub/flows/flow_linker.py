##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
This module defines `FlowLinker`, which attaches an entity's input and
harmonize flows to its in-memory record.
"""

import logging

from entityhub.common.enums import FlowType
from entityhub.flows.collaborators import FlowLister
from entityhub.models.entity_definition import EntityDefinition


LOG = logging.getLogger("entityhub")


class FlowLinker:
    """
    Resolves the two flow collections of an entity through a `FlowLister`.

    Attributes:
        project_dir: The project root handed to the flow lister.
        flow_lister: The collaborator that knows where flows live.

    Methods:
        link: Attach both flow collections to an entity.
    """

    def __init__(self, project_dir: str, flow_lister: FlowLister):
        """
        Initialize the linker.

        Args:
            project_dir: The project root.
            flow_lister: The collaborator used to list flows.
        """
        self.project_dir = project_dir
        self.flow_lister = flow_lister

    def link(self, entity: EntityDefinition) -> EntityDefinition:
        """
        Attach the input and harmonize flows of `entity`.

        Both collections are fetched before either is attached, so a failure
        leaves the entity exactly as it was.

        Args:
            entity: The entity to enrich. Flows are looked up under its `entity_name`.

        Returns:
            The same entity, with its flows attached.

        Raises:
            OSError: If either flow listing fails.
        """
        input_flows = self.flow_lister.get_flows(self.project_dir, entity.entity_name, FlowType.INPUT)
        harmonize_flows = self.flow_lister.get_flows(self.project_dir, entity.entity_name, FlowType.HARMONIZE)
        entity.input_flows = list(input_flows)
        entity.harmonize_flows = list(harmonize_flows)
        return entity
