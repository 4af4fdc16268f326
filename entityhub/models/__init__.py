##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
The `models` package holds the in-memory representations Entityhub works with.

Modules:
    entity_definition.py: The [`EntityDefinition`][models.entity_definition.EntityDefinition]
        dataclass, an entity plus its flows and UI metadata.
    flow_definition.py: The [`FlowDefinition`][models.flow_definition.FlowDefinition]
        dataclass describing one input or harmonize flow.
    plugin.py: The [`PluginModel`][models.plugin.PluginModel] dataclass for a flow plugin file.
"""

from entityhub.models.entity_definition import EntityDefinition
from entityhub.models.flow_definition import FlowDefinition
from entityhub.models.plugin import PluginModel


__all__ = ["EntityDefinition", "FlowDefinition", "PluginModel"]
