##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
This module houses the dataclass describing a flow that belongs to an entity.
"""

from dataclasses import asdict, dataclass
from typing import Dict, Optional

from entityhub.common.enums import CodeFormat, DataFormat, FlowType


@dataclass
class FlowDefinition:
    """
    A named data-transformation pipeline scoped to one entity.

    A flow is identified by the triple (`entity_name`, `flow_type`, `flow_name`).

    Attributes:
        entity_name: The name of the entity this flow belongs to.
        flow_name: The name of the flow.
        flow_type: Whether this is an input or a harmonize flow.
        code_format: The language of the flow's plugins.
        data_format: The document format the flow produces.
        use_es_model: Whether the flow's plugins are generated from the entity model.
        flow_dir: The directory holding the flow on disk, if known.
    """

    entity_name: str = None
    flow_name: str = None
    flow_type: FlowType = FlowType.INPUT
    code_format: CodeFormat = CodeFormat.JAVASCRIPT
    data_format: DataFormat = DataFormat.JSON
    use_es_model: bool = False
    flow_dir: Optional[str] = None

    def __post_init__(self):
        self.flow_type = FlowType(self.flow_type)
        self.code_format = CodeFormat(self.code_format)
        self.data_format = DataFormat(self.data_format)

    def to_dict(self) -> Dict:
        """
        Convert the flow to a JSON-friendly dictionary.

        Returns:
            The flow as a dictionary with enum members replaced by their values.
        """
        data = asdict(self)
        data["flow_type"] = self.flow_type.value
        data["code_format"] = self.code_format.value
        data["data_format"] = self.data_format.value
        return data
