##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""This module provides enumerations shared across Entityhub."""
from enum import Enum, IntEnum


__all__ = ("ReturnCode", "FlowType", "CodeFormat", "DataFormat", "GenerationStatus")


class ReturnCode(IntEnum):
    """
    Enum for Entityhub CLI return codes.

    Attributes:
        OK (int): Indicates a successful operation. Numeric value: 0.
        ERROR (int): Indicates a general error occurred. Numeric value: 1.
    """

    OK: int = 0
    ERROR: int = 1


class FlowType(str, Enum):
    """
    The two kinds of flow that can hang off an entity.

    Attributes:
        INPUT: Ingests raw data for an entity.
        HARMONIZE: Canonicalizes previously ingested data.
    """

    INPUT = "input"
    HARMONIZE = "harmonize"


class CodeFormat(str, Enum):
    """Languages a flow's plugins can be written in."""

    JAVASCRIPT = "sjs"
    XQUERY = "xqy"


class DataFormat(str, Enum):
    """Document formats a flow can produce."""

    JSON = "json"
    XML = "xml"


class GenerationStatus(str, Enum):
    """
    Outcome of an artifact generation step.

    Attributes:
        GENERATED: The remote generator ran and the artifacts were written.
        SKIPPED: There was nothing to generate from; nothing was written.
        FAILED: Generation was attempted and failed; existing artifacts were left as-is.
    """

    GENERATED = "generated"
    SKIPPED = "skipped"
    FAILED = "failed"
