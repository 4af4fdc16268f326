##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
The `common` package provides shared definitions used across Entityhub.

Modules:
    enums.py: Defines enumerations for flow types, code and data formats,
        generation outcomes and CLI return codes.
"""
