##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
The `flows` package connects entities to their flows.

Modules:
    collaborators.py: Interfaces for the flow lister, scaffolding engine and file
        watcher, with plain filesystem implementations.
    flow_linker.py: Defines [`FlowLinker`][flows.flow_linker.FlowLinker], which attaches
        flows to entity records.
"""
