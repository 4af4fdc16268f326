##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
The `entity_managers` package contains the high-level entry point for working
with a project's entities.

Modules:
    entity_catalog.py: Defines [`EntityCatalog`][entity_managers.entity_catalog.EntityCatalog],
        which combines definition files, the UI layout file and flow directories into
        one list of entities and provides CRUD for entities and flows.
"""
