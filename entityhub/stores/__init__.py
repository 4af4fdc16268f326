##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
The `stores` package contains the classes that read and write a project's
entity files on disk.

Modules:
    entity_layouts.py: The legacy (directory-only) and current (`*.entity.json`)
        layouts, and `select_layout` to pick one from a server version.
    entity_definition_store.py: Defines
        [`EntityDefinitionStore`][stores.entity_definition_store.EntityDefinitionStore],
        which lists, saves and deletes entity definitions.
    ui_metadata_store.py: Defines [`UIMetadataStore`][stores.ui_metadata_store.UIMetadataStore],
        which manages the shared UI layout file.
"""
