##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
The `generation` package regenerates the server-side artifacts derived from a
project's entity definitions.

Modules:
    artifact_generator.py: Defines [`ArtifactGenerator`][generation.artifact_generator.ArtifactGenerator],
        which drives both generation pipelines and persists their output.
    generators.py: Clients for the `search-options-generator` and `db-configs`
        resource extensions.
    modules_loader.py: Uploads generated modules on a bounded thread pool and
        tracks when each was last uploaded.
"""
