##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Entityhub: entity definitions and their derived server artifacts.

The library entry points are
[`EntityCatalog`][entity_managers.entity_catalog.EntityCatalog],
[`ArtifactGenerator`][generation.artifact_generator.ArtifactGenerator] and
[`PluginEditor`][plugins.plugin_editor.PluginEditor]; the `entityhub` console
script wraps them.
"""


__version__ = "0.4.0"
VERSION = __version__
