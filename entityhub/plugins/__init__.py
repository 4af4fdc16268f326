##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
The `plugins` package handles editing individual flow plugin files.

Modules:
    plugin_editor.py: Defines [`PluginEditor`][plugins.plugin_editor.PluginEditor]
        and the module validators it delegates to.
"""
