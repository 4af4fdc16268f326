##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
This module houses the dataclass for a single flow plugin source file.
"""

import os
from dataclasses import dataclass


@dataclass
class PluginModel:
    """
    A flow plugin file being edited.

    Attributes:
        plugin_path: Absolute path of the plugin file on disk.
        module_name: The module name the plugin is declared under (e.g. "content.sjs").
        plugin_type: The plugin's type string; its suffix decides the language.
        file_contents: The plugin source.
    """

    plugin_path: str
    module_name: str
    plugin_type: str
    file_contents: str

    @classmethod
    def from_file(cls, plugin_path: str, file_contents: str = None) -> "PluginModel":
        """
        Describe a plugin file on disk.

        The module name is the file's base name and the plugin type is its
        extension, e.g. "content.sjs" and "sjs".

        Args:
            plugin_path: Path of the plugin file.
            file_contents: The plugin source. Read from `plugin_path` if not given.

        Returns:
            The plugin.
        """
        plugin_path = os.path.abspath(plugin_path)
        if file_contents is None:
            with open(plugin_path, "r", encoding="utf-8") as plugin_file:
                file_contents = plugin_file.read()
        module_name = os.path.basename(plugin_path)
        plugin_type = os.path.splitext(module_name)[1].lstrip(".")
        return cls(plugin_path, module_name, plugin_type, file_contents)
