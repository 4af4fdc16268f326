##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
This module defines `PluginEditor`, a pass-through for validating and saving
individual flow plugin source files. Plugins are addressed by their explicit
path and are never parsed here.
"""

import json
import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Dict

from entityhub.config.environment import EnvironmentConfig
from entityhub.exceptions import EntityHubError
from entityhub.models.plugin import PluginModel


LOG = logging.getLogger("entityhub")

SCRIPT_EXTENSIONS_REGEX = re.compile(r"\.(sjs|xqy)$")


class UserModuleValidator(ABC):
    """
    Checks a user module against the server's compiler.

    Methods:
        validate_user_module: Validate one plugin source.
    """

    @abstractmethod
    def validate_user_module(  # pylint: disable=too-many-arguments
        self, entity_name: str, flow_name: str, module_name: str, module_type: str, contents: str
    ) -> Dict[str, Any]:
        """
        Validate a plugin source.

        Args:
            entity_name: The entity the plugin's flow belongs to.
            flow_name: The flow the plugin belongs to.
            module_name: The plugin's module name without its extension.
            module_type: Either "javascript" or "xquery".
            contents: The plugin source.

        Returns:
            The validation report returned by the server.
        """
        raise NotImplementedError("Subclasses of `UserModuleValidator` must implement a `validate_user_module` method.")


class RestModuleValidator(UserModuleValidator):
    """
    Validates modules through the `ml:validate` resource extension.

    Attributes:
        client (client.database_client.DatabaseClient): The connection the resource is called on.
    """

    NAME = "ml:validate"

    def __init__(self, client: Any):
        self.client = client

    def validate_user_module(  # pylint: disable=too-many-arguments
        self, entity_name: str, flow_name: str, module_name: str, module_type: str, contents: str
    ) -> Dict[str, Any]:
        params = {"entity": entity_name, "flow": flow_name, "plugin": module_name, "type": module_type}
        results = self.client.post_resource(self.NAME, {"content": contents}, params=params)
        if not results:
            raise EntityHubError(f"'{self.NAME}' returned no validation report for '{module_name}'.")
        return json.loads(results[0])


class PluginEditor:
    """
    Validates and saves flow plugin files.

    Attributes:
        validator: The service plugins are validated against.

    Methods:
        validate: Validate a plugin's source against the server.
        save: Overwrite a plugin file with new contents.
    """

    def __init__(self, validator: UserModuleValidator):
        """
        Initialize the editor.

        Args:
            validator: The service plugins are validated against.
        """
        self.validator = validator

    @classmethod
    def for_environment(cls, env: EnvironmentConfig) -> "PluginEditor":
        """
        Build an editor that validates through the environment's admin connection.

        Args:
            env: The environment to validate against.

        Returns:
            A `PluginEditor`.
        """
        return cls(RestModuleValidator(env.admin_client))

    def validate(self, entity_name: str, flow_name: str, plugin: PluginModel) -> Dict[str, Any]:
        """
        Validate a plugin's source.

        The module name is passed without its `.sjs`/`.xqy` extension, and the
        language is decided purely from whether the plugin type ends with "sjs".

        Args:
            entity_name: The entity the plugin's flow belongs to.
            flow_name: The flow the plugin belongs to.
            plugin: The plugin to validate.

        Returns:
            The validation report.
        """
        module_name = SCRIPT_EXTENSIONS_REGEX.sub("", plugin.module_name)
        module_type = "javascript" if plugin.plugin_type.endswith("sjs") else "xquery"
        LOG.debug(f"Validating {module_type} module '{module_name}' of flow '{flow_name}' for entity '{entity_name}'.")
        return self.validator.validate_user_module(entity_name, flow_name, module_name, module_type, plugin.file_contents)

    def save(self, plugin: PluginModel):
        """
        Overwrite a plugin file with the plugin's contents.

        The file must already exist. Its old content is truncated; there is no backup.

        Args:
            plugin: The plugin to save.

        Raises:
            FileNotFoundError: If there is no file at `plugin.plugin_path`.
        """
        with open(plugin.plugin_path, "r+", encoding="utf-8") as plugin_file:
            plugin_file.write(plugin.file_contents)
            plugin_file.truncate()
        LOG.info(f"Saved plugin {plugin.plugin_path}.")
