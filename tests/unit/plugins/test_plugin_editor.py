##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Tests for the `plugin_editor.py` module.
"""

import os
from unittest.mock import MagicMock

import pytest

from entityhub.exceptions import EntityHubError
from entityhub.models.plugin import PluginModel
from entityhub.plugins.plugin_editor import PluginEditor, RestModuleValidator, UserModuleValidator
from tests.fixture_types import FixtureEnv
from tests.utils import write_file


class TestValidate:
    """
    Tests for `PluginEditor.validate`.
    """

    @pytest.mark.parametrize(
        "module_name, plugin_type, expected_name, expected_type",
        [
            ("content.sjs", "sjs", "content", "javascript"),
            ("headers.xqy", "xqy", "headers", "xquery"),
            ("triples", "harmonize-sjs", "triples", "javascript"),
            ("writer.sjs.bak", "xqy", "writer.sjs.bak", "xquery"),
        ],
    )
    def test_validate_strips_extension_and_classifies(
        self, module_name: str, plugin_type: str, expected_name: str, expected_type: str
    ):
        """
        Test that the module name loses its script extension and the language comes from the type.

        Args:
            module_name: The plugin's declared module name.
            plugin_type: The plugin's type string.
            expected_name: The module name the validator should receive.
            expected_type: The language the validator should receive.
        """
        validator = MagicMock(spec=UserModuleValidator)
        validator.validate_user_module.return_value = {"valid": True}
        plugin = PluginModel("/proj/plugin", module_name, plugin_type, "source code")

        report = PluginEditor(validator).validate("Customer", "load", plugin)

        assert report == {"valid": True}
        validator.validate_user_module.assert_called_once_with(
            "Customer", "load", expected_name, expected_type, "source code"
        )

    def test_for_environment_uses_admin_client(self, project_env: FixtureEnv):
        """
        Test that an editor built for an environment validates over the admin connection.

        Args:
            project_env: An environment for a current-format server.
        """
        project_env.admin_client.post_resource.return_value = ['{"errors": []}']
        plugin = PluginModel("/proj/content.sjs", "content.sjs", "sjs", "var x;")

        report = PluginEditor.for_environment(project_env).validate("Customer", "load", plugin)

        assert report == {"errors": []}
        project_env.admin_client.post_resource.assert_called_once_with(
            "ml:validate",
            {"content": "var x;"},
            params={"entity": "Customer", "flow": "load", "plugin": "content", "type": "javascript"},
        )


def test_rest_validator_empty_response():
    """
    Test that an empty validation response raises.
    """
    client = MagicMock()
    client.post_resource.return_value = []
    with pytest.raises(EntityHubError, match="no validation report"):
        RestModuleValidator(client).validate_user_module("Customer", "load", "content", "javascript", "")


class TestSave:
    """
    Tests for `PluginEditor.save`.
    """

    def test_save_truncates(self, tmp_path):
        """
        Test that saving shorter content leaves nothing of the old content behind.

        Args:
            tmp_path: PyTest's temporary directory fixture.
        """
        plugin_path = write_file(os.path.join(str(tmp_path), "content.sjs"), "a much longer original source")

        PluginEditor(MagicMock()).save(PluginModel(plugin_path, "content.sjs", "sjs", "short"))

        with open(plugin_path, "r") as plugin_file:
            assert plugin_file.read() == "short"

    def test_save_missing_file(self, tmp_path):
        """
        Test that saving to a file that doesn't exist raises.

        Args:
            tmp_path: PyTest's temporary directory fixture.
        """
        plugin_path = os.path.join(str(tmp_path), "missing.sjs")
        with pytest.raises(FileNotFoundError):
            PluginEditor(MagicMock()).save(PluginModel(plugin_path, "missing.sjs", "sjs", "x"))
        assert not os.path.exists(plugin_path)
