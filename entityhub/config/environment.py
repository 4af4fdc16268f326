##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
This module defines `EnvironmentConfig`, the resolved project/environment that
every Entityhub operation runs against.

An `EnvironmentConfig` is always handed to the components that need it; nothing
in Entityhub looks one up from global state.
"""

import os
from typing import Any, Optional

from entityhub.config.config_filepaths import (
    ENTITIES_DIR,
    ENTITY_CONFIG_DIR,
    ENTITY_DATABASES_DIR,
    ENTITY_SEARCH_OPTIONS_FILE,
    MODULES_DEPLOY_TIMESTAMPS_FILE,
    PLUGINS_DIR,
    STAGED_ARTIFACTS_DIR,
    TMP_DIR,
    UI_LAYOUT_FILE,
    USER_CONFIG_DIR,
)


class EnvironmentConfig:  # pylint: disable=too-many-instance-attributes
    """
    The project and server connections Entityhub operates on.

    Attributes:
        project_dir: Absolute path to the project root.
        server_version: Version string of the target database server.
        staging_client (client.database_client.DatabaseClient): Connection used to
            generate search options.
        final_client (client.database_client.DatabaseClient): Connection used to
            generate index configuration and install modules.
        admin_client (client.database_client.DatabaseClient): Connection used to
            validate flow plugins.

    Methods:
        close: Close every client connection.
    """

    def __init__(
        self,
        project_dir: str,
        server_version: str,
        staging_client: Optional[Any] = None,
        final_client: Optional[Any] = None,
        admin_client: Optional[Any] = None,
    ):
        """
        Initialize the environment.

        Args:
            project_dir: Path to the project root. Made absolute.
            server_version: Version string of the target database server.
            staging_client: Connection to the staging REST server.
            final_client: Connection to the final REST server.
            admin_client: Connection used for module validation.
        """
        self.project_dir = os.path.abspath(project_dir)
        self.server_version = str(server_version)
        self.staging_client = staging_client
        self.final_client = final_client
        self.admin_client = admin_client

    def __repr__(self) -> str:
        return f"EnvironmentConfig(project_dir={self.project_dir}, server_version={self.server_version})"

    @property
    def entities_dir(self) -> str:
        """Directory holding one subdirectory per entity."""
        return os.path.join(self.project_dir, PLUGINS_DIR, ENTITIES_DIR)

    @property
    def legacy_entities_dir(self) -> str:
        """Directory whose subdirectory names are the legacy entities."""
        return self.entities_dir

    @property
    def user_config_dir(self) -> str:
        """Directory holding user-level configuration such as the UI layout file."""
        return os.path.join(self.project_dir, USER_CONFIG_DIR)

    @property
    def ui_layout_file(self) -> str:
        """The shared UI layout file."""
        return os.path.join(self.user_config_dir, UI_LAYOUT_FILE)

    @property
    def entity_config_dir(self) -> str:
        """Directory receiving generated entity artifacts."""
        return os.path.join(self.project_dir, ENTITY_CONFIG_DIR)

    @property
    def search_options_file(self) -> str:
        """The generated search options file."""
        return os.path.join(self.entity_config_dir, ENTITY_SEARCH_OPTIONS_FILE)

    @property
    def entity_database_dir(self) -> str:
        """Directory receiving the generated database index configuration."""
        return os.path.join(self.entity_config_dir, ENTITY_DATABASES_DIR)

    @property
    def modules_deploy_timestamps_file(self) -> str:
        """Properties file recording when each module was last deployed."""
        return os.path.join(self.project_dir, TMP_DIR, MODULES_DEPLOY_TIMESTAMPS_FILE)

    @property
    def staged_artifacts_dir(self) -> str:
        """Directory generated artifacts are written to before they replace the published ones."""
        return os.path.join(self.project_dir, TMP_DIR, STAGED_ARTIFACTS_DIR)

    def close(self):
        """Close every client connection that was opened for this environment."""
        for client in {id(c): c for c in (self.staging_client, self.final_client, self.admin_client) if c}.values():
            client.close()
