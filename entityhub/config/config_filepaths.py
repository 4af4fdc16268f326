##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
This module stores constants representing the file and directory names that
make up an Entityhub project, along with where the configuration file lives.
"""

import os


APP_FILENAME: str = "entityhub.yaml"
USER_HOME: str = os.path.expanduser("~")
ENTITYHUB_HOME: str = os.path.join(USER_HOME, ".entityhub")

PLUGINS_DIR: str = "plugins"
ENTITIES_DIR: str = "entities"
ENTITY_FILE_EXTENSION: str = ".entity.json"
FLOW_PROPERTIES_EXTENSION: str = ".properties"

USER_CONFIG_DIR: str = "user-config"
UI_LAYOUT_FILE: str = "entities.layout.json"

ENTITY_CONFIG_DIR: str = "entity-config"
ENTITY_SEARCH_OPTIONS_FILE: str = "entity-options.xml"
ENTITY_DATABASES_DIR: str = "databases"
FINAL_DATABASE_FILE: str = "final-database.json"
STAGING_DATABASE_FILE: str = "staging-database.json"

TMP_DIR: str = ".tmp"
MODULES_DEPLOY_TIMESTAMPS_FILE: str = "hub-modules-deploy-timestamps.properties"
STAGED_ARTIFACTS_DIR: str = "staged-artifacts"

LEGACY_SERVER_PREFIX: str = "8"
