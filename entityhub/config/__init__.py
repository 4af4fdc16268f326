##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Used to store the project configuration.

The `config` package resolves the project and server connections every Entityhub
operation runs against. Configuration is read from an `entityhub.yaml` file and
turned into an [`EnvironmentConfig`][config.environment.EnvironmentConfig] that is
passed explicitly to the components that need it.

Modules:
    config_filepaths.py: Names of the files and directories that make up a project.
    configfile.py: Locates and loads `entityhub.yaml`.
    environment.py: Defines `EnvironmentConfig`.
"""

from entityhub.config.environment import EnvironmentConfig


__all__ = ["EnvironmentConfig"]
