##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
This module provides functionality for locating and loading the Entityhub
project configuration file (`entityhub.yaml`) and turning it into an
[`EnvironmentConfig`][config.environment.EnvironmentConfig].

An example configuration file:

```yaml
project_dir: .
server:
  version: "9.0-5"
  host: localhost
  username: admin
  password: admin
  auth: digest
connections:
  staging:
    port: 8010
  final:
    port: 8011
  admin:
    port: 8002
```
"""
import copy
import logging
import os
from typing import Dict, Optional

import httpx

from entityhub.client.database_client import DatabaseClient
from entityhub.config.config_filepaths import APP_FILENAME, ENTITYHUB_HOME
from entityhub.config.environment import EnvironmentConfig
from entityhub.exceptions import InvalidConfigError
from entityhub.utils import dict_deep_merge, get_yaml_var, load_yaml


LOG: logging.Logger = logging.getLogger(__name__)

CONNECTION_NAMES = ("staging", "final", "admin")

DEFAULT_SERVER_SETTINGS: Dict = {
    "host": "localhost",
    "scheme": "http",
    "auth": "digest",
    "username": None,
    "password": None,
    "timeout": 60.0,
}


def load_config(filepath: str) -> Optional[Dict]:
    """
    Reads an Entityhub YAML configuration file and returns its contents as a dictionary.

    Args:
        filepath: The path to the YAML configuration file.

    Returns:
        A dictionary containing the contents of the YAML file or None if file doesn't exist.
    """
    if not os.path.isfile(filepath):
        LOG.info(f"No config file at {filepath}")
        return None
    LOG.info(f"Reading config from file {filepath}")
    return load_yaml(filepath) or {}


def find_config_file(path: str = None) -> Optional[str]:
    """
    Locate the Entityhub configuration file.

    If `path` points at a file, that file is used. If it points at a directory,
    only that directory is checked for `entityhub.yaml`. Without a `path` the
    current working directory is checked first, then `~/.entityhub`.

    Args:
        path: A specific file or directory to look in.

    Returns:
        The full path to the configuration file if found, otherwise `None`.
    """
    if path is not None:
        if os.path.isfile(path):
            return os.path.abspath(path)
        app_path = os.path.join(path, APP_FILENAME)
        return os.path.abspath(app_path) if os.path.isfile(app_path) else None

    for directory in (os.getcwd(), ENTITYHUB_HOME):
        app_path = os.path.join(directory, APP_FILENAME)
        if os.path.isfile(app_path):
            return app_path

    return None


def _build_client(name: str, server: Dict, overrides: Dict, transport: httpx.BaseTransport = None) -> DatabaseClient:
    """
    Build the client for one named connection.

    Args:
        name: The connection's name ("staging", "final" or "admin").
        server: The shared server settings.
        overrides: The connection's own settings, which win over `server`.
        transport: An optional httpx transport handed to the client.

    Returns:
        A `DatabaseClient` for the connection.

    Raises:
        InvalidConfigError: If the connection has no port.
    """
    settings = copy.deepcopy(DEFAULT_SERVER_SETTINGS)
    dict_deep_merge(settings, {key: value for key, value in server.items() if key != "version"})
    dict_deep_merge(settings, overrides or {})

    port = get_yaml_var(settings, "port", None)
    if port is None:
        raise InvalidConfigError(f"The '{name}' connection needs a port.")

    return DatabaseClient(
        host=settings["host"],
        port=int(port),
        username=settings["username"],
        password=settings["password"],
        auth=settings["auth"],
        scheme=settings["scheme"],
        timeout=float(settings["timeout"]),
        name=name,
        transport=transport,
    )


def environment_from_dict(
    config: Dict, base_dir: str = None, transport: httpx.BaseTransport = None
) -> EnvironmentConfig:
    """
    Build an `EnvironmentConfig` from an already loaded configuration dictionary.

    Args:
        config: The configuration contents.
        base_dir: Directory that a relative `project_dir` is resolved against.
            Defaults to the current working directory.
        transport: An optional httpx transport handed to every client.

    Returns:
        The resolved environment.

    Raises:
        InvalidConfigError: If the server version or a connection port is missing.
    """
    base_dir = base_dir or os.getcwd()
    project_dir = os.path.join(base_dir, get_yaml_var(config, "project_dir", "."))

    server = get_yaml_var(config, "server", {})
    version = get_yaml_var(server, "version", None)
    if version is None:
        raise InvalidConfigError("The configuration must set 'server.version'.")

    connections = get_yaml_var(config, "connections", {})
    clients = {
        name: _build_client(name, server, get_yaml_var(connections, name, {}), transport=transport)
        for name in CONNECTION_NAMES
    }

    return EnvironmentConfig(
        project_dir=project_dir,
        server_version=version,
        staging_client=clients["staging"],
        final_client=clients["final"],
        admin_client=clients["admin"],
    )


def load_environment(path: str = None, transport: httpx.BaseTransport = None) -> EnvironmentConfig:
    """
    Find the configuration file, read it, and build the environment it describes.

    Args:
        path: A configuration file or a directory holding one. See `find_config_file`.
        transport: An optional httpx transport handed to every client.

    Returns:
        The resolved environment.

    Raises:
        InvalidConfigError: If no configuration file could be found or it is incomplete.
    """
    config_path = find_config_file(path)
    if config_path is None:
        raise InvalidConfigError(
            f"Could not find {APP_FILENAME}. Pass --config or create one in the current directory."
        )
    config = load_config(config_path)
    return environment_from_dict(config, base_dir=os.path.dirname(config_path), transport=transport)
