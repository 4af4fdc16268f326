##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Module for project-wide utility functions.
"""
import json
import logging
import os
from typing import Any, Dict, List

import yaml

from entityhub.exceptions import MalformedDefinitionError


LOG = logging.getLogger(__name__)


def load_yaml(filepath: str) -> Dict:
    """
    Safely read a YAML file and return its contents.

    Args:
        filepath: The file path to the YAML file to be read.

    Returns:
        A dict representing the contents of the YAML file.
    """
    with open(filepath, "r") as _file:
        return yaml.safe_load(_file)


def get_yaml_var(entry: Dict[str, Any], var: str, default: Any) -> Any:
    """
    Retrieve the value associated with a specified key from a YAML dictionary.

    Args:
        entry: A dictionary representing the contents of a YAML file.
        var: The key to retrieve from the entry.
        default: The default value to return if the key is not found.

    Returns:
        The value associated with `var` in the entry, or `default` if not found.
    """
    try:
        value = entry[var]
    except (TypeError, KeyError):
        return default
    return default if value is None else value


def dict_deep_merge(dict_a: Dict, dict_b: Dict):
    """
    Recursively merges `dict_b` into `dict_a`.

    Nested dictionaries are merged key by key; any other value in `dict_b`
    replaces the one in `dict_a`.

    Args:
        dict_a: The dictionary that will be merged into.
        dict_b: The dictionary to merge into `dict_a`.
    """
    for key, value in dict_b.items():
        if isinstance(dict_a.get(key), dict) and isinstance(value, dict):
            dict_deep_merge(dict_a[key], value)
        else:
            dict_a[key] = value


def list_direct_folders(dirpath: str) -> List[str]:
    """
    List the names of the immediate subdirectories of `dirpath`.

    The names are sorted so that every listing of the same tree comes back
    in the same order.

    Args:
        dirpath: The directory to look in.

    Returns:
        A sorted list of subdirectory names. Empty if `dirpath` doesn't exist.
    """
    if not os.path.isdir(dirpath):
        LOG.debug(f"No directory at '{dirpath}'.")
        return []
    return sorted(entry.name for entry in os.scandir(dirpath) if entry.is_dir())


def list_files_with_suffix(dirpath: str, suffix: str) -> List[str]:
    """
    List the files directly inside `dirpath` whose names end with `suffix`.

    Args:
        dirpath: The directory to look in.
        suffix: The filename ending to match (e.g. ".entity.json").

    Returns:
        A sorted list of absolute file paths.
    """
    if not os.path.isdir(dirpath):
        return []
    return sorted(
        os.path.abspath(entry.path) for entry in os.scandir(dirpath) if entry.is_file() and entry.name.endswith(suffix)
    )


def ensure_directory_exists(dirpath: str) -> bool:
    """
    Ensure that `dirpath` exists, creating any missing parents.

    Args:
        dirpath: The directory that needs to exist.

    Returns:
        True if the directory already existed. False otherwise.
    """
    if not os.path.exists(dirpath):
        LOG.info(f"making directories to {dirpath}.")
        os.makedirs(dirpath)
        return False
    return True


def read_json_file(filepath: str) -> Any:
    """
    Read and parse a JSON document from disk.

    Args:
        filepath: The path to the JSON file.

    Returns:
        The parsed JSON value.

    Raises:
        MalformedDefinitionError: If the file content isn't valid UTF-8 encoded JSON.
        OSError: If the file can't be read.
    """
    with open(filepath, "r", encoding="utf-8") as json_file:
        try:
            return json.load(json_file)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise MalformedDefinitionError(filepath, str(exc)) from exc


def write_json_file(filepath: str, data: Any):
    """
    Write `data` to `filepath` as pretty-printed JSON, replacing any existing content.

    The parent directory is created if needed and the write goes through a
    temporary file so readers never see a half-written document.

    Args:
        filepath: The path to the JSON file to write.
        data: The JSON-serializable value to write.
    """
    ensure_directory_exists(os.path.dirname(os.path.abspath(filepath)))
    temp_filepath = f"{filepath}.tmp"
    with open(temp_filepath, "w", encoding="utf-8") as json_file:
        json.dump(data, json_file, indent=2)
    os.replace(temp_filepath, filepath)
    LOG.debug(f"Data successfully dumped to {filepath}.")


def write_text_file(filepath: str, content: str):
    """
    Write `content` verbatim to `filepath`, creating the parent directory if needed.

    Args:
        filepath: The path to the file to write.
        content: The text to write.
    """
    ensure_directory_exists(os.path.dirname(os.path.abspath(filepath)))
    with open(filepath, "w", encoding="utf-8") as text_file:
        text_file.write(content)


def read_properties(filepath: str) -> Dict[str, str]:
    """
    Read a `key=value` properties file.

    Blank lines and lines starting with `#` or `!` are ignored.

    Args:
        filepath: The path to the properties file.

    Returns:
        A dictionary of the properties. Empty if the file doesn't exist.
    """
    properties = {}
    if not os.path.isfile(filepath):
        return properties
    with open(filepath, "r", encoding="utf-8") as props_file:
        for line in props_file:
            line = line.strip()
            if not line or line[0] in "#!":
                continue
            key, sep, value = line.partition("=")
            if not sep:
                key, _, value = line.partition(":")
            properties[key.strip()] = value.strip()
    return properties


def write_properties(filepath: str, properties: Dict[str, Any]):
    """
    Write a dictionary to a `key=value` properties file.

    Args:
        filepath: The path to the properties file.
        properties: The properties to write. Values are converted with `str`.
    """
    ensure_directory_exists(os.path.dirname(os.path.abspath(filepath)))
    with open(filepath, "w", encoding="utf-8") as props_file:
        for key, value in properties.items():
            props_file.write(f"{key}={value}\n")
