##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Utility functions for our test suite.
"""

import json
import os
from typing import Any, Union


def write_file(filepath: str, content: Union[str, bytes]) -> str:
    """
    Write `content` to `filepath`, creating parent directories as needed.

    :param filepath: The file to write
    :param content: The text to write, or raw bytes
    :returns: The path that was written
    """
    os.makedirs(os.path.dirname(filepath), exist_ok=True)
    with open(filepath, "wb" if isinstance(content, bytes) else "w") as _file:
        _file.write(content)
    return filepath


def write_entity_file(project_dir: str, entity_dir: str, node: Any, filename: str = None) -> str:
    """
    Write an entity definition document inside `plugins/entities/<entity_dir>/`.

    :param project_dir: The project root
    :param entity_dir: The name of the entity directory
    :param node: The JSON document to write
    :param filename: The definition file's name. Defaults to `<entity_dir>.entity.json`
    :returns: The path of the definition file
    """
    filename = filename or f"{entity_dir}.entity.json"
    filepath = os.path.join(project_dir, "plugins", "entities", entity_dir, filename)
    return write_file(filepath, json.dumps(node))


def entity_node(title: str, **definitions) -> dict:
    """
    Build a minimal entity definition document.

    :param title: The entity's title
    :param definitions: Extra top-level keys for the document
    :returns: The document
    """
    node = {"info": {"title": title, "version": "0.0.1"}, "definitions": {title: {"properties": {}}}}
    node.update(definitions)
    return node


def read_json(filepath: str) -> Any:
    """
    Load a JSON file.

    :param filepath: The file to load
    :returns: The parsed document
    """
    with open(filepath, "r") as _file:
        return json.load(_file)
