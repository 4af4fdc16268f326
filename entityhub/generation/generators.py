##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
This module defines the clients of the two remote artifact generators.

Both are server-side resource extensions that accept the JSON array of raw
entity definitions and answer with one text document: search options for
`search-options-generator`, database index configuration for `db-configs`.
What they do with the definitions is up to the server.
"""

import logging
from typing import Any, List

from entityhub.exceptions import GenerationError


LOG = logging.getLogger("entityhub")


class ResourceGenerator:
    """
    Posts raw entity definitions to a named resource and returns the generated document.

    Attributes:
        NAME: The name of the resource extension on the server.
        client (client.database_client.DatabaseClient): The connection the resource is called on.

    Methods:
        generate: Run the generator over a list of raw entity definitions.
    """

    NAME: str = None
    DESCRIPTION: str = "artifact"

    def __init__(self, client: Any):
        """
        Initialize the generator.

        Args:
            client (client.database_client.DatabaseClient): The connection to call the resource on.
        """
        self.client = client

    def generate(self, entities: List[Any]) -> str:
        """
        Run the generator.

        Args:
            entities: The raw entity definition documents.

        Returns:
            The text of the first result item.

        Raises:
            GenerationError: If the server returned no result.
            httpx.HTTPError: If the request failed.
        """
        LOG.debug(f"Sending {len(entities)} entity definitions to '{self.NAME}'.")
        results = self.client.post_resource(self.NAME, entities)
        if not results:
            raise GenerationError(f"Unable to generate {self.DESCRIPTION}: '{self.NAME}' returned no result.")
        if len(results) > 1:
            LOG.warning(f"'{self.NAME}' returned {len(results)} results; only the first one is used.")
        return results[0]


class SearchOptionsGenerator(ResourceGenerator):
    """Generates the search options document from the entity definitions."""

    NAME = "search-options-generator"
    DESCRIPTION = "search options"


class DbIndexGenerator(ResourceGenerator):
    """Generates the database index configuration from the entity definitions."""

    NAME = "db-configs"
    DESCRIPTION = "database indexes"
