##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Module of all Entityhub-specific exception types.
"""

__all__ = (
    "EntityHubError",
    "MalformedDefinitionError",
    "GenerationError",
    "InvalidConfigError",
    "EntityNotFoundError",
)


class EntityHubError(Exception):
    """
    Base class for every error raised by Entityhub.
    """


class MalformedDefinitionError(EntityHubError):
    """
    Exception to signal that a JSON document on disk (an entity definition
    or the shared UI layout file) could not be parsed.

    Attributes:
        path: The file that failed to parse.
        reason: A short description of what went wrong.
    """

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Malformed JSON document '{path}': {reason}")


class GenerationError(EntityHubError):
    """
    Exception to signal that the remote artifact generator returned
    nothing usable.
    """


class InvalidConfigError(EntityHubError):
    """
    Exception to signal that the project configuration file is missing
    required settings.
    """


class EntityNotFoundError(EntityHubError):
    """
    Exception to signal that an entity or flow requested from the CLI does
    not exist. The library itself reports absence with `None`.
    """
