##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
The `client` package provides the HTTP client used to reach the database's REST servers.

Modules:
    database_client.py: Defines [`DatabaseClient`][client.database_client.DatabaseClient].
"""

from entityhub.client.database_client import DatabaseClient


__all__ = ["DatabaseClient"]
