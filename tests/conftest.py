##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
This module contains pytest fixtures to be used throughout the entire test suite.
"""
import os
from glob import glob

import pytest

from tests.fixture_types import FixtureCallable, FixtureStr


# pylint: disable=redefined-outer-name


#######################################
# Loading in Module Specific Fixtures #
#######################################

fixture_glob = os.path.join("tests", "fixtures", "**", "*.py")
pytest_plugins = [
    fixture_file.replace(os.sep, ".").replace(".py", "")
    for fixture_file in glob(fixture_glob, recursive=True)
    if not fixture_file.endswith("__init__.py")
]


#######################################
######### Fixture Definitions #########
#######################################


@pytest.fixture(scope="session")
def path_to_entityhub_codebase() -> FixtureStr:
    """
    This fixture returns the absolute path to the 'entityhub' directory at the
    root of the repository.

    Returns:
        The absolute path to the 'entityhub' package.
    """
    return os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "entityhub"))


@pytest.fixture
def create_testing_dir(tmp_path) -> FixtureCallable:
    """
    Fixture to create a directory inside this test's temporary directory.

    Args:
        tmp_path: PyTest's per-test temporary directory.

    Returns:
        A function that creates a directory and returns its path.
    """

    def _create_testing_dir(sub_dir: str) -> str:
        testing_dir = os.path.join(str(tmp_path), sub_dir)
        os.makedirs(testing_dir, exist_ok=True)
        return testing_dir

    return _create_testing_dir
