##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Fixture modules shared by the whole test suite. Every `.py` file in this
directory is loaded as a pytest plugin by `tests/conftest.py`.

Fixtures must be prefixed with the name of the file that defines them. For
instance, everything in `project.py` starts with "project_":

```title="project.py"
import pytest

@pytest.fixture
def project_dir(tmp_path):
    return str(tmp_path / "project")
```
"""
