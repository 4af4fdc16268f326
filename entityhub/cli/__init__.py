##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
The `cli` package contains the argument parser and every command of the
`entityhub` command-line interface.

Modules:
    argparse_main.py: Builds the main parser from every registered command.
    utils.py: Helpers shared by the command handlers.
"""
