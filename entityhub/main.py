##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
The `entityhub` console script.

Parses the command line, configures the package logger and runs the chosen
command. An error raised by a command is logged and turns into exit code 1;
its traceback is only shown at DEBUG level.
"""

import logging
import sys
import traceback
from typing import List

from entityhub.cli.argparse_main import build_main_parser
from entityhub.common.enums import ReturnCode
from entityhub.exceptions import EntityHubError
from entityhub.log_formatter import setup_logging


LOG = logging.getLogger("entityhub")


def main(argv: List[str] = None):
    """
    Run one `entityhub` command and exit with its return code.

    Args:
        argv: The command line without the program name. Defaults to `sys.argv[1:]`.

    Returns:
        `ReturnCode.ERROR` after printing the help when there are no arguments.
    """
    argv = sys.argv[1:] if argv is None else argv
    parser = build_main_parser()
    if not argv:
        parser.print_help(sys.stdout)
        return ReturnCode.ERROR
    args = parser.parse_args(argv)

    setup_logging(logger=LOG, log_level=args.level, colors=True)

    try:
        args.func(args)
    except EntityHubError as excpt:
        LOG.error(str(excpt))
        sys.exit(ReturnCode.ERROR)
    # Top of the program stack: anything else is unexpected but still reported
    except Exception as excpt:  # pylint: disable=broad-except
        LOG.debug(traceback.format_exc())
        LOG.error(f"{type(excpt).__name__}: {excpt}")
        sys.exit(ReturnCode.ERROR)

    sys.exit(ReturnCode.OK)


if __name__ == "__main__":
    main()
