##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Merlin
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Merlin.
##############################################################################

"""
Console logging for the `entityhub` command.

Library modules only create loggers. The handler, format and colors are
installed here, by the CLI entry point.
"""

import logging
import sys

import coloredlogs


LOG_FORMAT = "[%(asctime)s: %(levelname)s] %(message)s"
DEBUG_LOG_FORMAT = "[%(asctime)s: %(levelname)s] [%(name)s %(module)s:%(lineno)d] %(message)s"


def setup_logging(logger: logging.Logger, log_level: str = "INFO", colors: bool = True):
    """
    Send `logger`'s records to stdout at `log_level`.

    Calling it again replaces the handler installed by the previous call
    rather than adding a second one. Records stop propagating to the root logger.

    Args:
        logger: The package logger.
        log_level: Name of the level, in any case. DEBUG also shows where each record came from.
        colors: Colorize the output with coloredlogs.
    """
    log_level = log_level.upper()
    fmt = DEBUG_LOG_FORMAT if log_level == "DEBUG" else LOG_FORMAT

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    if colors:
        coloredlogs.install(level=log_level, logger=logger, fmt=fmt, stream=sys.stdout)
    else:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(fmt))
        logger.addHandler(handler)

    logger.setLevel(log_level)
    logger.propagate = False
